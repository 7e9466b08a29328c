"""Inspection of commit messages with observer notifications."""
from typing import List, Optional

from .commit_message import CommitMessageValidator
from .commit_message.validator import split_lines
from .config import Config
from .models import InspectionResult
from .observers import InspectionObserver
from .verbs import VerbLexicon

# Git's marker below which `git commit --verbose` appends the diff
SCISSORS_LINE = "# ------------------------ >8 ------------------------"


def strip_comments(text: str) -> str:
    """Remove git comment lines and everything below the scissors line."""
    lines = []
    for line in text.split('\n'):
        if line.rstrip('\r') == SCISSORS_LINE:
            break
        if not line.startswith('#'):
            lines.append(line)
    return '\n'.join(lines)


class Inspector:
    """Inspects commit messages according to a configuration.

    The verb lexicon is assembled once when the inspector is created;
    observers are notified after every inspection.

    Attributes:
        config (Config): The resolved configuration
        lexicon (VerbLexicon): Accepted imperative verbs
        validator (CommitMessageValidator): Validator running the checks
        observers (List[InspectionObserver]): Observers to notify
    """

    def __init__(self, config: Optional[Config] = None, lexicon: Optional[VerbLexicon] = None):
        """Initialize the inspector.

        Args:
            config: Configuration; defaults are used if omitted
            lexicon: Verb lexicon; assembled from the configuration if omitted

        Raises:
            ConfigurationError: If the additional verbs file cannot be read
        """
        self.config = config or Config()
        if lexicon is None:
            lexicon = VerbLexicon.from_sources(
                additional_verbs=self.config.additional_verbs,
                path_to_additional_verbs=self.config.path_to_additional_verbs,
            )
        self.lexicon = lexicon
        self.validator = CommitMessageValidator(
            self.lexicon,
            allow_one_liners=self.config.allow_one_liners,
            enforce_sign_off=self.config.enforce_sign_off,
            max_subject_length=self.config.max_subject_length,
            max_body_length=self.config.max_body_line_length,
        )
        self.observers: List[InspectionObserver] = []

    def add_observer(self, observer: InspectionObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: InspectionObserver) -> None:
        self.observers.remove(observer)

    def inspect(self, message: str) -> InspectionResult:
        """Inspect the message and notify observers of the result."""
        result = self.validator.validate(message)

        lines = split_lines(message)
        subject = lines[0] if lines else ""
        for observer in self.observers:
            observer.on_inspection_completed(subject, result)

        return result
