"""Commit message validation."""
from typing import List, Optional

from ..models import InspectionResult, Violation, ViolationKind
from ..verbs import VerbLexicon
from .validation import (
    DEFAULT_MAX_BODY_LINE_LENGTH,
    DEFAULT_MAX_SUBJECT_LENGTH,
    ParsedMessage,
    SubjectHandler,
    create_validation_chain,
)

MERGE_PREFIX = "Merge branch"


def split_lines(text: str) -> List[str]:
    """Split the message into lines without trailing carriage returns.

    The single line break git appends to the message is ignored; an empty
    or blank message has no lines.
    """
    if not text.strip():
        return []
    if text.endswith('\n'):
        text = text[:-1]
    return [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]


def is_merge_commit(text: str) -> bool:
    return text.startswith(MERGE_PREFIX)


class CommitMessageValidator:
    """Validates commit messages against the opinionated style policy."""

    def __init__(
        self,
        lexicon: Optional[VerbLexicon] = None,
        allow_one_liners: bool = False,
        enforce_sign_off: bool = False,
        max_subject_length: int = DEFAULT_MAX_SUBJECT_LENGTH,
        max_body_length: int = DEFAULT_MAX_BODY_LINE_LENGTH,
    ):
        self.lexicon = lexicon if lexicon is not None else VerbLexicon.from_sources()
        self.allow_one_liners = allow_one_liners
        self.enforce_sign_off = enforce_sign_off
        self.max_subject_length = max_subject_length
        self.max_body_line_length = max_body_length
        self.subject_handler = SubjectHandler(self.lexicon, max_subject_length)
        self.validation_chain = create_validation_chain(
            self.lexicon,
            enforce_sign_off=enforce_sign_off,
            max_subject_length=max_subject_length,
            max_body_line_length=max_body_length,
        )

    def check(self, text: str) -> List[Violation]:
        """Check the message and return its violations in the order the checks ran."""
        return self.validate(text).violations

    def validate(self, text: str) -> InspectionResult:
        """Validate a commit message against the policy."""
        if is_merge_commit(text):
            return InspectionResult(exempt=True)

        lines = split_lines(text)

        if not lines:
            return InspectionResult(violations=[Violation(
                kind=ViolationKind.EMPTY_MESSAGE,
                message="The message is empty.",
            )])

        if len(lines) == 1:
            if self.allow_one_liners:
                return InspectionResult(
                    violations=self.subject_handler.handle(ParsedMessage(lines[0]))
                )
            return InspectionResult(violations=[self._too_few_lines(len(lines))])

        if len(lines) == 2:
            return InspectionResult(violations=[self._too_few_lines(len(lines))])

        if lines[1] != '':
            return InspectionResult(violations=[Violation(
                kind=ViolationKind.MISSING_SEPARATOR,
                message=(
                    "Expected an empty line between the subject and the body, "
                    f"but got a second line of length {len(lines[1])}. "
                    "Please separate the subject from the body with an empty line."
                ),
            )])

        parsed = ParsedMessage(subject=lines[0], body_lines=lines[2:])
        return InspectionResult(violations=self.validation_chain.handle(parsed))

    def _too_few_lines(self, count: int) -> Violation:
        hint = "" if self.allow_one_liners else (
            " A message consisting only of a subject is accepted with --allow-one-liners."
        )
        return Violation(
            kind=ViolationKind.TOO_FEW_LINES,
            message=(
                "Expected at least three lines (subject, empty line, body), "
                f"but got: {count}.{hint}"
            ),
        )
