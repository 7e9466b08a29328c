"""Commit message checks using Chain of Responsibility pattern.

Each handler inspects one part of an already tokenized message and
returns its violations. Unlike a fail-fast chain, every handler in the
chain runs and the violations are collected in chain order so that the
author gets all the feedback in one pass.
"""
import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from ..models import Violation, ViolationKind
from ..verbs import VerbLexicon

DEFAULT_MAX_SUBJECT_LENGTH = 50
DEFAULT_MAX_BODY_LINE_LENGTH = 72

ISSUE_SUFFIX_RE = re.compile(r'\s*\(#[a-zA-Z0-9_]+\)$')
WHOLE_WORD_RE = re.compile(r'^[a-zA-Z][a-zA-Z-]+$')
LEADING_WORD_RE = re.compile(r'^([a-zA-Z][a-zA-Z-]+) ')
URL_LINE_RE = re.compile(r'^[a-z]+://\S+$')
LINK_DEFINITION_RE = re.compile(r'^\[[^\]]+\]\s*:\s*[a-z]+://\S+$')
SIGN_OFF_RE = re.compile(r'^\s*Signed-off-by:\s*[^<]+\s*<[^@>, ]+@[^@>, ]+>\s*$')


@dataclass(frozen=True)
class ParsedMessage:
    subject: str
    body_lines: List[str] = field(default_factory=list)


def quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def strip_issue_suffix(subject: str) -> str:
    """Remove a trailing issue or pull request reference such as ``(#123)``."""
    return ISSUE_SUFFIX_RE.sub('', subject)


def extract_first_word(text: str) -> Optional[str]:
    """Return the leading word of letters and dashes, or None if the text does not start with one."""
    if WHOLE_WORD_RE.match(text):
        return text
    match = LEADING_WORD_RE.match(text)
    if match is None:
        return None
    return match.group(1)


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def is_exempt_from_length(line: str) -> bool:
    """Check whether a body line is a bare URL or a link reference definition."""
    trimmed = line.strip()
    return bool(URL_LINE_RE.match(trimmed) or LINK_DEFINITION_RE.match(trimmed))


class ValidationHandler(ABC):
    """Abstract base class for validation handlers."""

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, message: ParsedMessage) -> List[Violation]:
        """Validate and pass on to the next handler, accumulating violations."""
        violations = self.validate(message)
        if self.next_handler:
            violations.extend(self.next_handler.handle(message))
        return violations

    @abstractmethod
    def validate(self, message: ParsedMessage) -> List[Violation]:
        """Validate the parsed commit message."""
        pass


class SubjectHandler(ValidationHandler):
    """Validates length, leading verb, capitalization and punctuation of the subject."""

    def __init__(
        self,
        lexicon: VerbLexicon,
        max_length: int = DEFAULT_MAX_SUBJECT_LENGTH,
        next_handler: Optional[ValidationHandler] = None,
    ):
        super().__init__(next_handler)
        invalid = sorted(verb for verb in lexicon.verbs if not verb or verb != verb.lower())
        if invalid:
            raise ValueError(
                f"Expected only non-empty lowercase verbs in the lexicon, got: {invalid!r}"
            )
        self.lexicon = lexicon
        self.max_length = max_length

    def validate(self, message: ParsedMessage) -> List[Violation]:
        violations: List[Violation] = []
        subject = strip_issue_suffix(message.subject)

        if len(subject) > self.max_length:
            violations.append(Violation(
                kind=ViolationKind.SUBJECT_TOO_LONG,
                message=(
                    f"The subject exceeds the limit of {self.max_length} characters "
                    f"(got: {len(subject)}, JSON: {quote(subject)}). "
                    "Please shorten the subject to make it more succinct."
                ),
            ))

        word = extract_first_word(subject)
        if word is None:
            violations.append(Violation(
                kind=ViolationKind.MISSING_VERB,
                message=(
                    "The subject must start with a verb in imperative mood "
                    f"(e.g. \"Add\", \"Fix\"), but it starts with: {quote(subject)}. "
                    "The first word must consist of letters and dashes and be "
                    "followed by a space."
                ),
            ))
        else:
            capitalized = capitalize(word)
            if word != capitalized:
                violations.append(Violation(
                    kind=ViolationKind.NOT_CAPITALIZED,
                    message=(
                        "The subject must start with a capitalized word, "
                        f"but the current first word is: {quote(word)}. "
                        f"Please capitalize to: {quote(capitalized)}."
                    ),
                ))

            if word.lower() not in self.lexicon:
                violations.append(Violation(
                    kind=ViolationKind.UNKNOWN_VERB,
                    message=(
                        "The subject must start with a verb in imperative mood "
                        f"(according to a whitelist), but got: {quote(word)}. "
                        "If this is a mistake, add the verb with --additional-verbs "
                        "or list it in a file given by --path-to-additional-verbs."
                    ),
                ))

        if subject.endswith('.'):
            violations.append(Violation(
                kind=ViolationKind.TRAILING_PERIOD,
                message=(
                    "The subject must not end with a dot '.'. "
                    "Please remove the trailing dot(s)."
                ),
            ))

        return violations


class BodyHandler(ValidationHandler):
    """Validates that the body is present, wrapped and informative."""

    def __init__(
        self,
        max_line_length: int = DEFAULT_MAX_BODY_LINE_LENGTH,
        next_handler: Optional[ValidationHandler] = None,
    ):
        super().__init__(next_handler)
        self.max_line_length = max_line_length

    def validate(self, message: ParsedMessage) -> List[Violation]:
        body_lines = message.body_lines

        if not body_lines:
            return [Violation(
                kind=ViolationKind.EMPTY_BODY,
                message="At least one line is expected in the body, but got empty body.",
            )]

        if all(not line.strip() for line in body_lines):
            return [Violation(
                kind=ViolationKind.EMPTY_BODY,
                message="Unexpected empty body. Please describe the change in the body.",
            )]

        violations: List[Violation] = []
        for i, line in enumerate(body_lines):
            if is_exempt_from_length(line):
                continue

            if len(line) > self.max_line_length:
                violations.append(Violation(
                    kind=ViolationKind.BODY_LINE_TOO_LONG,
                    message=(
                        f"The line {i + 3} of the message (line {i + 1} of the body) "
                        f"exceeds the limit of {self.max_line_length} characters. "
                        f"The line contains {len(line)} characters: {quote(line)}. "
                        f"Please reformat the body so that all the lines fit "
                        f"{self.max_line_length} characters."
                    ),
                ))

        subject_word = extract_first_word(message.subject)
        body_word = extract_first_word(body_lines[0])
        if (
            subject_word is not None
            and body_word is not None
            and subject_word.lower() == body_word.lower()
        ):
            violations.append(Violation(
                kind=ViolationKind.BODY_REPEATS_SUBJECT,
                message=(
                    f"The first word of the subject ({quote(subject_word)}) must not "
                    "match the first word of the body. Please make the body more "
                    "informative by adding more information instead of repeating "
                    "the subject. For example, start with \"Previously, ...\" or "
                    "\"Due to ...\"."
                ),
            ))

        return violations


class SignOffHandler(ValidationHandler):
    """Validates that the body contains a sign-off line."""

    def validate(self, message: ParsedMessage) -> List[Violation]:
        if any(SIGN_OFF_RE.match(line) for line in message.body_lines):
            return []
        return [Violation(
            kind=ViolationKind.MISSING_SIGN_OFF,
            message=(
                "The body does not contain any 'Signed-off-by: ' line. "
                "Did you sign off the commit with `git commit --signoff`?"
            ),
        )]


def create_validation_chain(
    lexicon: VerbLexicon,
    enforce_sign_off: bool = False,
    max_subject_length: int = DEFAULT_MAX_SUBJECT_LENGTH,
    max_body_line_length: int = DEFAULT_MAX_BODY_LINE_LENGTH,
) -> ValidationHandler:
    """Create the chain run on messages that have a subject and a body."""
    sign_off = SignOffHandler() if enforce_sign_off else None
    body = BodyHandler(max_body_line_length, sign_off)
    return SubjectHandler(lexicon, max_subject_length, body)
