"""Shared models for opinionated-commit."""
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ViolationKind(str, Enum):
    EMPTY_MESSAGE = "empty_message"
    TOO_FEW_LINES = "too_few_lines"
    MISSING_SEPARATOR = "missing_separator"
    SUBJECT_TOO_LONG = "subject_too_long"
    MISSING_VERB = "missing_verb"
    NOT_CAPITALIZED = "not_capitalized"
    UNKNOWN_VERB = "unknown_verb"
    TRAILING_PERIOD = "trailing_period"
    EMPTY_BODY = "empty_body"
    BODY_LINE_TOO_LONG = "body_line_too_long"
    BODY_REPEATS_SUBJECT = "body_repeats_subject"
    MISSING_SIGN_OFF = "missing_sign_off"


class Violation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ViolationKind
    message: str

    def __str__(self) -> str:
        return self.message


class InspectionResult(BaseModel):
    violations: List[Violation] = Field(
        default_factory=list, description="Violations in the order the checks ran"
    )
    exempt: bool = Field(default=False, description="Whether the message skipped all checks")

    @property
    def passed(self) -> bool:
        return not self.violations

    @property
    def messages(self) -> List[str]:
        return [violation.message for violation in self.violations]
