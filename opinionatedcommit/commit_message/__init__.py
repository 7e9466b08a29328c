"""Commit message validation package."""

from .validation import (
    BodyHandler,
    ParsedMessage,
    SignOffHandler,
    SubjectHandler,
    ValidationHandler,
    create_validation_chain,
)
from .validator import CommitMessageValidator

__all__ = [
    'BodyHandler',
    'ParsedMessage',
    'SignOffHandler',
    'SubjectHandler',
    'ValidationHandler',
    'create_validation_chain',
    'CommitMessageValidator',
]
