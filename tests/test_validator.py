"""Tests for whole-message validation."""
import pytest

from opinionatedcommit.commit_message import CommitMessageValidator
from opinionatedcommit.commit_message.validator import is_merge_commit, split_lines
from opinionatedcommit.models import ViolationKind
from opinionatedcommit.verbs import VerbLexicon


def kinds(violations):
    return [violation.kind for violation in violations]


def test_split_lines():
    assert split_lines("") == []
    assert split_lines(" \n\n") == []
    assert split_lines("Fix bug") == ["Fix bug"]
    assert split_lines("Fix bug\n") == ["Fix bug"]
    assert split_lines("Fix bug\n\n") == ["Fix bug", ""]
    assert split_lines("Fix bug\r\n") == ["Fix bug"]
    assert split_lines("Fix bug\r\n\r\nBody\r\n") == ["Fix bug", "", "Body"]
    assert split_lines("Fix bug\n\n \n") == ["Fix bug", "", " "]


def test_is_merge_commit():
    assert is_merge_commit("Merge branch 'feature' into main")
    assert not is_merge_commit("merge branch 'feature'")
    assert not is_merge_commit(" Merge branch 'feature'")


def test_valid_message(validator, valid_message):
    result = validator.validate(valid_message)
    assert result.passed
    assert not result.exempt
    assert result.violations == []


def test_fix_bug_passes(validator):
    assert validator.check("Fix bug\n\nPreviously, nothing was fixed.") == []


@pytest.mark.parametrize("message", [
    "Merge branch 'feature' into main",
    "Merge branch 'feature'\nsecond line without separator",
    "Merge branch",
    "Merge branch 'x'\n\nthis body line is definitely going to be way longer than seventy-two characters",
])
def test_merge_commits_are_exempt(validator, message):
    result = validator.validate(message)
    assert result.exempt
    assert result.passed


@pytest.mark.parametrize("message", ["", "   ", "\n\n", "\r\n"])
def test_empty_message(validator, message):
    violations = validator.check(message)
    assert kinds(violations) == [ViolationKind.EMPTY_MESSAGE]
    assert violations[0].message == "The message is empty."


@pytest.mark.parametrize("message", ["Fix bug", "Fix bug\n", "fix bug.", "x" * 100])
def test_one_liner_rejected_by_default(validator, message):
    violations = validator.check(message)
    assert kinds(violations) == [ViolationKind.TOO_FEW_LINES]
    assert "Expected at least three lines" in violations[0].message
    assert "--allow-one-liners" in violations[0].message


def test_one_liner_allowed(lexicon):
    validator = CommitMessageValidator(lexicon, allow_one_liners=True)
    assert validator.check("Fix bug") == []
    assert validator.check("Fix bug\n") == []

    violations = validator.check("fix bug.")
    assert kinds(violations) == [ViolationKind.NOT_CAPITALIZED, ViolationKind.TRAILING_PERIOD]


def test_one_liner_skips_sign_off(lexicon):
    validator = CommitMessageValidator(lexicon, allow_one_liners=True, enforce_sign_off=True)
    assert validator.check("Fix bug") == []


def test_two_lines(validator):
    violations = validator.check("Subject\nBody line")
    assert len(violations) == 1
    assert kinds(violations) == [ViolationKind.TOO_FEW_LINES]
    assert "got: 2" in violations[0].message


def test_two_lines_even_with_one_liners_allowed(lexicon):
    validator = CommitMessageValidator(lexicon, allow_one_liners=True)
    violations = validator.check("Fix bug\nBody line")
    assert kinds(violations) == [ViolationKind.TOO_FEW_LINES]


@pytest.mark.parametrize("message", [
    "Fix bug\nNot empty\nBody",
    "fixed bug.\nno separator\n" + "x" * 100,
    "Fix bug\n \nBody",
])
def test_missing_separator_aborts(validator, message):
    violations = validator.check(message)
    assert kinds(violations) == [ViolationKind.MISSING_SEPARATOR]


def test_missing_separator_reports_length(validator):
    violations = validator.check("Fix bug\nabc\nBody")
    assert "length 3" in violations[0].message


def test_crlf_line_endings(validator):
    assert validator.check("Fix bug\r\n\r\nPreviously, nothing was fixed.\r\n") == []


def test_blank_body(validator):
    violations = validator.check("Fix bug\n\n \n")
    assert kinds(violations) == [ViolationKind.EMPTY_BODY]
    assert "Unexpected empty body" in violations[0].message


def test_blank_body_still_checks_subject(validator):
    violations = validator.check("fix bug\n\n\t")
    assert kinds(violations) == [ViolationKind.NOT_CAPITALIZED, ViolationKind.EMPTY_BODY]


def test_violations_accumulate_in_order(lexicon):
    validator = CommitMessageValidator(lexicon, enforce_sign_off=True)
    message = "fixed bug.\n\nFixed the bug\n" + "x" * 73

    violations = validator.check(message)
    assert kinds(violations) == [
        ViolationKind.NOT_CAPITALIZED,
        ViolationKind.UNKNOWN_VERB,
        ViolationKind.TRAILING_PERIOD,
        ViolationKind.BODY_LINE_TOO_LONG,
        ViolationKind.BODY_REPEATS_SUBJECT,
        ViolationKind.MISSING_SIGN_OFF,
    ]
    assert "The line 4 of the message (line 2 of the body)" in violations[3].message


def test_check_is_idempotent(validator):
    message = "fixed bug.\n\nFixed the bug\n" + "x" * 73
    assert validator.check(message) == validator.check(message)


def test_subject_length(validator):
    subject = "Fix " + "x" * 47
    violations = validator.check(f"{subject}\n\nPreviously, nothing was fixed.")
    assert kinds(violations) == [ViolationKind.SUBJECT_TOO_LONG]
    assert "got: 51" in violations[0].message


def test_subject_issue_suffix(lexicon):
    validator = CommitMessageValidator(lexicon, max_subject_length=7)
    assert validator.check("Fix bug (#42)\n\nPreviously, nothing was fixed.") == []


def test_body_url_is_exempt(validator):
    url = "https://example.com/very/long/path/" + "a" * 80
    assert validator.check(f"Fix link\n\nPreviously, the link was broken:\n{url}") == []


def test_custom_body_line_length(lexicon):
    validator = CommitMessageValidator(lexicon, max_body_length=20)
    violations = validator.check("Fix bug\n\nPreviously, nothing was fixed.")
    assert kinds(violations) == [ViolationKind.BODY_LINE_TOO_LONG]


def test_sign_off(lexicon):
    validator = CommitMessageValidator(lexicon, enforce_sign_off=True)
    message = "Fix bug\n\nPreviously, nothing was fixed."

    violations = validator.check(message)
    assert kinds(violations) == [ViolationKind.MISSING_SIGN_OFF]

    signed = message + "\n\nSigned-off-by: Jane Doe <jane@example.com>"
    assert validator.check(signed) == []

    signed_twice = signed + "\nSigned-off-by: John Doe <john@example.com>"
    assert validator.check(signed_twice) == []


def test_additional_verbs():
    message = "Rewire the pipeline\n\nPreviously, stages were connected by hand."

    validator = CommitMessageValidator(VerbLexicon.from_sources())
    assert kinds(validator.check(message)) == [ViolationKind.UNKNOWN_VERB]

    validator = CommitMessageValidator(VerbLexicon.from_sources(additional_verbs="rewire"))
    assert validator.check(message) == []


def test_default_lexicon():
    validator = CommitMessageValidator()
    assert "fix" in validator.lexicon
    assert validator.check("Fix bug\n\nPreviously, nothing was fixed.") == []


def test_separator_without_body_is_not_a_one_liner(lexicon):
    validator = CommitMessageValidator(lexicon, allow_one_liners=True)

    violations = validator.check("Fix bug\n\n")
    assert kinds(violations) == [ViolationKind.TOO_FEW_LINES]


@pytest.mark.parametrize("message", ["Fix bug\n\n\n", "Fix bug\n\n\n\n", "Fix bug\n\n \n\t\n"])
def test_blank_body_lines_are_an_empty_body(lexicon, message):
    validator = CommitMessageValidator(lexicon, allow_one_liners=True)

    violations = validator.check(message)
    assert kinds(violations) == [ViolationKind.EMPTY_BODY]
