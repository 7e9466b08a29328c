import os

import pytest

from opinionatedcommit.commit_message import CommitMessageValidator
from opinionatedcommit.verbs import VerbLexicon


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep settings from the developer's environment out of the tests."""
    for name in list(os.environ):
        if name.startswith("OPINIONATED_COMMIT_"):
            monkeypatch.delenv(name)
    yield


@pytest.fixture
def lexicon():
    return VerbLexicon.from_sources()


@pytest.fixture
def validator(lexicon):
    return CommitMessageValidator(lexicon)


@pytest.fixture
def valid_message():
    return (
        "Fix bug in the parser\n"
        "\n"
        "Previously, the parser crashed on empty input. This change makes it\n"
        "return an empty tree instead.\n"
    )


@pytest.fixture
def verbs_file(tmp_path):
    """Create a file listing additional verbs."""
    path = tmp_path / "verbs.txt"
    path.write_text("rewire\nretune, refit;\n\n")
    return path
