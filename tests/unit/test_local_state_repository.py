"""Tests for LocalStateRepository."""

import pytest

from coaching_log.infrastructure.local_state_repository import LocalStateRepository


@pytest.fixture
def repository():
    """Create a fresh LocalStateRepository for each test."""
    return LocalStateRepository()


def test_load_before_save(repository):
    """Test loading when nothing has been stored."""
    with pytest.raises(FileNotFoundError):
        repository.load()


def test_save_and_load(repository):
    """Test saving and retrieving a document."""
    document = {"referenceData": {"coaches": ["Alex Morgan"]}, "sessions": []}
    repository.save(document)

    assert repository.load() == document
    assert repository.save_count == 1


def test_saved_document_is_copied(repository):
    """Test that later changes to the caller's dict are not stored."""
    document = {"referenceData": {"coaches": ["Alex Morgan"]}, "sessions": []}
    repository.save(document)
    document["referenceData"]["coaches"].append("Intruder")

    assert repository.get_saved_document()["referenceData"]["coaches"] == ["Alex Morgan"]


def test_initial_document(repository):
    seeded = LocalStateRepository({"sessions": []})
    assert seeded.load() == {"sessions": []}
    assert seeded.save_count == 0


def test_clear(repository):
    """Test clearing the stored document."""
    repository.save({"sessions": []})
    repository.clear()

    assert repository.get_saved_document() is None
    with pytest.raises(FileNotFoundError):
        repository.load()
