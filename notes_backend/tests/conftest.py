"""Shared fixtures: a temp notes file seeded with three notes and a test client bound to it."""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api.auth import PresenceCheck, get_identity_check
from src.api.database import NoteStore, get_store
from src.api.main import app

FIXTURE_NOTES = [
    {
        "id": 1,
        "title": "Test Note1",
        "content": "Note for TestUser1",
        "user": "TestUser1",
        "categories": ["work"],
        "date": "2024-01-01T10:00:00+00:00",
    },
    {
        "id": 2,
        "title": "Test Note2",
        "content": "Note for TestUser2",
        "user": "TestUser2",
        "categories": [],
        "date": "2024-01-02T10:00:00+00:00",
    },
    {
        "id": 3,
        "title": "Test Note3",
        "content": "Another Note for TestUser1",
        "user": "TestUser1",
        "categories": ["home", "todo"],
        "date": "2024-01-03T10:00:00+00:00",
    },
]


def read_raw(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture()
def notes_file(tmp_path: Path) -> Path:
    """Notes file pre-filled with the three fixture notes."""
    path = tmp_path / "notes.json"
    path.write_text(json.dumps({"notes": FIXTURE_NOTES}), encoding="utf-8")
    return path


@pytest.fixture()
def store(notes_file: Path) -> NoteStore:
    return NoteStore(notes_file)


@pytest.fixture()
def client(notes_file: Path):
    """Test client whose store points at the temp notes file."""
    app.dependency_overrides[get_store] = lambda: NoteStore(notes_file)
    app.dependency_overrides[get_identity_check] = lambda: PresenceCheck()
    yield TestClient(app)
    app.dependency_overrides.clear()
