import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from src.api.errors import NoteNotFoundError, StorageUnavailableError
from src.api.models import Note, NotesCollection

logger = logging.getLogger(__name__)

# Flat JSON file by default; can be overridden by NOTES_FILE env
NOTES_FILE = Path(os.getenv("NOTES_FILE", "data/notes.json"))


class NoteStore:
    """
    File-backed note store.

    Every call re-reads the whole file and every mutation rewrites it. There is
    no lock around the read-modify-write cycle, so concurrent writers can lose
    updates (last write wins).
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> NotesCollection:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Cannot read notes file %s: %s", self.path, exc)
            raise StorageUnavailableError(self.path, str(exc)) from exc
        try:
            return NotesCollection.model_validate_json(raw)
        except ValidationError as exc:
            logger.error("Malformed notes file %s", self.path)
            raise StorageUnavailableError(self.path, "malformed content") from exc

    def _write(self, notes: List[Note]) -> None:
        # The notes file is only ever swapped for a fully written sibling.
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp_path.write_text(
                NotesCollection(notes=notes).model_dump_json(indent=2),
                encoding="utf-8",
            )
            tmp_path.replace(self.path)
        except OSError as exc:
            logger.error("Cannot write notes file %s: %s", self.path, exc)
            raise StorageUnavailableError(self.path, str(exc)) from exc

    def get_all(self) -> List[Note]:
        """Return all notes in stored order."""
        return self._read().notes

    def get_by_id(self, note_id: int) -> Optional[Note]:
        """Return the note with the given id, or None when there is none."""
        return next((note for note in self.get_all() if note.id == note_id), None)

    def add(self, title: str, content: str, user: str, categories: List[str]) -> Note:
        """
        Append a new note and persist the collection.

        The id is count + 1, which can collide with a surviving id once a
        note other than the last one has been deleted.
        """
        notes = self.get_all()
        note = Note.new(len(notes) + 1, title, content, user, categories)
        notes.append(note)
        self._write(notes)
        logger.info("Added note %d for user %s", note.id, user)
        return note

    def update(self, note_id: int, title: str, content: str, user: str, categories: List[str]) -> None:
        """
        Replace the note with the given id by a freshly constructed one.

        The replacement keeps the id but gets a new date and moves to the end
        of the collection.

        Raises:
            NoteNotFoundError if no note has this id; the file is left untouched.
        """
        notes = self.get_all()
        remaining = [note for note in notes if note.id != note_id]
        if len(remaining) == len(notes):
            raise NoteNotFoundError(note_id)
        remaining.append(Note.new(note_id, title, content, user, categories))
        self._write(remaining)
        logger.info("Updated note %d", note_id)

    def delete_by_id(self, note_id: int) -> None:
        """
        Remove the note with the given id.

        Raises:
            NoteNotFoundError if no note has this id.
        """
        notes = self.get_all()
        remaining = [note for note in notes if note.id != note_id]
        if len(remaining) == len(notes):
            raise NoteNotFoundError(note_id)
        self._write(remaining)
        logger.info("Deleted note %d", note_id)


def ensure_notes_file(path: Path) -> bool:
    """Create an empty notes file if none exists. Returns True when one was created."""
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(NotesCollection(notes=[]).model_dump_json(indent=2), encoding="utf-8")
    logger.info("Created empty notes file at %s", path)
    return True


def get_store() -> NoteStore:
    """
    Dependency that provides the note store for the configured file.
    """
    return NoteStore(NOTES_FILE)
