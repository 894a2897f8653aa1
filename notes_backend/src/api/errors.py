class NotesError(Exception):
    """Base class for note service errors."""


class StorageUnavailableError(NotesError):
    """Backing file is missing, unreadable or malformed."""

    def __init__(self, path, reason: str):
        super().__init__(f"Storage at {path} unavailable: {reason}")
        self.path = path
        self.reason = reason


class NoteNotFoundError(NotesError):
    """No note with the given id exists."""

    def __init__(self, note_id: int):
        super().__init__(f"Note with ID {note_id} was not found.")
        self.note_id = note_id


class UnauthenticatedError(NotesError):
    """Request carries no acceptable identity."""
