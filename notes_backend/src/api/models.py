from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field


class Note(BaseModel):
    """
    Note entity owned by a single user. The date is stamped once at construction.
    """

    id: int = Field(..., ge=1)
    title: str
    content: str
    user: str
    categories: List[str] = Field(default_factory=list)
    date: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))

    @classmethod
    def new(cls, note_id: int, title: str, content: str, user: str, categories: List[str]) -> "Note":
        """Construct a fresh note with the current timestamp."""
        return cls(id=note_id, title=title, content=content, user=user, categories=list(categories))


class NotesCollection(BaseModel):
    """
    Raw shape of the notes file: a single object holding the ordered notes.
    """

    notes: List[Note]


class AdminList(BaseModel):
    """
    Trusted list of admin names.
    """

    admins: List[str]
