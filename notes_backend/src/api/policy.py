from typing import List, Optional

from fastapi import Depends

from src.api.database import NoteStore, get_store
from src.api.errors import NoteNotFoundError
from src.api.models import Note
from src.api.schemas import NoteCreateRequest, NotePatchRequest, NoteReplaceRequest


class NoteAccessPolicy:
    """
    Per-request visibility and ownership rules on top of the note store.

    Listing is filtered to the caller's own notes. Operations by id are not
    ownership-checked: any authenticated identity may read, replace or delete
    any existing note. Creation takes the owner from the payload, not from the
    caller's identity.
    """

    def __init__(self, store: NoteStore):
        self.store = store

    def list_for(self, identity: str) -> List[Note]:
        """Notes owned by identity, in stored order."""
        return [note for note in self.store.get_all() if note.user == identity]

    def get(self, note_id: int) -> Optional[Note]:
        return self.store.get_by_id(note_id)

    def create(self, payload: NoteCreateRequest) -> Note:
        return self.store.add(payload.title, payload.content, payload.user, payload.categories)

    def replace(self, note_id: int, payload: NoteReplaceRequest) -> None:
        """
        Replace every field of a note. Omitted categories keep their current value.

        Raises:
            NoteNotFoundError if the note does not exist.
        """
        categories = payload.categories
        if categories is None:
            categories = self._existing(note_id).categories
        self.store.update(note_id, payload.title, payload.content, payload.user, categories)

    def patch(self, note_id: int, payload: NotePatchRequest) -> None:
        """
        Update only the supplied fields; the rest default to the note's current values.

        Raises:
            NoteNotFoundError if the note does not exist.
        """
        existing = self._existing(note_id)
        self.store.update(
            note_id,
            existing.title if payload.title is None else payload.title,
            existing.content if payload.content is None else payload.content,
            existing.user if payload.user is None else payload.user,
            existing.categories if payload.categories is None else payload.categories,
        )

    def delete(self, note_id: int) -> None:
        self.store.delete_by_id(note_id)

    def _existing(self, note_id: int) -> Note:
        note = self.store.get_by_id(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note


def get_policy(store: NoteStore = Depends(get_store)) -> NoteAccessPolicy:
    """
    Dependency that provides the access policy bound to the request's store.
    """
    return NoteAccessPolicy(store)
