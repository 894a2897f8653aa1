import logging
import os
from typing import List

from fastapi import FastAPI, Depends, HTTPException, Request, status, Path
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.auth import get_current_identity
from src.api.database import NOTES_FILE, ensure_notes_file
from src.api.errors import NoteNotFoundError, StorageUnavailableError, UnauthenticatedError
from src.api.policy import NoteAccessPolicy, get_policy
from src.api.schemas import (
    MessageResponse,
    NoteCreateRequest,
    NotePatchRequest,
    NoteReplaceRequest,
    NoteResponse,
)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Notes API",
    description="Personal notes kept in a flat JSON file, scoped by a caller identity header.",
    version="1.0.0",
    openapi_tags=[
        {"name": "Health", "description": "Service health and status."},
        {"name": "Info", "description": "Static service information."},
        {"name": "Notes", "description": "CRUD operations for notes."},
    ],
)

# CORS setup - allow frontend
frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UnauthenticatedError)
async def unauthenticated_handler(request: Request, exc: UnauthenticatedError):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": "Could not validate identity"},
        headers={"WWW-Authenticate": "Identity"},
    )


@app.exception_handler(StorageUnavailableError)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Note storage unavailable"},
    )


def _not_found(note_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Note with ID {note_id} was not found.")


# PUBLIC_INTERFACE
@app.get("/", tags=["Health"], summary="Health Check")
def health_check():
    """
    Health check endpoint.

    Returns:
        JSON object indicating service status.
    """
    return {"message": "Healthy"}


# -------- Info Routes --------

# PUBLIC_INTERFACE
@app.get("/info", response_model=MessageResponse, tags=["Info"], summary="Service information")
def get_info():
    """
    Static service information.
    """
    return MessageResponse(message="GET - Notes API storing personal notes in a JSON file.")


# PUBLIC_INTERFACE
@app.post("/info", response_model=MessageResponse, tags=["Info"], summary="Echo a POST request")
def post_info():
    """
    Acknowledge a POST request.
    """
    return MessageResponse(message="POST - Your request has arrived.")


# -------- Notes Routes --------

# PUBLIC_INTERFACE
@app.get(
    "/notes",
    response_model=List[NoteResponse],
    tags=["Notes"],
    summary="List the caller's notes",
)
def list_notes(
    identity: str = Depends(get_current_identity),
    policy: NoteAccessPolicy = Depends(get_policy),
):
    """
    List notes owned by the calling identity, in stored order.
    """
    return policy.list_for(identity)


# PUBLIC_INTERFACE
@app.post(
    "/notes",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["Notes"],
    summary="Create a new note",
)
def create_note(
    payload: NoteCreateRequest,
    identity: str = Depends(get_current_identity),
    policy: NoteAccessPolicy = Depends(get_policy),
):
    """
    Create a new note.

    Body:
        title: note title
        content: note content
        user: owner of the note (taken as given, not from the identity header)
        categories: optional list of categories
    """
    policy.create(payload)
    return None


# PUBLIC_INTERFACE
@app.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    tags=["Notes"],
    summary="Get a note by ID",
)
def get_note(
    note_id: int = Path(...),
    identity: str = Depends(get_current_identity),
    policy: NoteAccessPolicy = Depends(get_policy),
):
    """
    Retrieve a single note by ID.

    Raises:
        404 naming the id when no note matches.
    """
    note = policy.get(note_id)
    if note is None:
        raise _not_found(note_id)
    return note


# PUBLIC_INTERFACE
@app.put(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["Notes"],
    summary="Replace a note by ID",
)
def replace_note(
    payload: NoteReplaceRequest,
    note_id: int = Path(...),
    identity: str = Depends(get_current_identity),
    policy: NoteAccessPolicy = Depends(get_policy),
):
    """
    Replace a note. The stored date is reset.
    """
    try:
        policy.replace(note_id, payload)
    except NoteNotFoundError:
        raise _not_found(note_id)
    return None


# PUBLIC_INTERFACE
@app.patch(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["Notes"],
    summary="Partially update a note by ID",
)
def patch_note(
    payload: NotePatchRequest,
    note_id: int = Path(...),
    identity: str = Depends(get_current_identity),
    policy: NoteAccessPolicy = Depends(get_policy),
):
    """
    Update the supplied fields of a note; omitted fields keep their value.
    """
    try:
        policy.patch(note_id, payload)
    except NoteNotFoundError:
        raise _not_found(note_id)
    return None


# PUBLIC_INTERFACE
@app.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["Notes"],
    summary="Delete a note by ID",
)
def delete_note(
    note_id: int = Path(...),
    identity: str = Depends(get_current_identity),
    policy: NoteAccessPolicy = Depends(get_policy),
):
    """
    Delete a note.
    """
    try:
        policy.delete(note_id)
    except NoteNotFoundError:
        raise _not_found(note_id)
    return None


# Create an empty notes file if none exists (dev only)
@app.on_event("startup")
def on_startup():
    if os.getenv("ENV", "dev") == "dev":
        ensure_notes_file(NOTES_FILE)
    logger.info("Serving notes from %s", NOTES_FILE)
