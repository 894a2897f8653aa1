from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# Notes

class NoteCreateRequest(BaseModel):
    """Create note request"""
    title: str = Field(..., description="Note title")
    content: str = Field(..., description="Note content")
    user: str = Field(..., description="Owner of the note")
    categories: List[str] = Field(default_factory=list, description="Ordered categories")


class NoteReplaceRequest(BaseModel):
    """Replace note request (categories keep their current value when omitted)"""
    title: str
    content: str
    user: str
    categories: Optional[List[str]] = None


class NotePatchRequest(BaseModel):
    """Update note request (partial)"""
    title: Optional[str] = None
    content: Optional[str] = None
    user: Optional[str] = None
    categories: Optional[List[str]] = None


class NoteResponse(BaseModel):
    """Note response model"""
    id: int
    title: str
    content: str
    user: str
    categories: List[str]
    date: datetime

    class Config:
        from_attributes = True


# Info

class MessageResponse(BaseModel):
    """Plain message response"""
    message: str
