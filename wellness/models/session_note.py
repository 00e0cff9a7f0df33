from typing import Optional
from datetime import datetime
from pydantic import field_validator
from sqlmodel import SQLModel, Field

from wellness.core.clock import as_naive_utc, utcnow
from wellness.models.client import ClientRef
from wellness.models.service import ServiceRef


class SessionNoteBase(SQLModel):
    client_id: int = Field(index=True)
    appointment_id: Optional[int] = Field(default=None, index=True)
    service_id: Optional[int] = Field(default=None, index=True)

    session_date: datetime = Field(index=True)
    duration_minutes: Optional[int] = Field(default=None, ge=1)

    notes: str
    goals: Optional[str] = None
    progress_notes: Optional[str] = None
    next_steps: Optional[str] = None

    # escalas de 1 a 10
    mood_rating: Optional[int] = Field(default=None, ge=1, le=10)
    energy_level: Optional[int] = Field(default=None, ge=1, le=10)
    pain_level: Optional[int] = Field(default=None, ge=1, le=10)

    @field_validator("session_date")
    @classmethod
    def _naive_utc(cls, value):
        return as_naive_utc(value)


class SessionNote(SessionNoteBase, table=True):
    __tablename__ = "session_note"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class SessionNoteCreate(SessionNoteBase):
    pass


class SessionNoteRead(SessionNoteBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    client: Optional[ClientRef] = None
    service: Optional[ServiceRef] = None


class SessionNoteUpdate(SQLModel):
    client_id: Optional[int] = None
    appointment_id: Optional[int] = None
    service_id: Optional[int] = None
    session_date: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = None
    goals: Optional[str] = None
    progress_notes: Optional[str] = None
    next_steps: Optional[str] = None
    mood_rating: Optional[int] = Field(default=None, ge=1, le=10)
    energy_level: Optional[int] = Field(default=None, ge=1, le=10)
    pain_level: Optional[int] = Field(default=None, ge=1, le=10)

    @field_validator("session_date")
    @classmethod
    def _naive_utc(cls, value):
        return as_naive_utc(value)
