from typing import Dict, List, Optional
from datetime import date, datetime
from enum import Enum
from pydantic import field_validator
from sqlmodel import SQLModel, Field

from wellness.core.clock import as_naive_utc, utcnow
from wellness.models.client import ClientRef
from wellness.models.service import ServiceRef


class AppointmentStatus(str, Enum):
    scheduled = "scheduled"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"
    no_show = "no_show"


class AppointmentBase(SQLModel):
    # referências "soltas": apagar o cliente/serviço não apaga o agendamento
    client_id: int = Field(index=True)
    service_id: Optional[int] = Field(default=None, index=True)

    title: str
    description: Optional[str] = None

    start_time: datetime = Field(index=True)
    end_time: datetime

    status: AppointmentStatus = Field(default=AppointmentStatus.scheduled, index=True)

    location: Optional[str] = None
    notes: Optional[str] = None

    # offset (Z, -03:00) vira UTC sem fuso, igual ao que fica gravado
    @field_validator("start_time", "end_time")
    @classmethod
    def _naive_utc(cls, value):
        return as_naive_utc(value)


class Appointment(AppointmentBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class AppointmentCreate(AppointmentBase):
    pass


class AppointmentRead(AppointmentBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    client: Optional[ClientRef] = None
    service: Optional[ServiceRef] = None


class AppointmentUpdate(SQLModel):
    client_id: Optional[int] = None
    service_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[AppointmentStatus] = None
    location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _naive_utc(cls, value):
        return as_naive_utc(value)


class AppointmentStatusUpdate(SQLModel):
    status: AppointmentStatus


# =========================
# GRADE DA AGENDA
# =========================

class CalendarColumnRead(SQLModel):
    day: date
    weekday: str
    slots: Dict[str, List[AppointmentRead]]


class CalendarRead(SQLModel):
    reference: date
    view: str
    time_slots: List[str]
    columns: List[CalendarColumnRead]
    previous: date
    next: date
