from typing import Optional
from datetime import date, datetime
from enum import Enum
from sqlmodel import SQLModel, Field

from wellness.core.clock import utcnow


class ClientStatus(str, Enum):
    active = "active"
    inactive = "inactive"
    archived = "archived"


class ClientBase(SQLModel):
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None

    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None

    # FICHA DE SAÚDE
    health_conditions: Optional[str] = None
    medications: Optional[str] = None
    goals: Optional[str] = None
    notes: Optional[str] = None

    status: ClientStatus = Field(default=ClientStatus.active, index=True)


class Client(ClientBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)


class ClientCreate(ClientBase):
    pass


class ClientRead(ClientBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class ClientUpdate(SQLModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    health_conditions: Optional[str] = None
    medications: Optional[str] = None
    goals: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[ClientStatus] = None


# dados do cliente embutidos em agendamentos, notas e pagamentos
class ClientRef(SQLModel):
    first_name: str
    last_name: str
