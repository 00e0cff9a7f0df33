from typing import Optional
from datetime import datetime
from decimal import Decimal
from sqlmodel import SQLModel, Field

from wellness.core.clock import utcnow


class ServiceBase(SQLModel):
    name: str
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, ge=1)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    is_active: bool = True


class Service(ServiceBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)


class ServiceCreate(ServiceBase):
    pass


class ServiceRead(ServiceBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class ServiceUpdate(SQLModel):
    name: Optional[str] = None
    description: Optional[str] = None
    duration_minutes: Optional[int] = Field(default=None, ge=1)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None


class ServiceRef(SQLModel):
    name: str
