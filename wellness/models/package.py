from typing import Optional
from datetime import datetime
from decimal import Decimal
from sqlmodel import SQLModel, Field

from wellness.core.clock import utcnow


class PackageBase(SQLModel):
    name: str
    description: Optional[str] = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    session_count: int = Field(ge=1)
    validity_days: Optional[int] = Field(default=None, ge=1)
    is_active: bool = True


class Package(PackageBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)


class PackageCreate(PackageBase):
    pass


class PackageRead(PackageBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class PackageUpdate(SQLModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    session_count: Optional[int] = Field(default=None, ge=1)
    validity_days: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None


class PackageRef(SQLModel):
    name: str
