from typing import Optional
from datetime import datetime
from enum import Enum
from pydantic import field_validator
from sqlmodel import SQLModel, Field

from wellness.core.clock import as_naive_utc, utcnow
from wellness.models.client import ClientRef
from wellness.models.package import PackageRef


class ClientPackageStatus(str, Enum):
    active = "active"
    expired = "expired"
    completed = "completed"


class ClientPackage(SQLModel, table=True):
    """Pacote comprado por um cliente, com o saldo de sessões."""

    __tablename__ = "client_package"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)
    client_id: int = Field(index=True)
    package_id: int = Field(index=True)
    payment_id: Optional[int] = Field(default=None, index=True)

    # SALDO DE SESSÕES (snapshot do pacote na compra)
    sessions_total: int
    sessions_used: int = 0
    sessions_remaining: int

    purchase_date: datetime = Field(default_factory=utcnow, index=True)
    expiry_date: Optional[datetime] = None

    status: ClientPackageStatus = Field(default=ClientPackageStatus.active, index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ClientPackageCreate(SQLModel):
    client_id: int
    package_id: int
    payment_id: Optional[int] = None
    purchase_date: Optional[datetime] = None

    @field_validator("purchase_date")
    @classmethod
    def _naive_utc(cls, value):
        return as_naive_utc(value)


class ClientPackageRead(SQLModel):
    id: int
    user_id: int
    client_id: int
    package_id: int
    payment_id: Optional[int] = None
    sessions_total: int
    sessions_used: int
    sessions_remaining: int
    purchase_date: datetime
    expiry_date: Optional[datetime] = None
    status: ClientPackageStatus
    created_at: datetime
    updated_at: datetime

    client: Optional[ClientRef] = None
    package: Optional[PackageRef] = None


class ClientPackageUpdate(SQLModel):
    payment_id: Optional[int] = None
    expiry_date: Optional[datetime] = None
    status: Optional[ClientPackageStatus] = None

    @field_validator("expiry_date")
    @classmethod
    def _naive_utc(cls, value):
        return as_naive_utc(value)
