from typing import Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pydantic import field_validator
from sqlmodel import SQLModel, Field

from wellness.core.clock import as_naive_utc, utcnow
from wellness.models.client import ClientRef
from wellness.models.package import PackageRef
from wellness.models.service import ServiceRef


class PaymentStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"
    refunded = "refunded"


class PaymentMethod(str, Enum):
    cash = "cash"
    card = "card"
    bank_transfer = "bank_transfer"
    online = "online"


class PaymentBase(SQLModel):
    client_id: int = Field(index=True)
    # pagamento é de um pacote OU de um serviço avulso
    package_id: Optional[int] = Field(default=None, index=True)
    service_id: Optional[int] = Field(default=None, index=True)

    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    currency: str = "USD"
    payment_method: PaymentMethod = PaymentMethod.card

    status: PaymentStatus = Field(default=PaymentStatus.completed, index=True)

    transaction_id: Optional[str] = None  # id externo (Stripe, por exemplo)
    notes: Optional[str] = None


class Payment(PaymentBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)

    payment_date: datetime = Field(default_factory=utcnow, index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class PaymentCreate(PaymentBase):
    payment_date: Optional[datetime] = None

    @field_validator("payment_date")
    @classmethod
    def _naive_utc(cls, value):
        return as_naive_utc(value)


class PaymentRead(PaymentBase):
    id: int
    user_id: int
    payment_date: datetime
    created_at: datetime
    updated_at: datetime

    client: Optional[ClientRef] = None
    service: Optional[ServiceRef] = None
    package: Optional[PackageRef] = None


class PaymentUpdate(SQLModel):
    client_id: Optional[int] = None
    package_id: Optional[int] = None
    service_id: Optional[int] = None
    amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    currency: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    status: Optional[PaymentStatus] = None
    transaction_id: Optional[str] = None
    payment_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("payment_date")
    @classmethod
    def _naive_utc(cls, value):
        return as_naive_utc(value)


class PaymentSummary(SQLModel):
    total_revenue: Decimal
    pending_payments: int
    completed_payments: int
