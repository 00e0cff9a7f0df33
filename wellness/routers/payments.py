import logging
from typing import List, Optional, Sequence

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from wellness.database import get_session
from wellness.models.client import Client, ClientRef
from wellness.models.package import Package, PackageRef
from wellness.models.payment import (
    Payment,
    PaymentCreate,
    PaymentRead,
    PaymentSummary,
    PaymentUpdate,
)
from wellness.models.service import Service, ServiceRef
from wellness.models.user import User
from wellness.core.analytics import payment_summary
from wellness.core.crud import apply_update, delete_owned, get_owned, load_map, save
from wellness.core.search import PAYMENT_FIELDS, filter_records
from wellness.core.security import get_current_user


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])


def _check_target(service_id: Optional[int], package_id: Optional[int]) -> None:
    # serviço avulso OU pacote, nunca os dois
    if service_id is not None and package_id is not None:
        raise HTTPException(
            status_code=400,
            detail="Informe service_id ou package_id, não os dois",
        )


def _with_lookups(session: Session, payments: Sequence[Payment], user_id: int) -> List[PaymentRead]:
    clients = load_map(session, Client, (p.client_id for p in payments), user_id)
    services = load_map(session, Service, (p.service_id for p in payments), user_id)
    packages = load_map(session, Package, (p.package_id for p in payments), user_id)

    result = []
    for payment in payments:
        c = clients.get(payment.client_id)
        s = services.get(payment.service_id)
        pkg = packages.get(payment.package_id)
        result.append(
            PaymentRead(
                **payment.model_dump(),
                client=ClientRef(first_name=c.first_name, last_name=c.last_name) if c else None,
                service=ServiceRef(name=s.name) if s else None,
                package=PackageRef(name=pkg.name) if pkg else None,
            )
        )
    return result


def _owner_payments(session: Session, user_id: int) -> List[Payment]:
    return session.exec(
        select(Payment)
        .where(Payment.user_id == user_id)
        .order_by(Payment.payment_date.desc(), Payment.id.desc())
    ).all()


# =========================
# REGISTRAR PAGAMENTO
# =========================
@router.post("/", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
def create_payment(
    payload: PaymentCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    _check_target(payload.service_id, payload.package_id)

    data = payload.model_dump(exclude_none=True)
    data["user_id"] = current_user.id
    payment = Payment.model_validate(data)

    save(session, payment)
    logger.info("Pagamento %s registrado (%s %s)", payment.id, payment.amount, payment.currency)
    return _with_lookups(session, [payment], current_user.id)[0]


@router.get("/", response_model=List[PaymentRead])
def list_payments(
    q: Optional[str] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    payments = _owner_payments(session, current_user.id)
    return filter_records(_with_lookups(session, payments, current_user.id), q, PAYMENT_FIELDS)


# =========================
# RESUMO (receita / pendentes / concluídos)
# =========================
@router.get("/summary", response_model=PaymentSummary)
def get_payment_summary(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return PaymentSummary(**payment_summary(_owner_payments(session, current_user.id)))


@router.get("/{payment_id}", response_model=PaymentRead)
def get_payment(
    payment_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    payment = get_owned(session, Payment, payment_id, current_user, "Pagamento")
    return _with_lookups(session, [payment], current_user.id)[0]


@router.patch("/{payment_id}", response_model=PaymentRead)
def update_payment(
    payment_id: int,
    payload: PaymentUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    payment = get_owned(session, Payment, payment_id, current_user, "Pagamento")

    changes = payload.model_dump(exclude_unset=True)
    _check_target(
        changes.get("service_id", payment.service_id),
        changes.get("package_id", payment.package_id),
    )

    apply_update(payment, payload)
    save(session, payment)
    return _with_lookups(session, [payment], current_user.id)[0]


@router.delete("/{payment_id}")
def delete_payment(
    payment_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    payment = get_owned(session, Payment, payment_id, current_user, "Pagamento")
    delete_owned(session, payment)
    return {"message": "Pagamento removido"}
