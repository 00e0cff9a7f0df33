import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from wellness.database import get_session
from wellness.models.client import Client, ClientRef
from wellness.models.client_package import (
    ClientPackage,
    ClientPackageCreate,
    ClientPackageRead,
    ClientPackageStatus,
    ClientPackageUpdate,
)
from wellness.models.package import Package, PackageRef
from wellness.models.user import User
from wellness.core.clock import utcnow
from wellness.core.crud import apply_update, delete_owned, get_owned, load_map, save
from wellness.core.search import CLIENT_PACKAGE_FIELDS, filter_records
from wellness.core.security import get_current_user


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/client-packages", tags=["client-packages"])


def _with_lookups(session: Session, items: Sequence[ClientPackage], user_id: int) -> List[ClientPackageRead]:
    clients = load_map(session, Client, (i.client_id for i in items), user_id)
    packages = load_map(session, Package, (i.package_id for i in items), user_id)

    result = []
    for item in items:
        c = clients.get(item.client_id)
        pkg = packages.get(item.package_id)
        result.append(
            ClientPackageRead(
                **item.model_dump(),
                client=ClientRef(first_name=c.first_name, last_name=c.last_name) if c else None,
                package=PackageRef(name=pkg.name) if pkg else None,
            )
        )
    return result


def _refresh_expiry(item: ClientPackage, now: datetime) -> None:
    if (
        item.status == ClientPackageStatus.active
        and item.expiry_date is not None
        and item.expiry_date < now
    ):
        item.status = ClientPackageStatus.expired


# =========================
# VENDER PACOTE PARA CLIENTE
# - saldo de sessões vem do pacote
# - validade = compra + validity_days (se houver)
# =========================
@router.post("/", response_model=ClientPackageRead, status_code=status.HTTP_201_CREATED)
def create_client_package(
    payload: ClientPackageCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    package = get_owned(session, Package, payload.package_id, current_user, "Pacote")
    if not package.is_active:
        raise HTTPException(status_code=400, detail="Pacote inativo")

    purchase_date = payload.purchase_date or utcnow()
    expiry_date = None
    if package.validity_days:
        expiry_date = purchase_date + timedelta(days=package.validity_days)

    item = ClientPackage(
        user_id=current_user.id,
        client_id=payload.client_id,
        package_id=package.id,
        payment_id=payload.payment_id,
        sessions_total=package.session_count,
        sessions_used=0,
        sessions_remaining=package.session_count,
        purchase_date=purchase_date,
        expiry_date=expiry_date,
    )
    save(session, item)

    logger.info("Pacote %s vendido para cliente %s", package.id, payload.client_id)
    return _with_lookups(session, [item], current_user.id)[0]


@router.get("/", response_model=List[ClientPackageRead])
def list_client_packages(
    q: Optional[str] = None,
    client_id: Optional[int] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    query = select(ClientPackage).where(ClientPackage.user_id == current_user.id)
    if client_id is not None:
        query = query.where(ClientPackage.client_id == client_id)

    items = session.exec(
        query.order_by(ClientPackage.purchase_date.desc(), ClientPackage.id.desc())
    ).all()

    now = utcnow()
    for item in items:
        _refresh_expiry(item, now)

    return filter_records(_with_lookups(session, items, current_user.id), q, CLIENT_PACKAGE_FIELDS)


@router.get("/{item_id}", response_model=ClientPackageRead)
def get_client_package(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    item = get_owned(session, ClientPackage, item_id, current_user, "Pacote do cliente")
    _refresh_expiry(item, utcnow())
    return _with_lookups(session, [item], current_user.id)[0]


@router.patch("/{item_id}", response_model=ClientPackageRead)
def update_client_package(
    item_id: int,
    payload: ClientPackageUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    item = get_owned(session, ClientPackage, item_id, current_user, "Pacote do cliente")
    apply_update(item, payload)
    save(session, item)
    return _with_lookups(session, [item], current_user.id)[0]


# =========================
# USAR UMA SESSÃO DO PACOTE
# =========================
@router.post("/{item_id}/use", response_model=ClientPackageRead)
def use_session(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    item = get_owned(session, ClientPackage, item_id, current_user, "Pacote do cliente")

    now = utcnow()
    _refresh_expiry(item, now)

    if item.status != ClientPackageStatus.active:
        # grava a expiração detectada agora
        save(session, item)
        raise HTTPException(status_code=400, detail="Pacote não está ativo")

    if item.sessions_remaining <= 0:
        raise HTTPException(status_code=400, detail="Nenhuma sessão restante")

    item.sessions_used += 1
    item.sessions_remaining -= 1
    if item.sessions_remaining == 0:
        item.status = ClientPackageStatus.completed
    item.updated_at = now

    save(session, item)
    return _with_lookups(session, [item], current_user.id)[0]


@router.delete("/{item_id}")
def delete_client_package(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    item = get_owned(session, ClientPackage, item_id, current_user, "Pacote do cliente")
    delete_owned(session, item)
    return {"message": "Pacote do cliente removido"}
