import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlmodel import Session, select

from wellness.database import get_session
from wellness.models.client import Client, ClientCreate, ClientRead, ClientUpdate
from wellness.models.user import User
from wellness.core.crud import apply_update, delete_owned, get_owned, save
from wellness.core.search import CLIENT_FIELDS, filter_records
from wellness.core.security import get_current_user


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("/", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    # força ownership
    client = Client.model_validate(payload, update={"user_id": current_user.id})
    save(session, client)
    logger.info("Cliente %s criado (user=%s)", client.id, current_user.id)
    return client


# =========================
# LISTAR (mais recentes primeiro)
# =========================
@router.get("/", response_model=List[ClientRead])
def list_clients(
    q: Optional[str] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    clients = session.exec(
        select(Client)
        .where(Client.user_id == current_user.id)
        .order_by(Client.created_at.desc(), Client.id.desc())
    ).all()

    return filter_records(clients, q, CLIENT_FIELDS)


@router.get("/{client_id}", response_model=ClientRead)
def get_client(
    client_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return get_owned(session, Client, client_id, current_user, "Cliente")


@router.patch("/{client_id}", response_model=ClientRead)
def update_client(
    client_id: int,
    payload: ClientUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    client = get_owned(session, Client, client_id, current_user, "Cliente")
    apply_update(client, payload)
    return save(session, client)


# =========================
# REMOVER
# - agendamentos, notas e pagamentos do cliente continuam existindo
# =========================
@router.delete("/{client_id}")
def delete_client(
    client_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    client = get_owned(session, Client, client_id, current_user, "Cliente")
    delete_owned(session, client)
    return {"message": "Cliente removido"}
