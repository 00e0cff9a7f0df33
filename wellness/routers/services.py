from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlmodel import Session, select

from wellness.database import get_session
from wellness.models.service import Service, ServiceCreate, ServiceRead, ServiceUpdate
from wellness.models.user import User
from wellness.core.crud import apply_update, delete_owned, get_owned, save
from wellness.core.search import SERVICE_FIELDS, filter_records
from wellness.core.security import get_current_user


router = APIRouter(
    prefix="/services",
    tags=["services"]
)


@router.post("/", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
def create_service(
    payload: ServiceCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    service = Service.model_validate(payload, update={"user_id": current_user.id})
    return save(session, service)


@router.get("/", response_model=List[ServiceRead])
def list_my_services(
    q: Optional[str] = None,
    active_only: bool = False,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    query = select(Service).where(Service.user_id == current_user.id)
    if active_only:
        query = query.where(Service.is_active == True)  # noqa: E712

    services = session.exec(
        query.order_by(Service.created_at.desc(), Service.id.desc())
    ).all()

    return filter_records(services, q, SERVICE_FIELDS)


@router.get("/{service_id}", response_model=ServiceRead)
def get_service(
    service_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return get_owned(session, Service, service_id, current_user, "Serviço")


@router.patch("/{service_id}", response_model=ServiceRead)
def update_service(
    service_id: int,
    payload: ServiceUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    service = get_owned(session, Service, service_id, current_user, "Serviço")
    apply_update(service, payload)
    return save(session, service)


@router.delete("/{service_id}")
def delete_service(
    service_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    service = get_owned(session, Service, service_id, current_user, "Serviço")
    delete_owned(session, service)
    return {"message": "Serviço removido"}
