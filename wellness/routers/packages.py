from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlmodel import Session, select

from wellness.database import get_session
from wellness.models.package import Package, PackageCreate, PackageRead, PackageUpdate
from wellness.models.user import User
from wellness.core.crud import apply_update, delete_owned, get_owned, save
from wellness.core.search import PACKAGE_FIELDS, filter_records
from wellness.core.security import get_current_user


router = APIRouter(
    prefix="/packages",
    tags=["packages"]
)


@router.post("/", response_model=PackageRead, status_code=status.HTTP_201_CREATED)
def create_package(
    payload: PackageCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    package = Package.model_validate(payload, update={"user_id": current_user.id})
    return save(session, package)


@router.get("/", response_model=List[PackageRead])
def list_my_packages(
    q: Optional[str] = None,
    active_only: bool = False,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    query = select(Package).where(Package.user_id == current_user.id)
    if active_only:
        query = query.where(Package.is_active == True)  # noqa: E712

    packages = session.exec(
        query.order_by(Package.created_at.desc(), Package.id.desc())
    ).all()

    return filter_records(packages, q, PACKAGE_FIELDS)


@router.get("/{package_id}", response_model=PackageRead)
def get_package(
    package_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return get_owned(session, Package, package_id, current_user, "Pacote")


@router.patch("/{package_id}", response_model=PackageRead)
def update_package(
    package_id: int,
    payload: PackageUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    package = get_owned(session, Package, package_id, current_user, "Pacote")
    apply_update(package, payload)
    return save(session, package)


@router.delete("/{package_id}")
def delete_package(
    package_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    package = get_owned(session, Package, package_id, current_user, "Pacote")
    delete_owned(session, package)
    return {"message": "Pacote removido"}
