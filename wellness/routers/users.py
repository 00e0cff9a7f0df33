from fastapi import APIRouter, Depends
from sqlmodel import Session

from wellness.database import get_session
from wellness.models.user import User, UserRead, UserUpdate
from wellness.core.crud import apply_update, save
from wellness.core.security import get_current_user

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=UserRead)
def update_profile(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    apply_update(current_user, payload)
    return save(session, current_user)
