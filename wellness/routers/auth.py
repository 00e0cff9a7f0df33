import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, SQLModel, select

from wellness.database import get_session
from wellness.models.user import User, UserCreate, UserRead
from wellness.core.security import (
    RESET_TOKEN_TYPE,
    create_access_token,
    create_reset_token,
    decode_token,
    get_password_hash,
    verify_password,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class ForgotPasswordRequest(SQLModel):
    email: str


class ResetPasswordRequest(SQLModel):
    token: str
    new_password: str


# =========================
# CADASTRO
# =========================
@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def signup(user: UserCreate, session: Session = Depends(get_session)):

    existing_user = session.exec(
        select(User).where(User.email == user.email)
    ).first()

    if existing_user:
        raise HTTPException(status_code=400, detail="Email já cadastrado")

    db_user = User.model_validate(
        user.model_dump(exclude={"password"}),
        update={"password_hash": get_password_hash(user.password)},
    )

    session.add(db_user)
    session.commit()
    session.refresh(db_user)

    logger.info("Conta criada: %s", db_user.email)
    return db_user


@router.post("/login")
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
):
    user = session.exec(
        select(User).where(User.email == form_data.username)
    ).first()

    if not user or not verify_password(form_data.password, user.password_hash):
        logger.warning("Falha de login para %s", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha inválidos",
        )

    access_token = create_access_token(
        data={"sub": user.email}
    )

    return {
        "access_token": access_token,
        "token_type": "bearer"
    }


# =========================
# ESQUECI A SENHA
# - resposta sempre igual (não revela se o email existe)
# - o envio do email fica fora da API; o token vai para o log
# =========================
@router.post("/forgot-password")
def forgot_password(
    payload: ForgotPasswordRequest,
    session: Session = Depends(get_session),
):
    user = session.exec(
        select(User).where(User.email == payload.email)
    ).first()

    if user:
        token = create_reset_token(user.email)
        logger.info("Token de redefinição gerado para %s: %s", user.email, token)

    return {"message": "Se o email estiver cadastrado, enviaremos as instruções"}


@router.post("/reset-password")
def reset_password(
    payload: ResetPasswordRequest,
    session: Session = Depends(get_session),
):
    email = decode_token(payload.token, RESET_TOKEN_TYPE)
    if email is None:
        raise HTTPException(status_code=400, detail="Token inválido ou expirado")

    user = session.exec(
        select(User).where(User.email == email)
    ).first()

    if user is None:
        raise HTTPException(status_code=400, detail="Token inválido ou expirado")

    if len(payload.new_password) < 6:
        raise HTTPException(status_code=400, detail="A senha deve ter pelo menos 6 caracteres")

    user.password_hash = get_password_hash(payload.new_password)
    session.add(user)
    session.commit()

    logger.info("Senha redefinida para %s", user.email)
    return {"message": "Senha redefinida"}
