"""Operações comuns das rotas: posse do registro, atualização parcial e lookups."""
import logging
from typing import Dict, Iterable, Optional, Type, TypeVar

from fastapi import HTTPException
from sqlmodel import Session, SQLModel, select

from wellness.core.clock import utcnow
from wellness.models.user import User


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=SQLModel)


def get_owned(session: Session, model: Type[T], record_id: int, current_user: User, label: str) -> T:
    obj = session.get(model, record_id)
    if not obj:
        raise HTTPException(status_code=404, detail=f"{label} não encontrado")

    if obj.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Sem permissão")

    return obj


def save(session: Session, obj: T) -> T:
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj


def apply_update(obj: T, updates: SQLModel) -> T:
    # só os campos enviados no PATCH
    data = updates.model_dump(exclude_unset=True)

    # null explícito em coluna NOT NULL vira 422, não erro de banco
    columns = type(obj).__table__.columns
    not_nullable = sorted(
        key for key, value in data.items()
        if value is None and key in columns and not columns[key].nullable
    )
    if not_nullable:
        raise HTTPException(
            status_code=422,
            detail=f"Campos não aceitam null: {', '.join(not_nullable)}",
        )

    obj.sqlmodel_update(data)
    obj.updated_at = utcnow()
    return obj


def delete_owned(session: Session, obj: SQLModel) -> None:
    session.delete(obj)
    session.commit()
    logger.info("%s %s removido", type(obj).__name__, obj.id)


# =========================
# LOOKUPS (cliente / serviço / pacote)
# =========================

def load_map(session: Session, model: Type[T], ids: Iterable[Optional[int]], user_id: int) -> Dict[int, T]:
    """Busca de uma vez os registros referenciados; ids órfãos simplesmente não aparecem."""
    wanted = {i for i in ids if i is not None}
    if not wanted:
        return {}

    rows = session.exec(
        select(model).where(model.id.in_(wanted), model.user_id == user_id)
    ).all()
    return {row.id: row for row in rows}
