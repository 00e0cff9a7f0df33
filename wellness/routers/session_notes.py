from typing import List, Optional, Sequence

from fastapi import APIRouter, Depends, status
from sqlmodel import Session, select

from wellness.database import get_session
from wellness.models.client import Client, ClientRef
from wellness.models.service import Service, ServiceRef
from wellness.models.session_note import (
    SessionNote,
    SessionNoteCreate,
    SessionNoteRead,
    SessionNoteUpdate,
)
from wellness.models.user import User
from wellness.core.crud import apply_update, delete_owned, get_owned, load_map, save
from wellness.core.search import SESSION_NOTE_FIELDS, filter_records
from wellness.core.security import get_current_user


router = APIRouter(prefix="/session-notes", tags=["session-notes"])


def _with_lookups(session: Session, notes: Sequence[SessionNote], user_id: int) -> List[SessionNoteRead]:
    clients = load_map(session, Client, (n.client_id for n in notes), user_id)
    services = load_map(session, Service, (n.service_id for n in notes), user_id)

    result = []
    for note in notes:
        c = clients.get(note.client_id)
        s = services.get(note.service_id)
        result.append(
            SessionNoteRead(
                **note.model_dump(),
                client=ClientRef(first_name=c.first_name, last_name=c.last_name) if c else None,
                service=ServiceRef(name=s.name) if s else None,
            )
        )
    return result


@router.post("/", response_model=SessionNoteRead, status_code=status.HTTP_201_CREATED)
def create_session_note(
    payload: SessionNoteCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    note = SessionNote.model_validate(payload, update={"user_id": current_user.id})
    save(session, note)
    return _with_lookups(session, [note], current_user.id)[0]


# =========================
# LISTAR (sessão mais recente primeiro)
# - ?client_id= filtra o histórico de um cliente
# =========================
@router.get("/", response_model=List[SessionNoteRead])
def list_session_notes(
    q: Optional[str] = None,
    client_id: Optional[int] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    query = select(SessionNote).where(SessionNote.user_id == current_user.id)
    if client_id is not None:
        query = query.where(SessionNote.client_id == client_id)

    notes = session.exec(
        query.order_by(SessionNote.session_date.desc(), SessionNote.id.desc())
    ).all()

    return filter_records(_with_lookups(session, notes, current_user.id), q, SESSION_NOTE_FIELDS)


@router.get("/{note_id}", response_model=SessionNoteRead)
def get_session_note(
    note_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    note = get_owned(session, SessionNote, note_id, current_user, "Nota de sessão")
    return _with_lookups(session, [note], current_user.id)[0]


@router.patch("/{note_id}", response_model=SessionNoteRead)
def update_session_note(
    note_id: int,
    payload: SessionNoteUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    note = get_owned(session, SessionNote, note_id, current_user, "Nota de sessão")
    apply_update(note, payload)
    save(session, note)
    return _with_lookups(session, [note], current_user.id)[0]


@router.delete("/{note_id}")
def delete_session_note(
    note_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    note = get_owned(session, SessionNote, note_id, current_user, "Nota de sessão")
    delete_owned(session, note)
    return {"message": "Nota de sessão removida"}
