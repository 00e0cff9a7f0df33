import logging
from datetime import date, datetime
from typing import List, Optional, Sequence

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from wellness.database import get_session
from wellness.models.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentRead,
    AppointmentStatusUpdate,
    AppointmentUpdate,
    CalendarColumnRead,
    CalendarRead,
)
from wellness.models.client import Client, ClientRef
from wellness.models.service import Service, ServiceRef
from wellness.models.user import User
from wellness.core.calendar import ViewMode, build_grid
from wellness.core.crud import apply_update, delete_owned, get_owned, load_map, save
from wellness.core.search import APPOINTMENT_FIELDS, filter_records
from wellness.core.security import get_current_user


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["appointments"])


def _check_interval(start_time: datetime, end_time: datetime) -> None:
    if end_time <= start_time:
        raise HTTPException(status_code=400, detail="end_time deve ser maior que start_time")


def _sort_key(appt: Appointment):
    return (appt.start_time, appt.id or 0)


def _with_lookups(
    session: Session,
    appointments: Sequence[Appointment],
    user_id: int,
) -> List[AppointmentRead]:
    """Anexa nome do cliente e do serviço; referência apagada vira None."""
    clients = load_map(session, Client, (a.client_id for a in appointments), user_id)
    services = load_map(session, Service, (a.service_id for a in appointments), user_id)

    result = []
    for appt in appointments:
        c = clients.get(appt.client_id)
        s = services.get(appt.service_id)
        result.append(
            AppointmentRead(
                **appt.model_dump(),
                client=ClientRef(first_name=c.first_name, last_name=c.last_name) if c else None,
                service=ServiceRef(name=s.name) if s else None,
            )
        )
    return result


def _owner_appointments(session: Session, user_id: int) -> List[Appointment]:
    appointments = session.exec(
        select(Appointment)
        .where(Appointment.user_id == user_id)
        .order_by(Appointment.start_time)
    ).all()
    # reordena localmente para empates ficarem estáveis
    return sorted(appointments, key=_sort_key)


# =========================
# CRIAR AGENDAMENTO
# =========================
@router.post("/", response_model=AppointmentRead, status_code=status.HTTP_201_CREATED)
def create_appointment(
    payload: AppointmentCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    _check_interval(payload.start_time, payload.end_time)

    # força ownership
    appointment = Appointment.model_validate(payload, update={"user_id": current_user.id})
    save(session, appointment)

    logger.info("Agendamento %s criado para %s", appointment.id, appointment.start_time.isoformat())
    return _with_lookups(session, [appointment], current_user.id)[0]


# =========================
# LISTAR (por início, crescente)
# =========================
@router.get("/", response_model=List[AppointmentRead])
def list_appointments(
    q: Optional[str] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    appointments = _owner_appointments(session, current_user.id)
    return filter_records(_with_lookups(session, appointments, current_user.id), q, APPOINTMENT_FIELDS)


# =========================
# GRADE DA AGENDA
# GET /appointments/calendar?day=2024-05-06&view=week
# =========================
@router.get("/calendar", response_model=CalendarRead)
def get_calendar(
    day: Optional[date] = None,
    view: ViewMode = ViewMode.week,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    reference = day or date.today()
    appointments = _with_lookups(
        session,
        _owner_appointments(session, current_user.id),
        current_user.id,
    )

    grid = build_grid(reference, view, appointments)

    return CalendarRead(
        reference=grid.reference,
        view=grid.view.value,
        time_slots=grid.time_slots,
        columns=[
            CalendarColumnRead(day=col.day, weekday=col.weekday, slots=col.slots)
            for col in grid.columns
        ],
        previous=grid.previous,
        next=grid.next,
    )


@router.get("/{appointment_id}", response_model=AppointmentRead)
def get_appointment(
    appointment_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    appt = get_owned(session, Appointment, appointment_id, current_user, "Agendamento")
    return _with_lookups(session, [appt], current_user.id)[0]


@router.patch("/{appointment_id}", response_model=AppointmentRead)
def update_appointment(
    appointment_id: int,
    payload: AppointmentUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    appt = get_owned(session, Appointment, appointment_id, current_user, "Agendamento")

    # valida o intervalo final (campos enviados + os que já existem)
    _check_interval(
        payload.start_time or appt.start_time,
        payload.end_time or appt.end_time,
    )

    apply_update(appt, payload)
    save(session, appt)
    return _with_lookups(session, [appt], current_user.id)[0]


# =========================
# MUDAR STATUS
# =========================
@router.patch("/{appointment_id}/status", response_model=AppointmentRead)
def update_appointment_status(
    appointment_id: int,
    payload: AppointmentStatusUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    appt = get_owned(session, Appointment, appointment_id, current_user, "Agendamento")

    apply_update(appt, payload)
    save(session, appt)

    logger.info("Agendamento %s -> %s", appt.id, appt.status)
    return _with_lookups(session, [appt], current_user.id)[0]


@router.delete("/{appointment_id}")
def delete_appointment(
    appointment_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    appt = get_owned(session, Appointment, appointment_id, current_user, "Agendamento")
    delete_owned(session, appt)
    return {"message": "Agendamento removido"}
