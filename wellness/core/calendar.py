"""Grade de horários da agenda (visão dia / semana).

Funções puras: recebem a data de referência e a lista de agendamentos e
devolvem a grade pronta para exibição. Nada aqui acessa o banco.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, List, Protocol, Sequence


# faixas fixas de 1h exibidas na grade (8:00 às 18:00)
TIME_SLOTS: List[str] = [
    "8:00 AM",
    "9:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "1:00 PM",
    "2:00 PM",
    "3:00 PM",
    "4:00 PM",
    "5:00 PM",
    "6:00 PM",
]

WEEK_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# navegação anterior/próximo sempre anda uma semana inteira
NAVIGATION_STEP = timedelta(days=7)


class ViewMode(str, Enum):
    day = "day"
    week = "week"


class Direction(str, Enum):
    previous = "previous"
    next = "next"


class HasStartTime(Protocol):
    start_time: datetime


@dataclass
class DayColumn:
    day: date
    weekday: str
    slots: Dict[str, list] = field(default_factory=dict)


@dataclass
class CalendarGrid:
    reference: date
    view: ViewMode
    time_slots: List[str]
    columns: List[DayColumn]
    previous: date
    next: date


# =========================
# SEMANA / NAVEGAÇÃO
# =========================

def week_dates(reference: date) -> List[date]:
    """Segunda a domingo da semana que contém `reference`."""
    monday = reference - timedelta(days=reference.weekday())
    return [monday + timedelta(days=i) for i in range(7)]


def shift_reference(reference: date, direction: Direction) -> date:
    if direction == Direction.previous:
        return reference - NAVIGATION_STEP
    return reference + NAVIGATION_STEP


# =========================
# FAIXAS DE HORÁRIO
# =========================

def parse_slot_hour(label: str) -> int:
    """'9:00 AM' -> 9, '1:00 PM' -> 13, '12:00 PM' -> 12, '12:00 AM' -> 0."""
    time_part, _, suffix = label.strip().partition(" ")
    # 12 AM é meia-noite e 12 PM é meio-dia
    hour = int(time_part.split(":")[0]) % 12

    if suffix.upper() == "PM":
        return hour + 12
    return hour


def appointments_for_date(appointments: Sequence[HasStartTime], day: date) -> list:
    # compara só a parte da data do início (não verifica sobreposição)
    return [a for a in appointments if a.start_time.date() == day]


def slots_for_day(
    slot_labels: Sequence[str],
    appointments: Sequence[HasStartTime],
    day: date,
) -> Dict[str, list]:
    """Distribui os agendamentos do dia nas faixas pela hora de início.

    Agendamentos que começam fora das faixas (antes das 8h, depois das 18h)
    ficam de fora da grade; continuam aparecendo na listagem normal.
    """
    day_appointments = appointments_for_date(appointments, day)

    buckets: Dict[str, list] = {}
    for label in slot_labels:
        hour = parse_slot_hour(label)
        buckets[label] = [a for a in day_appointments if a.start_time.hour == hour]

    return buckets


# =========================
# GRADE
# =========================

def build_grid(
    reference: date,
    view: ViewMode,
    appointments: Sequence[HasStartTime],
    slot_labels: Sequence[str] = TIME_SLOTS,
) -> CalendarGrid:
    if view == ViewMode.week:
        dates = week_dates(reference)
    else:
        dates = [reference]

    columns = [
        DayColumn(
            day=d,
            weekday=WEEK_DAYS[d.weekday()],
            slots=slots_for_day(slot_labels, appointments, d),
        )
        for d in dates
    ]

    return CalendarGrid(
        reference=reference,
        view=view,
        time_slots=list(slot_labels),
        columns=columns,
        previous=shift_reference(reference, Direction.previous),
        next=shift_reference(reference, Direction.next),
    )
