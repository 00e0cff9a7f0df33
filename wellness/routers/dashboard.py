from datetime import date, datetime, timedelta, time
from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from wellness.database import get_session
from wellness.core.analytics import (
    average_payment,
    client_counts,
    completion_rate,
    monthly_revenue,
    service_distribution,
    status_breakdown,
    total_revenue,
)
from wellness.core.calendar import appointments_for_date
from wellness.core.security import get_current_user
from wellness.models.appointment import Appointment
from wellness.models.client import Client
from wellness.models.payment import Payment
from wellness.models.service import Service
from wellness.models.user import User


router = APIRouter(tags=["dashboard"])


def _month_bounds(d: date):
    start = datetime.combine(d.replace(day=1), time(0, 0))
    next_month = (start + timedelta(days=32)).replace(day=1)
    return start, next_month


def _owner_rows(session: Session, model, user_id: int):
    return session.exec(select(model).where(model.user_id == user_id)).all()


# =========================
# RESUMO DO DIA
# GET /dashboard/summary?day=2024-05-06
# =========================
@router.get("/dashboard/summary")
def dashboard_summary(
    day: Optional[date] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    day = day or date.today()

    clients = _owner_rows(session, Client, current_user.id)
    appointments = sorted(
        _owner_rows(session, Appointment, current_user.id),
        key=lambda a: (a.start_time, a.id),
    )

    # receita do mês: só pagamentos completed
    month_start, month_end = _month_bounds(day)
    month_payments = session.exec(
        select(Payment).where(
            Payment.user_id == current_user.id,
            Payment.payment_date >= month_start,
            Payment.payment_date < month_end,
        )
    ).all()

    today = appointments_for_date(appointments, day)

    return {
        "day": day.isoformat(),
        **client_counts(clients),
        "revenue_this_month": total_revenue(month_payments),
        "appointments_today": len(today),
        "completion_rate": completion_rate(appointments),
        "today": [
            {
                "id": a.id,
                "title": a.title,
                "client_id": a.client_id,
                "start_time": a.start_time.isoformat(),
                "status": a.status,
            }
            for a in today
        ],
    }


# =========================
# ANALYTICS GERAL
# =========================
@router.get("/analytics")
def analytics_overview(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    clients = _owner_rows(session, Client, current_user.id)
    services = _owner_rows(session, Service, current_user.id)
    appointments = _owner_rows(session, Appointment, current_user.id)
    payments = _owner_rows(session, Payment, current_user.id)

    return {
        **client_counts(clients),
        "total_revenue": total_revenue(payments),
        "monthly_revenue": monthly_revenue(payments),
        "average_session_value": average_payment(payments),
        "completion_rate": completion_rate(appointments),
        "service_distribution": service_distribution(appointments, services),
        "appointment_status": status_breakdown(appointments),
        "payment_status": status_breakdown(payments),
    }
