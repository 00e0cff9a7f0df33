from collections import Counter
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence


COMPLETED = "completed"


def _status(record: Any) -> str:
    status = record.status
    return getattr(status, "value", status)


def _amount(record: Any) -> Decimal:
    # str() evita lixo binário quando vier float
    return Decimal(str(record.amount))


def count_by_status(records: Iterable[Any], status: str) -> int:
    return sum(1 for r in records if _status(r) == status)


def status_breakdown(records: Iterable[Any]) -> Dict[str, int]:
    return dict(Counter(_status(r) for r in records))


# =========================
# RECEITA
# =========================

def total_revenue(payments: Iterable[Any]) -> Decimal:
    """Soma dos pagamentos com status 'completed' (sem conversão de moeda)."""
    total = Decimal("0")
    for p in payments:
        if _status(p) == COMPLETED:
            total += _amount(p)
    return total


def payment_summary(payments: Sequence[Any]) -> Dict[str, Any]:
    return {
        "total_revenue": total_revenue(payments),
        "pending_payments": count_by_status(payments, "pending"),
        "completed_payments": count_by_status(payments, COMPLETED),
    }


def average_payment(payments: Iterable[Any]) -> Optional[Decimal]:
    completed = [_amount(p) for p in payments if _status(p) == COMPLETED]
    if not completed:
        return None
    return (sum(completed, Decimal("0")) / len(completed)).quantize(Decimal("0.01"))


def monthly_revenue(payments: Iterable[Any]) -> Dict[str, Decimal]:
    # chave "YYYY-MM", em ordem cronológica
    months: Dict[str, Decimal] = {}
    for p in payments:
        if _status(p) != COMPLETED:
            continue
        key = p.payment_date.strftime("%Y-%m")
        months[key] = months.get(key, Decimal("0")) + _amount(p)
    return dict(sorted(months.items()))


# =========================
# AGENDA / CLIENTES
# =========================

def completion_rate(appointments: Sequence[Any]) -> Optional[float]:
    """Percentual de concluídos entre os agendamentos não cancelados."""
    considered = [a for a in appointments if _status(a) != "cancelled"]
    if not considered:
        return None
    completed = count_by_status(considered, COMPLETED)
    return round(completed / len(considered) * 100, 2)


def service_distribution(
    appointments: Sequence[Any],
    services: Sequence[Any],
    limit: int = 5,
) -> List[Dict[str, Any]]:
    service_map = {s.id: s for s in services}
    counter = Counter(a.service_id for a in appointments if a.service_id in service_map)
    total = sum(counter.values())

    top = []
    for service_id, qty in counter.most_common(limit):
        top.append(
            {
                "service_id": service_id,
                "name": service_map[service_id].name,
                "count": qty,
                "percentage": round(qty / total * 100, 2),
            }
        )
    return top


def client_counts(clients: Sequence[Any]) -> Dict[str, int]:
    return {
        "total_clients": len(clients),
        "active_clients": count_by_status(clients, "active"),
    }
