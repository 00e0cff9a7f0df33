from typing import Any, Callable, Iterable, List, Optional, Sequence


# cada campo é uma função que extrai o texto pesquisável do registro
FieldGetter = Callable[[Any], Optional[str]]


def matches(record: Any, query: Optional[str], fields: Sequence[FieldGetter]) -> bool:
    if not query:
        return True

    needle = query.lower()
    for get_value in fields:
        value = get_value(record)
        if value and needle in value.lower():
            return True
    return False


def filter_records(records: Iterable[Any], query: Optional[str], fields: Sequence[FieldGetter]) -> List[Any]:
    """Filtro por substring, sem diferenciar maiúsculas. Mantém a ordem de entrada."""
    return [r for r in records if matches(r, query, fields)]


# =========================
# CAMPOS POR ENTIDADE
# =========================

def full_name(person: Any) -> Optional[str]:
    if person is None:
        return None
    return f"{person.first_name} {person.last_name}"


def _lookup_name(attr: str) -> FieldGetter:
    def get(record: Any) -> Optional[str]:
        ref = getattr(record, attr, None)
        return ref.name if ref is not None else None

    return get


CLIENT_FIELDS: List[FieldGetter] = [
    full_name,
    lambda c: c.email,
]

SERVICE_FIELDS: List[FieldGetter] = [
    lambda s: s.name,
    lambda s: s.description,
]

PACKAGE_FIELDS: List[FieldGetter] = [
    lambda p: p.name,
    lambda p: p.description,
]

PAYMENT_FIELDS: List[FieldGetter] = [
    lambda p: full_name(p.client),
    _lookup_name("service"),
    _lookup_name("package"),
]

SESSION_NOTE_FIELDS: List[FieldGetter] = [
    lambda n: full_name(n.client),
    _lookup_name("service"),
    lambda n: n.notes,
]

APPOINTMENT_FIELDS: List[FieldGetter] = [
    lambda a: a.title,
    lambda a: full_name(a.client),
    _lookup_name("service"),
]

CLIENT_PACKAGE_FIELDS: List[FieldGetter] = [
    lambda cp: full_name(cp.client),
    _lookup_name("package"),
]
