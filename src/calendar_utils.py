from dataclasses import dataclass
from datetime import date, timedelta

MONTH_NAMES = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)

# Domingo primeiro, como no grid
WEEKDAY_NAMES = ("Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado")
WEEKDAY_SHORT = ("Dom", "Seg", "Ter", "Qua", "Qui", "Sex", "Sáb")


@dataclass(frozen=True)
class DayInfo:
    day: date
    iso: str


def month_range(year: int, month: int):
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end


def days_in_month(year: int, month: int) -> int:
    start, end = month_range(year, month)
    return (end - start).days


def add_days(year: int, month: int, day: int) -> date:
    """
    date(year, month, day) aceitando dia fora do mês:
    dia 32 vira o dia 1 (ou 2) do mês seguinte, dia 0 o último do anterior.
    """
    return date(year, month, 1) + timedelta(days=day - 1)


def sunday_offset(day: date) -> int:
    """Dia da semana com domingo=0 ... sábado=6."""
    return (day.weekday() + 1) % 7


def month_name(month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return MONTH_NAMES[month - 1]


def iter_month_days(year: int, month: int):
    start, end = month_range(year, month)
    cur = start
    out = []
    while cur < end:
        out.append(
            DayInfo(
                day=cur,
                iso=cur.isoformat(),
            )
        )
        cur += timedelta(days=1)
    return out
