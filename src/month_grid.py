# src/month_grid.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional, Tuple

from src.calendar_utils import days_in_month, sunday_offset
from src.holidays import DEFAULT_HOLIDAYS, HolidayTable, holiday_name, is_weekend
from src.payment_rules import (
    COMMITMENT_EARLY,
    COMMITMENT_OFICINEIROS,
    COMMITMENT_UTILITIES,
    OFICINEIROS_COMMITMENT_DAYS,
    PAYMENT_OFICINEIROS,
    PAYMENT_SERVIDORES,
    MonthRules,
    resolve_month_rules,
)

GRID_CELLS = 42   # 6 semanas x 7 dias


class DayType(str, Enum):
    BUSINESS_DAY = "BUSINESS_DAY"
    WEEKEND = "WEEKEND"
    HOLIDAY = "HOLIDAY"
    PAYMENT_DAY = "PAYMENT_DAY"
    COMMITMENT_DAY = "COMMITMENT_DAY"


@dataclass(frozen=True)
class CalendarDay:
    date: date
    day_of_month: int
    is_current_month: bool
    type: DayType
    holiday_name: Optional[str] = None
    payment_text: Optional[str] = None
    commitment_text: Optional[str] = None


def classify_day(
    day: date, rules: MonthRules, holiday: Optional[str]
) -> Tuple[DayType, Optional[str], Optional[str]]:
    """
    Retorna (tipo, texto de pagamento, texto de empenho).
    Ordem: pagamento servidores > pagamento oficineiros > empenho penúltimo
    dia útil > Copel/Sanepar > oficineiros 5-7 > feriado > fim de semana.
    """
    i = day.day
    if i == rules.last_business_day:
        return DayType.PAYMENT_DAY, PAYMENT_SERVIDORES, None
    if i == rules.oficineiros_payment_day:
        return DayType.PAYMENT_DAY, PAYMENT_OFICINEIROS, None
    if i == rules.second_to_last_business_day:
        return DayType.COMMITMENT_DAY, None, COMMITMENT_EARLY
    if i == rules.utilities_commitment_day:
        return DayType.COMMITMENT_DAY, None, COMMITMENT_UTILITIES
    if i in OFICINEIROS_COMMITMENT_DAYS and not is_weekend(day) and not holiday:
        return DayType.COMMITMENT_DAY, None, COMMITMENT_OFICINEIROS
    if holiday:
        return DayType.HOLIDAY, None, None
    if is_weekend(day):
        return DayType.WEEKEND, None, None
    return DayType.BUSINESS_DAY, None, None


def _padding(day: date) -> CalendarDay:
    # dias emprestados dos meses vizinhos não passam pelas regras
    return CalendarDay(
        date=day,
        day_of_month=day.day,
        is_current_month=False,
        type=DayType.BUSINESS_DAY,
    )


def build_month_grid(year: int, month: int, holidays: HolidayTable = DEFAULT_HOLIDAYS) -> List[CalendarDay]:
    first = date(year, month, 1)
    total = days_in_month(year, month)
    rules = resolve_month_rules(year, month, holidays)

    out: List[CalendarDay] = []

    # mês anterior
    lead = sunday_offset(first)
    for back in range(lead, 0, -1):
        out.append(_padding(first - timedelta(days=back)))

    # mês atual
    for i in range(1, total + 1):
        cur = date(year, month, i)
        holiday = holiday_name(cur, holidays)
        day_type, payment_text, commitment_text = classify_day(cur, rules, holiday)
        out.append(
            CalendarDay(
                date=cur,
                day_of_month=i,
                is_current_month=True,
                type=day_type,
                holiday_name=holiday,
                payment_text=payment_text,
                commitment_text=commitment_text,
            )
        )

    # próximo mês
    last = date(year, month, total)
    for ahead in range(1, GRID_CELLS - len(out) + 1):
        out.append(_padding(last + timedelta(days=ahead)))

    return out
