# src/payment_rules.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional

from src.business_days import is_business_day
from src.calendar_utils import add_days, days_in_month
from src.holidays import DEFAULT_HOLIDAYS, HolidayTable

logger = logging.getLogger(__name__)

# Regras fixas da folha municipal (não configuráveis)
PAYMENT_SERVIDORES = "Pagamento Servidores"
PAYMENT_OFICINEIROS = "Pagamento Oficineiros"
COMMITMENT_EARLY = "Enfermeiras, estagiários, recicla já"
COMMITMENT_UTILITIES = "Copel e Sanepar"
COMMITMENT_OFICINEIROS = "Oficineiros"

OFICINEIROS_PAYMENT_ANCHOR = 10
UTILITIES_ANCHOR = 15
OFICINEIROS_COMMITMENT_DAYS = range(5, 8)   # 5, 6 e 7

# Limites das varreduras
BACKWARD_SCAN_LIMIT = 32
FORWARD_SCAN_LIMIT = 10


@dataclass(frozen=True)
class MonthRules:
    """
    Dias (do mês) que recebem classificação especial.
    Os dias de âncora podem passar de days_in_month quando a rolagem
    cai no mês seguinte; nesse caso a regra não aparece no mês.
    """
    year: int
    month: int
    last_business_day: Optional[int]
    second_to_last_business_day: Optional[int]
    oficineiros_payment_day: int
    utilities_commitment_day: int


def last_business_days(
    year: int, month: int, count: int, holidays: HolidayTable = DEFAULT_HOLIDAYS
) -> List[int]:
    """
    Varre de trás pra frente a partir do último dia do mês.
    Retorna até `count` dias úteis, o mais próximo do fim primeiro.
    """
    found: List[int] = []
    cur = add_days(year, month, days_in_month(year, month))
    iterations = 0
    while cur.month == month and len(found) < count and iterations < BACKWARD_SCAN_LIMIT:
        if is_business_day(cur, holidays):
            found.append(cur.day)
        cur -= timedelta(days=1)
        iterations += 1
    return found


def last_business_day_of_month(year: int, month: int, holidays: HolidayTable = DEFAULT_HOLIDAYS) -> int:
    days = last_business_days(year, month, 1, holidays)
    return days[0] if days else 1


def next_business_day(
    year: int, month: int, anchor: int, holidays: HolidayTable = DEFAULT_HOLIDAYS
) -> int:
    """
    Menor dia >= anchor que seja dia útil. A data pode rolar para o mês
    seguinte (o número volta maior que o tamanho do mês).
    Sem dia útil em FORWARD_SCAN_LIMIT tentativas, volta o próprio anchor.
    """
    day = anchor
    for _ in range(FORWARD_SCAN_LIMIT):
        if is_business_day(add_days(year, month, day), holidays):
            return day
        day += 1
    return anchor


def resolve_month_rules(year: int, month: int, holidays: HolidayTable = DEFAULT_HOLIDAYS) -> MonthRules:
    last_two = last_business_days(year, month, 2, holidays)
    rules = MonthRules(
        year=year,
        month=month,
        last_business_day=last_two[0] if len(last_two) > 0 else None,
        second_to_last_business_day=last_two[1] if len(last_two) > 1 else None,
        oficineiros_payment_day=next_business_day(year, month, OFICINEIROS_PAYMENT_ANCHOR, holidays),
        utilities_commitment_day=next_business_day(year, month, UTILITIES_ANCHOR, holidays),
    )
    logger.debug("Regras %04d-%02d: %s", year, month, rules)
    return rules
