# src/holidays.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from src.calendar_utils import iter_month_days


@dataclass(frozen=True)
class HolidayRecord:
    iso: str    # YYYY-MM-DD
    name: str


@dataclass(frozen=True)
class HolidayTable:
    """
    Tabela estática de feriados:
    - fixed: (mês, dia) -> nome, vale para todos os anos
    - movable: "YYYY-MM-DD" -> nome, só para os anos cadastrados
    """
    fixed: Mapping[Tuple[int, int], str] = field(default_factory=dict)
    movable: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # cópia somente leitura: ninguém altera a tabela depois de criada
        object.__setattr__(self, "fixed", MappingProxyType(dict(self.fixed)))
        object.__setattr__(self, "movable", MappingProxyType(dict(self.movable)))

    def name_for(self, day: date) -> Optional[str]:
        fixed = self.fixed.get((day.month, day.day))
        if fixed:
            return fixed
        return self.movable.get(day.isoformat())


# Feriados nacionais fixos (mês 1-12)
FIXED_HOLIDAYS: Dict[Tuple[int, int], str] = {
    (1, 1): "Confraternização Universal",
    (4, 21): "Tiradentes",
    (5, 1): "Dia do Trabalho",
    (9, 7): "Independência do Brasil",
    (10, 12): "Nossa Sr.ª Aparecida",
    (11, 2): "Finados",
    (11, 15): "Proclamação da República",
    (11, 20): "Dia da Consciência Negra",
    (12, 25): "Natal",
}

# Móveis: sem cálculo de Páscoa, só os anos cadastrados.
# Fora desses anos simplesmente não há feriado móvel.
MOVABLE_HOLIDAYS: Dict[str, str] = {
    # 2024
    "2024-02-12": "Carnaval",
    "2024-02-13": "Carnaval",
    "2024-03-29": "Paixão de Cristo",
    "2024-05-30": "Corpus Christi",
    # 2025
    "2025-03-03": "Carnaval",
    "2025-03-04": "Carnaval",
    "2025-04-18": "Paixão de Cristo",
    "2025-06-19": "Corpus Christi",
    # 2026
    "2026-02-16": "Carnaval",
    "2026-02-17": "Carnaval",
    "2026-04-03": "Paixão de Cristo",
    "2026-06-04": "Corpus Christi",
    # 2027
    "2027-02-08": "Carnaval",
    "2027-02-09": "Carnaval",
    "2027-03-26": "Paixão de Cristo",
    "2027-05-27": "Corpus Christi",
}

DEFAULT_HOLIDAYS = HolidayTable(fixed=FIXED_HOLIDAYS, movable=MOVABLE_HOLIDAYS)


def holiday_name(day: date, holidays: HolidayTable = DEFAULT_HOLIDAYS) -> Optional[str]:
    return holidays.name_for(day)


def is_holiday(day: date, holidays: HolidayTable = DEFAULT_HOLIDAYS) -> bool:
    return holiday_name(day, holidays) is not None


def is_weekend(day: date) -> bool:
    # weekday(): 0=Seg ... 5=Sáb, 6=Dom
    return day.weekday() >= 5


def list_holidays(year: int, month: int, holidays: HolidayTable = DEFAULT_HOLIDAYS) -> List[HolidayRecord]:
    out = []
    for d in iter_month_days(year, month):
        name = holiday_name(d.day, holidays)
        if name is not None:
            out.append(HolidayRecord(iso=d.iso, name=name))
    return out
