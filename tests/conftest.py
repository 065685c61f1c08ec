from datetime import date, timedelta

import pytest

from src.holidays import FIXED_HOLIDAYS, HolidayTable


@pytest.fixture
def blocked_anchor_table():
    """Março/2025 com os dias 10 a 19 todos marcados como ponto facultativo."""
    movable = {}
    cur = date(2025, 3, 10)
    while cur <= date(2025, 3, 19):
        movable[cur.isoformat()] = "Ponto facultativo"
        cur += timedelta(days=1)
    return HolidayTable(fixed=FIXED_HOLIDAYS, movable=movable)


@pytest.fixture
def all_holidays_feb_2025():
    """Fevereiro/2025 inteiro é feriado, menos os dias passados em `keep`."""
    def _build(keep=()):
        movable = {}
        for d in range(1, 29):
            if d not in keep:
                movable[date(2025, 2, d).isoformat()] = "Recesso"
        return HolidayTable(fixed=FIXED_HOLIDAYS, movable=movable)
    return _build
