import calendar
from datetime import date, timedelta

import pytest

from src.holidays import holiday_name, is_holiday
from src.month_grid import GRID_CELLS, CalendarDay, DayType, build_month_grid, classify_day
from src.payment_rules import MonthRules

MONTHS = [(y, m) for y in range(2023, 2028) for m in range(1, 13)]


def _by_day(grid):
    return {d.day_of_month: d for d in grid if d.is_current_month}


@pytest.mark.parametrize("year,month", MONTHS)
def test_grid_shape(year, month):
    grid = build_month_grid(year, month)

    assert len(grid) == GRID_CELLS
    assert grid[0].date.weekday() == 6   # começa no domingo
    assert grid[0].date <= date(year, month, 1)
    for a, b in zip(grid, grid[1:]):
        assert b.date - a.date == timedelta(days=1)
    assert len({d.date for d in grid}) == GRID_CELLS

    current = [d for d in grid if d.is_current_month]
    assert len(current) == calendar.monthrange(year, month)[1]
    assert all(d.date.month == month for d in current)
    assert all(d.date.month != month for d in grid if not d.is_current_month)
    for d in grid:
        assert d.day_of_month == d.date.day


@pytest.mark.parametrize("year,month", MONTHS)
def test_labels_follow_type(year, month):
    for d in build_month_grid(year, month):
        assert (d.payment_text is not None) == (d.type == DayType.PAYMENT_DAY)
        assert (d.commitment_text is not None) == (d.type == DayType.COMMITMENT_DAY)
        if d.type == DayType.HOLIDAY:
            assert d.holiday_name
        if d.is_current_month:
            assert d.holiday_name == holiday_name(d.date)
            assert is_holiday(d.date) == (d.holiday_name is not None)


def test_padding_days_are_plain():
    # dezembro/2024 começa no domingo: sem dias do mês anterior
    grid = build_month_grid(2024, 12)
    assert grid[0] == CalendarDay(date=date(2024, 12, 1), day_of_month=1, is_current_month=True,
                                  type=DayType.WEEKEND)
    tail = grid[31:]
    assert [d.date for d in tail] == [date(2025, 1, i) for i in range(1, 12)]
    # 01/01 é feriado, mas dia de preenchimento não é classificado
    assert tail[0].type == DayType.BUSINESS_DAY
    assert tail[0].holiday_name is None


def test_leading_padding_from_previous_month():
    # 01/02/2024 é quinta-feira
    grid = build_month_grid(2024, 2)
    assert [d.date for d in grid[:4]] == [date(2024, 1, 28), date(2024, 1, 29),
                                          date(2024, 1, 30), date(2024, 1, 31)]
    assert not any(d.is_current_month for d in grid[:4])
    assert grid[4].date == date(2024, 2, 1)


def test_december_2024():
    days = _by_day(build_month_grid(2024, 12))

    assert days[31].type == DayType.PAYMENT_DAY
    assert days[31].payment_text == "Pagamento Servidores"
    assert days[10].type == DayType.PAYMENT_DAY
    assert days[10].payment_text == "Pagamento Oficineiros"

    assert days[30].type == DayType.COMMITMENT_DAY
    assert days[30].commitment_text == "Enfermeiras, estagiários, recicla já"
    # 15 é domingo, Copel/Sanepar vai para segunda 16
    assert days[15].type == DayType.WEEKEND
    assert days[16].commitment_text == "Copel e Sanepar"

    assert days[5].commitment_text == "Oficineiros"
    assert days[6].commitment_text == "Oficineiros"
    assert days[7].type == DayType.WEEKEND   # sábado

    assert days[25].type == DayType.HOLIDAY
    assert days[25].holiday_name == "Natal"
    assert days[24].type == DayType.BUSINESS_DAY


def test_november_2024_holiday_pushes_utilities():
    days = _by_day(build_month_grid(2024, 11))
    assert days[15].type == DayType.HOLIDAY
    assert days[15].holiday_name == "Proclamação da República"
    assert days[18].type == DayType.COMMITMENT_DAY
    assert days[18].commitment_text == "Copel e Sanepar"
    # 10 é domingo
    assert days[11].payment_text == "Pagamento Oficineiros"
    assert days[2].type == DayType.HOLIDAY
    assert days[29].payment_text == "Pagamento Servidores"


def test_june_2024_weekend_anchor():
    days = _by_day(build_month_grid(2024, 6))
    assert days[15].type == DayType.WEEKEND
    assert days[16].type == DayType.WEEKEND
    assert days[17].commitment_text == "Copel e Sanepar"
    assert days[28].payment_text == "Pagamento Servidores"
    assert days[27].commitment_text == "Enfermeiras, estagiários, recicla já"


def test_payment_overrides_holiday_but_keeps_name(blocked_anchor_table):
    days = _by_day(build_month_grid(2025, 3, blocked_anchor_table))
    assert days[10].type == DayType.PAYMENT_DAY
    assert days[10].payment_text == "Pagamento Oficineiros"
    assert days[10].holiday_name == "Ponto facultativo"
    assert days[11].type == DayType.HOLIDAY
    # 15..19 bloqueados, quinta 20 é o primeiro dia útil
    assert days[20].commitment_text == "Copel e Sanepar"


def test_classify_day_precedence():
    rules = MonthRules(
        year=2024,
        month=12,
        last_business_day=25,
        second_to_last_business_day=24,
        oficineiros_payment_day=10,
        utilities_commitment_day=16,
    )
    assert classify_day(date(2024, 12, 25), rules, "Natal") == (
        DayType.PAYMENT_DAY, "Pagamento Servidores", None,
    )
    assert classify_day(date(2024, 12, 24), rules, "Véspera") == (
        DayType.COMMITMENT_DAY, None, "Enfermeiras, estagiários, recicla já",
    )
    # 5 a 7 não viram empenho em feriado
    assert classify_day(date(2024, 12, 5), rules, "Local") == (DayType.HOLIDAY, None, None)
    assert classify_day(date(2024, 12, 8), rules, None) == (DayType.WEEKEND, None, None)
    assert classify_day(date(2024, 12, 9), rules, None) == (DayType.BUSINESS_DAY, None, None)


def test_no_business_days_still_builds(all_holidays_feb_2025):
    grid = build_month_grid(2025, 2, all_holidays_feb_2025())
    assert len(grid) == GRID_CELLS
    assert not any(d.payment_text == "Pagamento Servidores" for d in grid)


def test_build_is_repeatable():
    assert build_month_grid(2025, 4) == build_month_grid(2025, 4)
