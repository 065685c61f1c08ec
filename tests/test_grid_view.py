from datetime import date

from src.grid_view import TODAY_MARK, cell_label
from src.month_grid import build_month_grid


def _cell(grid, day):
    return next(d for d in grid if d.date == day)


def test_cell_label_icons():
    grid = build_month_grid(2024, 12)
    other_day = date(2000, 1, 1)
    assert cell_label(_cell(grid, date(2024, 12, 31)), other_day) == "31 💰"
    assert cell_label(_cell(grid, date(2024, 12, 30)), other_day) == "30 📋"
    assert cell_label(_cell(grid, date(2024, 12, 25)), other_day) == "25 🎉"
    assert cell_label(_cell(grid, date(2024, 12, 24)), other_day) == "24"
    assert cell_label(_cell(grid, date(2025, 1, 3)), other_day) == "·3·"


def test_cell_label_marks_today():
    grid = build_month_grid(2024, 12)
    today = date(2024, 12, 24)
    assert cell_label(_cell(grid, today), today) == f"{TODAY_MARK} 24"
    assert cell_label(_cell(grid, date(2024, 12, 31)), today) == "31 💰"
    marked = [d for d in grid if cell_label(d, today).startswith(TODAY_MARK)]
    assert [d.date for d in marked] == [today]


def test_cell_label_marks_today_on_padding():
    grid = build_month_grid(2024, 12)
    today = date(2025, 1, 3)
    assert cell_label(_cell(grid, today), today) == f"{TODAY_MARK} ·3·"
