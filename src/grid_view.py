from datetime import date

from src.month_grid import CalendarDay, DayType

CELL_ICONS = {
    DayType.PAYMENT_DAY: "💰",
    DayType.COMMITMENT_DAY: "📋",
    DayType.HOLIDAY: "🎉",
}
TODAY_MARK = "◉"


def cell_label(d: CalendarDay, today: date) -> str:
    """Texto do botão de cada célula do grid; hoje ganha um anel."""
    if not d.is_current_month:
        label = f"·{d.day_of_month}·"
    else:
        label = f"{d.day_of_month} {CELL_ICONS.get(d.type, '')}".strip()
    if d.date == today:
        label = f"{TODAY_MARK} {label}"
    return label
