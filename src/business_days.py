from datetime import date

from src.calendar_utils import iter_month_days
from src.holidays import DEFAULT_HOLIDAYS, HolidayTable, is_holiday, is_weekend


def is_business_day(day: date, holidays: HolidayTable = DEFAULT_HOLIDAYS) -> bool:
    return not is_weekend(day) and not is_holiday(day, holidays)


def count_business_days(year: int, month: int, holidays: HolidayTable = DEFAULT_HOLIDAYS) -> int:
    count = 0
    for d in iter_month_days(year, month):
        if is_business_day(d.day, holidays):
            count += 1
    return count
