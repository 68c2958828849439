from datetime import date

from ...domain import DayCategory
from .holiday_calendar import HolidayCalendar

SATURDAY = 5


class DayClassifier:
    """Saturday, Sunday and holidays use weekend rules, every other day weekday rules."""

    def __init__(self, calendar: HolidayCalendar):
        self.calendar = calendar

    def classify(self, target_date: date) -> DayCategory:
        # Python: Monday = 0, Sunday = 6
        if target_date.weekday() >= SATURDAY:
            return DayCategory.WEEKEND
        if self.calendar.is_holiday(target_date):
            return DayCategory.WEEKEND
        return DayCategory.WEEKDAY
