from datetime import date
from enum import Enum
from typing import Optional

UPCOMING_WINDOW_DAYS = 7


class DueDateStatus(str, Enum):
    NOT_SET = "not_set"
    UPCOMING = "upcoming"
    DUE_TODAY = "due_today"
    OVERDUE = "overdue"


def due_date_status(due_date: Optional[date], today: Optional[date] = None) -> DueDateStatus:
    """Classify a due date relative to today (upcoming = due within 7 days)"""
    if due_date is None:
        return DueDateStatus.NOT_SET

    today = today or date.today()
    days_left = (due_date - today).days

    if days_left < 0:
        return DueDateStatus.OVERDUE
    if days_left == 0:
        return DueDateStatus.DUE_TODAY
    if days_left <= UPCOMING_WINDOW_DAYS:
        return DueDateStatus.UPCOMING
    return DueDateStatus.NOT_SET
