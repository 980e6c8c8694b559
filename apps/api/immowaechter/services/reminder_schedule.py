"""Reminder cadence: decides whether a component is due for a reminder today."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from immowaechter.core.constants import (
    OVERDUE_REMINDER_CADENCE_DAYS,
    REMINDER_DAYS_BEFORE_DUE,
)


@dataclass(frozen=True)
class Eligibility:
    eligible: bool
    days_until: int  # signed; negative when overdue
    is_overdue: bool


def days_until_due(next_due: date, today: date) -> int:
    """Whole calendar days from today to the due date (negative when past)."""
    return (next_due - today).days


def evaluate_eligibility(next_due: date, today: date) -> Eligibility:
    """
    Decide whether a reminder fires today.

    Fires on the fixed warning days (30, 14, 7, 3, 1 and the due date itself)
    and, once overdue, every 7th day after the due date.
    """
    days_until = days_until_due(next_due, today)
    is_overdue = days_until < 0

    eligible = days_until in REMINDER_DAYS_BEFORE_DUE or (
        is_overdue and abs(days_until) % OVERDUE_REMINDER_CADENCE_DAYS == 0
    )
    return Eligibility(eligible=eligible, days_until=days_until, is_overdue=is_overdue)
