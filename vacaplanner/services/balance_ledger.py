"""
Balance Ledger.

Converts a leave request's date/time range into a charge against one of the
user's "used" counters and applies or reverses that charge.

Counters are integer fixed-point units:
- vacation usage in half days (``vacation_half_days_used``)
- personal/sick usage in minutes (``personal_minutes_used``)

Rules:
- whole-day span: inclusive day count, ``(end - start).days + 1``
- VACATION with both times set: always half a day, the times only label
  morning/afternoon
- SICK/PERSONAL with both times set: clock difference in minutes, wrapping
  past midnight when the end precedes the start
- SICK/PERSONAL without times: inclusive day count times the 8 hour workday
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from vacaplanner.models.leave_request import LeaveType

WORKDAY_HOURS = 8
MINUTES_PER_DAY = 24 * 60

VACATION_COUNTER = "vacation_half_days_used"
PERSONAL_COUNTER = "personal_minutes_used"

MORNING_START = "09:00"


@dataclass(frozen=True)
class BalanceCharge:
    counter: str
    units: int

    @property
    def quantity(self) -> float:
        """Charge in user-facing units: days for vacation, hours otherwise."""
        if self.counter == VACATION_COUNTER:
            return self.units / 2
        return self.units / 60


def inclusive_day_count(start_date: date, end_date: date) -> int:
    if end_date < start_date:
        raise ValueError(f"end date {end_date} precedes start date {start_date}")
    return (end_date - start_date).days + 1


def parse_clock(value: str) -> int:
    """Parse an ``HH:MM`` clock time into minutes since midnight."""
    try:
        hours_str, minutes_str = value.split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except (AttributeError, ValueError):
        raise ValueError(f"invalid clock time: {value!r}") from None
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"invalid clock time: {value!r}")
    return hours * 60 + minutes


def hourly_minutes(start_time: str, end_time: str) -> int:
    delta = parse_clock(end_time) - parse_clock(start_time)
    if delta < 0:
        delta += MINUTES_PER_DAY
    return delta


def has_time_range(start_time: Optional[str], end_time: Optional[str]) -> bool:
    return bool(start_time and end_time)


def compute_charge(
    leave_type: LeaveType,
    start_date: date,
    end_date: date,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
) -> BalanceCharge:
    leave_type = LeaveType(leave_type)
    partial = has_time_range(start_time, end_time)

    if leave_type == LeaveType.VACATION:
        if partial:
            return BalanceCharge(VACATION_COUNTER, 1)
        return BalanceCharge(VACATION_COUNTER, 2 * inclusive_day_count(start_date, end_date))

    if partial:
        return BalanceCharge(PERSONAL_COUNTER, hourly_minutes(start_time, end_time))
    days = inclusive_day_count(start_date, end_date)
    return BalanceCharge(PERSONAL_COUNTER, days * WORKDAY_HOURS * 60)


def charge_for_request(leave_request) -> BalanceCharge:
    return compute_charge(
        leave_request.type,
        leave_request.start_date,
        leave_request.end_date,
        leave_request.start_time,
        leave_request.end_time,
    )


def apply_charge(user, charge: BalanceCharge) -> int:
    """Add the charge to the user's counter. No upper bound is enforced."""
    used = (getattr(user, charge.counter) or 0) + charge.units
    setattr(user, charge.counter, used)
    return used


def reverse_charge(user, charge: BalanceCharge) -> int:
    """Remove the charge from the user's counter, never going below zero."""
    used = max(0, (getattr(user, charge.counter) or 0) - charge.units)
    setattr(user, charge.counter, used)
    return used


def calculate_days(
    leave_type: LeaveType,
    start_date: date,
    end_date: date,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
) -> float:
    """Display day count: half-day vacations count 0.5, everything else the inclusive span."""
    if LeaveType(leave_type) == LeaveType.VACATION and has_time_range(start_time, end_time):
        return 0.5
    return inclusive_day_count(start_date, end_date)


def half_day_label(start_time: Optional[str]) -> str:
    return "Mattina" if start_time == MORNING_START else "Pomeriggio"
