import pytest
from datetime import date
from types import SimpleNamespace

from vacaplanner.models.leave_request import LeaveType
from vacaplanner.services import balance_ledger
from vacaplanner.services.balance_ledger import (
    PERSONAL_COUNTER,
    VACATION_COUNTER,
    BalanceCharge,
)


def _user(half_days=0, minutes=0):
    return SimpleNamespace(vacation_half_days_used=half_days, personal_minutes_used=minutes)


def test_single_day_counts_as_one():
    day = date(2024, 6, 3)
    assert balance_ledger.inclusive_day_count(day, day) == 1
    assert balance_ledger.calculate_days(LeaveType.VACATION, day, day) == 1


@pytest.mark.parametrize("start,end,expected", [
    (date(2024, 6, 3), date(2024, 6, 7), 5),
    (date(2024, 2, 28), date(2024, 3, 1), 3),  # leap year
    (date(2024, 12, 30), date(2025, 1, 2), 4),
])
def test_multi_day_span_is_inclusive(start, end, expected):
    assert balance_ledger.inclusive_day_count(start, end) == expected
    assert balance_ledger.calculate_days(LeaveType.SICK, start, end) == expected


def test_reversed_range_rejected():
    with pytest.raises(ValueError):
        balance_ledger.inclusive_day_count(date(2024, 6, 5), date(2024, 6, 3))


def test_whole_day_vacation_charges_half_day_units():
    charge = balance_ledger.compute_charge(LeaveType.VACATION, date(2024, 6, 3), date(2024, 6, 5))
    assert charge == BalanceCharge(VACATION_COUNTER, 6)
    assert charge.quantity == 3


@pytest.mark.parametrize("start_time,end_time", [("09:00", "13:00"), ("14:00", "18:00"), ("08:15", "08:30")])
def test_half_day_vacation_is_fixed_regardless_of_times(start_time, end_time):
    charge = balance_ledger.compute_charge(
        LeaveType.VACATION, date(2024, 6, 10), date(2024, 6, 10), start_time, end_time
    )
    assert charge.counter == VACATION_COUNTER
    assert charge.quantity == 0.5
    assert balance_ledger.calculate_days(
        LeaveType.VACATION, date(2024, 6, 10), date(2024, 6, 10), start_time, end_time
    ) == 0.5


def test_only_one_time_set_is_a_whole_day():
    charge = balance_ledger.compute_charge(
        LeaveType.VACATION, date(2024, 6, 10), date(2024, 6, 10), "09:00", None
    )
    assert charge.quantity == 1


@pytest.mark.parametrize("leave_type", [LeaveType.SICK, LeaveType.PERSONAL])
def test_hourly_leave_uses_clock_difference(leave_type):
    charge = balance_ledger.compute_charge(
        leave_type, date(2024, 6, 10), date(2024, 6, 10), "14:00", "17:30"
    )
    assert charge == BalanceCharge(PERSONAL_COUNTER, 210)
    assert charge.quantity == 3.5


def test_hourly_leave_wraps_past_midnight():
    assert balance_ledger.hourly_minutes("22:00", "02:00") == 240
    assert balance_ledger.hourly_minutes("10:00", "10:00") == 0


def test_whole_day_personal_leave_uses_eight_hour_workday():
    charge = balance_ledger.compute_charge(LeaveType.PERSONAL, date(2024, 6, 3), date(2024, 6, 4))
    assert charge == BalanceCharge(PERSONAL_COUNTER, 2 * 8 * 60)
    assert charge.quantity == 16


@pytest.mark.parametrize("value", ["9", "24:00", "12:60", "ab:cd", "", None])
def test_parse_clock_rejects_malformed_values(value):
    with pytest.raises(ValueError):
        balance_ledger.parse_clock(value)


def test_apply_has_no_upper_bound():
    user = _user(half_days=44)
    charge = BalanceCharge(VACATION_COUNTER, 2)
    assert balance_ledger.apply_charge(user, charge) == 46
    assert user.vacation_half_days_used == 46


def test_apply_then_reverse_restores_counter():
    user = _user(half_days=3, minutes=90)
    for charge in (BalanceCharge(VACATION_COUNTER, 1), BalanceCharge(PERSONAL_COUNTER, 180)):
        before = getattr(user, charge.counter)
        balance_ledger.apply_charge(user, charge)
        balance_ledger.reverse_charge(user, charge)
        assert getattr(user, charge.counter) == before


def test_reverse_is_floored_at_zero():
    user = _user(half_days=1)
    balance_ledger.reverse_charge(user, BalanceCharge(VACATION_COUNTER, 4))
    assert user.vacation_half_days_used == 0


def test_half_day_label():
    assert balance_ledger.half_day_label("09:00") == "Mattina"
    assert balance_ledger.half_day_label("14:00") == "Pomeriggio"
