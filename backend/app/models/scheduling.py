"""Scheduling domain models: shift patterns and pay rules."""

from datetime import date, datetime, time

from pydantic import BaseModel


class ShiftPattern(BaseModel):
    """Recurring shift at a location.

    Counters that belong to a disabled recurrence mode are 0
    (e.g. repeat_week_num when is_weekly is false).
    """

    id: int
    organization_id: int
    location_id: int
    pattern_name: str
    pattern_type: str | None = None
    is_weekly: bool = False
    repeat_week_num: int = 0
    is_on_and_off: bool = False
    length_days: int = 0
    is_specific_month: bool = False
    days: int = 0
    repeat_month: int = 0
    is_last_day_of_month: bool = False
    period_starting_date: date | None = None
    period_ending_date: date | None = None
    is_applied_on_bank_holidays: bool = False
    is_auto_extend: bool = False
    auto_extend_month: int = 0
    auto_extend_days_before_period: int = 0
    period_starting_time: time | None = None
    period_ending_time: time | None = None
    shift_instruction: str = ""
    created_at: datetime | None = None


class PayRuleTarget(BaseModel):
    """What a pay rule applies to; unset ids mean "any"."""

    position_id: int | None = None
    client_id: int | None = None
    location_id: int | None = None
    event_id: int | None = None


class PayRule(BaseModel):
    id: int
    organization_id: int
    pay_rate: float
    pay_code: str
    conditions: str | None = None
    applies_to: list[PayRuleTarget] = []
    created_at: datetime | None = None
