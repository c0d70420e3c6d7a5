"""First payment date from the customer's pay schedule."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional

from leasedesk.models import FirstPayment, PayDay, PaymentFrequency

MIN_DAYS_WEEKLY = 7
MIN_DAYS_BIWEEKLY = 14
MIN_DAYS_MONTHLY = 15
MAX_DAYS_MONTHLY = 30


def add_months(d: date, months: int, day: Optional[int] = None) -> date:
    """Move ``d`` by whole months, clamping the day to the month's length."""
    index = d.month - 1 + months
    year, month = d.year + index // 12, index % 12 + 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day or d.day, last))


def _next_weekday(today: date, weekday: int) -> date:
    ahead = (weekday - today.weekday()) % 7
    return today + timedelta(days=ahead or 7)


def _weekday_payment(today: date, weekday: int, min_days: int) -> FirstPayment:
    due = _next_weekday(today, weekday)
    skipped = 0
    if (due - today).days < min_days:
        due += timedelta(days=min_days)
        skipped = 1
    return FirstPayment(due_date=due, days_until=(due - today).days, skipped_pay_days=skipped)


def _monthly_payment(today: date, pay_day: int) -> FirstPayment:
    due = date(today.year, today.month, pay_day) if today.day < pay_day else add_months(today, 1, pay_day)
    skipped = 0
    if (due - today).days < MIN_DAYS_MONTHLY:
        due = add_months(due, 1, pay_day)
        skipped = 1
    if (due - today).days > MAX_DAYS_MONTHLY:
        due = today + timedelta(days=MAX_DAYS_MONTHLY)
    return FirstPayment(due_date=due, days_until=(due - today).days, skipped_pay_days=skipped)


def first_payment_date(frequency, pay_day: Optional[PayDay] = None, contract_date: Optional[date] = None) -> Optional[FirstPayment]:
    """Earliest allowed first payment for a lease signed on ``contract_date``.

    Weekly and bi-weekly leases land on the customer's pay weekday at least
    one week (two for bi-weekly) after signing. Monthly leases land on the
    pay day of month at least 15 days out, but never later than 30 days.
    Semi-monthly pay schedules have no rule and return ``None``.
    """

    pay_day = pay_day or PayDay()
    today = contract_date or date.today()
    frequency = PaymentFrequency(frequency)

    if frequency is PaymentFrequency.WEEKLY:
        return _weekday_payment(today, pay_day.day_of_week, MIN_DAYS_WEEKLY)
    if frequency is PaymentFrequency.BIWEEKLY:
        return _weekday_payment(today, pay_day.day_of_week, MIN_DAYS_BIWEEKLY)
    if frequency is PaymentFrequency.MONTHLY:
        return _monthly_payment(today, pay_day.monthly_day)
    return None
