"""Payment-by-payment schedule for a priced lease."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

import pandas as pd

from leasedesk.calculators import payments_per_year, round_currency
from leasedesk.models import DEFAULT_PROGRAM, DealCalculation, FirstPayment, LeaseProgram, PaymentFrequency
from leasedesk.payment_dates import add_months

SCHEDULE_COLUMNS = [
    "PaymentNumber",
    "DueDate",
    "BasePayment",
    "Tax",
    "TotalPayment",
    "Depreciation",
    "RentCharge",
    "LeaseBalance",
    "InvestorInterest",
    "InvestorPrincipal",
    "InvestorBalance",
]


def _due_date(first: date, index: int, frequency: PaymentFrequency) -> date:
    if frequency is PaymentFrequency.WEEKLY:
        return first + timedelta(days=7 * index)
    if frequency is PaymentFrequency.BIWEEKLY:
        return first + timedelta(days=14 * index)
    if frequency is PaymentFrequency.SEMIMONTHLY:
        due = add_months(first, index // 2, first.day)
        return due + timedelta(days=15) if index % 2 else due
    return add_months(first, index, first.day)


def _even_split(total: float, n: int) -> List[float]:
    """``n`` cent-rounded parts of ``total``; the last absorbs the remainder."""
    part = round_currency(total / n)
    parts = [part] * (n - 1)
    parts.append(round_currency(total - part * (n - 1)))
    return parts


def build_payment_schedule(
    calc: DealCalculation,
    first_payment: Optional[FirstPayment] = None,
    program: LeaseProgram = DEFAULT_PROGRAM,
) -> pd.DataFrame:
    """One row per scheduled payment.

    The lease side spreads depreciation and rent charge evenly, so the
    balance runs from the adjusted cap cost down to the residual. The
    investor side amortizes the cost basis at the investor rate down to
    zero using the record's investor payment.
    """

    n = calc.number_of_payments
    if n <= 0:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)

    freq = PaymentFrequency(calc.payment_frequency)
    period_rate = program.investor_rate / payments_per_year(freq)

    dep_parts = _even_split(calc.depreciation, n)
    rent_parts = _even_split(calc.rent_charge, n)

    lease_balance = calc.adjusted_cap_cost
    investor_balance = calc.cost_basis
    rows = []
    for i in range(n):
        lease_balance = round_currency(lease_balance - dep_parts[i])

        interest = round_currency(investor_balance * period_rate)
        if i == n - 1:
            principal = investor_balance
        else:
            principal = min(round_currency(calc.investor_payment - interest), investor_balance)
        investor_balance = round_currency(investor_balance - principal)

        rows.append(
            {
                "PaymentNumber": i + 1,
                "DueDate": _due_date(first_payment.due_date, i, freq) if first_payment else None,
                "BasePayment": calc.base_payment,
                "Tax": calc.tax_per_payment,
                "TotalPayment": calc.total_payment,
                "Depreciation": dep_parts[i],
                "RentCharge": rent_parts[i],
                "LeaseBalance": lease_balance,
                "InvestorInterest": interest,
                "InvestorPrincipal": round_currency(principal),
                "InvestorBalance": investor_balance,
            }
        )
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def schedule_totals(schedule: pd.DataFrame) -> dict:
    """Column sums of the money columns, rounded to cents."""
    cols = ["BasePayment", "Tax", "TotalPayment", "Depreciation", "RentCharge", "InvestorInterest", "InvestorPrincipal"]
    if schedule.empty:
        return {c: 0.0 for c in cols}
    return {c: round_currency(schedule[c].sum()) for c in cols}
