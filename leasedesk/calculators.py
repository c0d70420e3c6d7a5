from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from leasedesk.models import PaymentFrequency
from leasedesk.presets import PAYMENT_FREQUENCIES

_CENT = Decimal("0.01")


def round_currency(value):
    """Round a dollar amount to cents, halves away from zero.

    The float is read through its shortest ``repr`` first so values such as
    ``123.455`` round the way a person reading them expects (``123.46``)
    rather than the way their binary approximation would.
    """

    return float(Decimal(repr(float(value))).quantize(_CENT, rounding=ROUND_HALF_UP))


def payments_per_year(frequency) -> int:
    return PAYMENT_FREQUENCIES[PaymentFrequency(frequency).value]["payments_per_year"]


def to_monthly_equivalent(amount, frequency):
    """Express a per-payment amount as what it would be per month."""

    return amount * payments_per_year(frequency) / 12


def from_monthly_equivalent(monthly_amount, frequency):
    """Inverse of :func:`to_monthly_equivalent`."""

    return monthly_amount * 12 / payments_per_year(frequency)


def number_of_payments(term_months, frequency) -> int:
    """Payments in a term at the given cadence, with .5 rounding up.

    36 months is 36 monthly, 72 semi-monthly, 78 bi-weekly or 156 weekly
    payments.
    """

    return int(math.floor(term_months * payments_per_year(frequency) / 12 + 0.5))


def amortized_payment(principal, annual_rate, n_payments, periods_per_year=12):
    """Level payment that retires ``principal`` over ``n_payments``.

    ``annual_rate`` is a nominal fraction (``0.125`` for 12.5%) compounded
    ``periods_per_year`` times a year. A zero rate degrades to straight-line
    repayment.
    """

    n = int(n_payments)
    if n <= 0:
        return 0.0
    r = annual_rate / periods_per_year
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return principal * r * growth / (growth - 1)


def reverse_capitalized_cost(base_payment, residual, term_months, n_payments, money_factor):
    """Recover the adjusted capitalized cost behind a base payment.

    Solves ``total = (cap - residual) + (cap + residual) * mf * term`` for
    ``cap``. The money factor is monthly whatever the payment cadence.
    """

    total_base_payments = base_payment * n_payments
    mf_term = money_factor * term_months
    return (total_base_payments - residual * (mf_term - 1)) / (1 + mf_term)


def agreed_price_from_cost_basis(cost_basis, term_months, money_factor, residual_percent, recovery_multiple=2.0):
    """Customer price whose lease collects ``recovery_multiple`` x cost basis.

    With the residual fixed at ``residual_percent`` of the price, depreciation
    plus rent charge equals the recovery target when

        price = target / ((1 - rp) + (1 + rp) * mf * term)
    """

    if term_months <= 0:
        raise ValueError("term_months must be positive")
    target = cost_basis * recovery_multiple
    return target / ((1 - residual_percent) + (1 + residual_percent) * money_factor * term_months)


def depreciation(adjusted_cap, residual):
    return adjusted_cap - residual


def rent_charge(adjusted_cap, residual, term_months, money_factor):
    return (adjusted_cap + residual) * money_factor * term_months


def down_payment_split(cap_cost_reduction, dealer_percent, lessor_percent):
    """Return the dealer and lessor shares of the cap cost reduction."""

    return (
        round_currency(cap_cost_reduction * dealer_percent),
        round_currency(cap_cost_reduction * lessor_percent),
    )
