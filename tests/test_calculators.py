import pytest

from leasedesk.calculators import (
    agreed_price_from_cost_basis,
    amortized_payment,
    depreciation,
    down_payment_split,
    from_monthly_equivalent,
    number_of_payments,
    payments_per_year,
    rent_charge,
    reverse_capitalized_cost,
    round_currency,
    to_monthly_equivalent,
)
from leasedesk.models import PaymentFrequency


def test_round_currency_half_up():
    assert round_currency(123.455) == 123.46
    assert round_currency(2.675) == 2.68
    assert round_currency(-1.005) == -1.01
    assert round_currency(10) == 10.0


@pytest.mark.parametrize(
    "freq, expected",
    [("weekly", 52), ("biweekly", 26), ("semimonthly", 24), ("monthly", 12)],
)
def test_payments_per_year(freq, expected):
    assert payments_per_year(freq) == expected
    assert payments_per_year(PaymentFrequency(freq)) == expected


def test_unknown_frequency_rejected():
    with pytest.raises(ValueError):
        payments_per_year("daily")


def test_monthly_equivalent_roundtrip():
    assert to_monthly_equivalent(100, "weekly") == pytest.approx(433.3333, abs=1e-3)
    assert to_monthly_equivalent(100, "monthly") == 100
    assert from_monthly_equivalent(433.33, "weekly") == pytest.approx(100, abs=0.01)


def test_number_of_payments():
    assert number_of_payments(36, "monthly") == 36
    assert number_of_payments(36, "semimonthly") == 72
    assert number_of_payments(36, "biweekly") == 78
    assert number_of_payments(36, "weekly") == 156
    # 6.5 rounds up
    assert number_of_payments(3, "biweekly") == 7


def test_amortized_payment():
    assert amortized_payment(10000, 0.12, 12, 12) == pytest.approx(888.49, abs=0.01)
    assert amortized_payment(12000, 0, 12, 12) == 1000
    assert amortized_payment(12000, 0.12, 0, 12) == 0.0


def test_reverse_capitalized_cost_inverts_lease_math():
    cap, residual, term = 20000.0, 5000.0, 36
    mf = 0.009996
    rent = rent_charge(cap, residual, term, mf)
    assert rent == pytest.approx(8996.4, abs=1e-6)
    total = depreciation(cap, residual) + rent
    back = reverse_capitalized_cost(total / 36, residual, term, 36, mf)
    assert back == pytest.approx(cap, abs=1e-6)


def test_agreed_price_recovers_twice_cost_basis():
    price = agreed_price_from_cost_basis(10000, 36, 0.009996, 0.15)
    assert round_currency(price) == 15824.86
    residual = price * 0.15
    collected = depreciation(price, residual) + rent_charge(price, residual, 36, 0.009996)
    assert collected == pytest.approx(20000, abs=1e-6)


def test_agreed_price_rejects_non_positive_term():
    with pytest.raises(ValueError):
        agreed_price_from_cost_basis(10000, 0, 0.009996, 0.15)


def test_down_payment_split():
    assert down_payment_split(1000, 0.75, 0.25) == (750.0, 250.0)
    assert down_payment_split(0, 0.75, 0.25) == (0.0, 0.0)
