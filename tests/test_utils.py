import pytest

from leasedesk.utils import apr_to_money_factor, format_currency, format_percent, money_factor_to_apr


def test_money_factor_apr():
    assert money_factor_to_apr(0.009996) == pytest.approx(23.99, abs=0.001)
    assert apr_to_money_factor(23.99) == pytest.approx(0.009996, abs=1e-6)


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-5) == "-$5.00"
    assert format_currency(None) == "$0.00"


def test_format_percent():
    assert format_percent(0.095) == "9.50%"
    assert format_percent(0.125, 1) == "12.5%"
