"""Assorted utility helpers."""


def money_factor_to_apr(money_factor):
    """APR in percent for a money factor (``0.009996 -> 23.99``)."""
    return money_factor * 2400


def apr_to_money_factor(apr):
    return apr / 2400


def format_currency(value):
    """``1234.5 -> "$1,234.50"``; negatives keep the sign ahead of the dollar."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return "$0.00"
    if v < 0:
        return f"-${abs(v):,.2f}"
    return f"${v:,.2f}"


def format_percent(fraction, digits=2):
    return f"{fraction * 100:.{digits}f}%"
