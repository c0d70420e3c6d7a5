"""Closed-end lease pricing from the lender cost basis."""

from __future__ import annotations

import logging

from leasedesk.calculators import (
    agreed_price_from_cost_basis,
    amortized_payment,
    depreciation,
    down_payment_split,
    number_of_payments,
    payments_per_year,
    rent_charge,
    round_currency,
    to_monthly_equivalent,
)
from leasedesk.models import DEFAULT_PROGRAM, DealCalculation, DealInput, LeaseProgram

logger = logging.getLogger(__name__)


def calculate_deal(deal: DealInput, program: LeaseProgram = DEFAULT_PROGRAM) -> DealCalculation:
    """Price a lease and derive every figure the contract discloses.

    The agreed price comes first, solved from the cost basis so that
    depreciation plus rent charge collects ``program.recovery_multiple``
    times the cost basis before fees and tax. Each step is rounded to cents
    before the next one uses it; stored leases were quoted that way and
    re-quoting must reproduce them to the cent.
    """

    term = deal.term_months
    freq = deal.payment_frequency
    mf = program.money_factor

    agreed_price = round_currency(
        agreed_price_from_cost_basis(
            deal.cost_basis, term, mf, program.residual_percent, program.recovery_multiple
        )
    )
    residual = round_currency(agreed_price * program.residual_percent)

    # An unconfigured state prices tax-free; validate_deal reports it.
    tax_rate = program.tax_rate_for(deal.jurisdiction) or 0.0
    sales_tax_on_price = round_currency(agreed_price * tax_rate)

    gross_cap_cost = round_currency(agreed_price + deal.doc_fee + sales_tax_on_price)
    cap_cost_reduction = round_currency(deal.down_payment)
    adjusted_cap_cost = round_currency(gross_cap_cost - cap_cost_reduction)

    dep = round_currency(depreciation(adjusted_cap_cost, residual))
    rent = round_currency(rent_charge(adjusted_cap_cost, residual, term, mf))
    # equals dep + rent to the cent; the raw float sum can differ in the last bit
    total_of_base_payments = round_currency(dep + rent)

    n = number_of_payments(term, freq)
    base_payment = round_currency(total_of_base_payments / n)
    tax_per_payment = round_currency(base_payment * tax_rate)
    total_payment = round_currency(base_payment + tax_per_payment)

    investor_payment = round_currency(
        amortized_payment(deal.cost_basis, program.investor_rate, n, payments_per_year(freq))
    )
    spread = round_currency(base_payment - investor_payment)
    dealer_share, lessor_share = down_payment_split(
        cap_cost_reduction, program.down_payment_dealer_percent, program.down_payment_lessor_percent
    )

    calc = DealCalculation(
        cost_basis=deal.cost_basis,
        term_months=term,
        doc_fee=deal.doc_fee,
        jurisdiction=deal.jurisdiction,
        payment_frequency=freq,
        payment_frequency_label=freq.label,
        down_payment=deal.down_payment,
        money_factor=mf,
        residual_percent=program.residual_percent,
        agreed_price=agreed_price,
        residual_value=residual,
        markup=round_currency(agreed_price - deal.cost_basis),
        tax_rate=tax_rate,
        sales_tax_on_price=sales_tax_on_price,
        gross_cap_cost=gross_cap_cost,
        cap_cost_reduction=cap_cost_reduction,
        adjusted_cap_cost=adjusted_cap_cost,
        depreciation=dep,
        rent_charge=rent,
        total_of_base_payments=total_of_base_payments,
        number_of_payments=n,
        base_payment=base_payment,
        tax_per_payment=tax_per_payment,
        total_payment=total_payment,
        total_of_payments=round_currency(total_payment * n),
        base_payment_monthly_equivalent=round_currency(to_monthly_equivalent(base_payment, freq)),
        investor_payment=investor_payment,
        spread=spread,
        monthly_spread_equivalent=round_currency(to_monthly_equivalent(spread, freq)),
        amount_due_at_signing=round_currency(deal.down_payment + total_payment + deal.doc_fee),
        purchase_option_price=round_currency(residual + program.purchase_option_fee),
        down_payment_dealer_share=dealer_share,
        down_payment_lessor_share=lessor_share,
    )
    logger.debug(
        "priced %s-month %s lease: agreed %.2f, base %.2f, spread %.2f/mo",
        term,
        freq.value,
        agreed_price,
        base_payment,
        calc.monthly_spread_equivalent,
    )
    return calc
