from __future__ import annotations

import logging
from typing import List

from leasedesk.models import (
    DEFAULT_PROGRAM,
    DealCalculation,
    LeaseProgram,
    ValidationField,
    ValidationIssue,
    ValidationResult,
)
from leasedesk.optimizer import (
    find_max_term_for_min_payment,
    find_min_term_for_min_spread,
    find_term_for_max_markup,
    find_valid_term_range,
    meets_max_markup,
    meets_min_payment,
    meets_min_spread,
)
from leasedesk.utils import format_currency

logger = logging.getLogger(__name__)


def validate_deal(calc: DealCalculation, program: LeaseProgram = DEFAULT_PROGRAM) -> ValidationResult:
    """Check a priced deal against the program guardrails.

    Checks are independent, so one deal can fail several at once. Each
    guardrail failure carries a suggested term from the discrete term list
    when one exists.
    """

    errors: List[ValidationIssue] = []
    deal = calc.deal_input()

    if not meets_min_payment(calc, program):
        errors.append(
            ValidationIssue(
                field=ValidationField.BASE_PAYMENT,
                message=(
                    f"Base payment {format_currency(calc.base_payment_monthly_equivalent)}/mo is below "
                    f"the {format_currency(program.min_base_payment)} minimum"
                ),
                suggested_value=find_max_term_for_min_payment(deal, program),
            )
        )

    if not meets_min_spread(calc, program):
        errors.append(
            ValidationIssue(
                field=ValidationField.SPREAD,
                message=(
                    f"Spread {format_currency(calc.monthly_spread_equivalent)}/mo is below "
                    f"the {format_currency(program.min_spread)} minimum"
                ),
                suggested_value=find_min_term_for_min_spread(deal, program),
            )
        )

    if not meets_max_markup(calc, program):
        errors.append(
            ValidationIssue(
                field=ValidationField.MARKUP,
                message=(
                    f"Markup {format_currency(calc.markup)} exceeds "
                    f"the {format_currency(program.max_markup)} maximum"
                ),
                suggested_value=find_term_for_max_markup(deal, program),
            )
        )

    if calc.agreed_price <= 0:
        errors.append(
            ValidationIssue(
                field=ValidationField.AGREED_PRICE,
                message="Agreed price calculation resulted in an invalid value",
            )
        )

    if calc.residual_value <= 0:
        errors.append(
            ValidationIssue(
                field=ValidationField.RESIDUAL_VALUE,
                message="Residual value must be positive",
            )
        )

    if program.tax_rate_for(calc.jurisdiction) is None:
        errors.append(
            ValidationIssue(
                field=ValidationField.JURISDICTION,
                message=f"No tax rate configured for {calc.jurisdiction.value}",
            )
        )

    if errors:
        logger.debug(
            "deal failed %s: %s",
            len(errors),
            ", ".join(e.field.value for e in errors),
        )

    return ValidationResult(
        is_valid=not errors,
        errors=tuple(errors),
        valid_term_range=find_valid_term_range(
            calc.cost_basis,
            calc.doc_fee,
            calc.jurisdiction,
            calc.payment_frequency,
            calc.down_payment,
            program=program,
        ),
    )


def has_blocking(result: ValidationResult) -> bool:
    return not result.is_valid
