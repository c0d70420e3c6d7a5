"""Term search.

Every routine here is a brute-force walk over a small set of candidate
terms: the validity test combines three threshold checks that are not
jointly monotonic in the term, so no closed form is attempted.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from leasedesk.deal import calculate_deal
from leasedesk.models import (
    DEFAULT_PROGRAM,
    DealCalculation,
    DealInput,
    Jurisdiction,
    LeaseProgram,
    OptimalTermResult,
    PaymentFrequency,
    SearchMode,
    TermRange,
)

logger = logging.getLogger(__name__)


def meets_min_payment(calc: DealCalculation, program: LeaseProgram = DEFAULT_PROGRAM) -> bool:
    return calc.base_payment_monthly_equivalent >= program.min_base_payment


def meets_min_spread(calc: DealCalculation, program: LeaseProgram = DEFAULT_PROGRAM) -> bool:
    return calc.monthly_spread_equivalent >= program.min_spread


def meets_max_markup(calc: DealCalculation, program: LeaseProgram = DEFAULT_PROGRAM) -> bool:
    return calc.markup <= program.max_markup


def is_within_guardrails(calc: DealCalculation, program: LeaseProgram = DEFAULT_PROGRAM) -> bool:
    return (
        meets_min_spread(calc, program)
        and meets_max_markup(calc, program)
        and meets_min_payment(calc, program)
    )


def _quotes(base: DealInput, terms: Iterable[int], program: LeaseProgram) -> List[Tuple[int, DealCalculation]]:
    return [
        (term, calculate_deal(base.model_copy(update={"term_months": term}), program))
        for term in terms
    ]


def _scan_base(cost_basis, doc_fee, jurisdiction, frequency, down_payment) -> DealInput:
    return DealInput(
        cost_basis=cost_basis,
        term_months=1,
        doc_fee=doc_fee,
        jurisdiction=jurisdiction,
        payment_frequency=frequency,
        down_payment=down_payment,
    )


def calculate_optimal_term(
    cost_basis,
    doc_fee=0.0,
    jurisdiction=Jurisdiction.TN,
    frequency=PaymentFrequency.MONTHLY,
    down_payment=0.0,
    *,
    program: LeaseProgram = DEFAULT_PROGRAM,
    mode: SearchMode = SearchMode.CONTINUOUS,
) -> OptimalTermResult:
    """Pick the term whose monthly spread lands closest to the target.

    Terms are priced with no down payment unless one is given. Only terms
    passing every guardrail compete; ties go to the shorter term. When none passes, the
    closest term overall is returned with ``is_valid=False`` so the form
    can still show a quote and the reasons it fails.
    """

    mode = SearchMode(mode)
    base = _scan_base(cost_basis, doc_fee, jurisdiction, frequency, down_payment)
    quotes = _quotes(base, program.candidate_terms(mode), program)

    def distance(calc: DealCalculation) -> float:
        return abs(calc.monthly_spread_equivalent - program.target_spread)

    valid = [(term, calc) for term, calc in quotes if is_within_guardrails(calc, program)]
    # min() keeps the first of equal keys, i.e. the shortest term
    pool = valid or quotes
    best_term, best = min(pool, key=lambda q: distance(q[1]))

    valid_range = None
    if valid:
        valid_range = TermRange(min=valid[0][0], max=valid[-1][0])
    else:
        logger.debug(
            "no %s term satisfies the guardrails for cost basis %.2f; falling back to term %s",
            mode.value,
            cost_basis,
            best_term,
        )

    return OptimalTermResult(
        term=best_term,
        is_valid=bool(valid),
        spread=best.monthly_spread_equivalent,
        markup=best.markup,
        base_payment=best.base_payment_monthly_equivalent,
        valid_range=valid_range,
        mode=mode,
    )


def find_valid_term_range(
    cost_basis,
    doc_fee=0.0,
    jurisdiction=Jurisdiction.TN,
    frequency=PaymentFrequency.MONTHLY,
    down_payment=0.0,
    *,
    program: LeaseProgram = DEFAULT_PROGRAM,
    mode: SearchMode = SearchMode.CONTINUOUS,
) -> Optional[TermRange]:
    """Shortest and longest terms that pass every guardrail."""

    base = _scan_base(cost_basis, doc_fee, jurisdiction, frequency, down_payment)
    valid = [
        term
        for term, calc in _quotes(base, program.candidate_terms(mode), program)
        if is_within_guardrails(calc, program)
    ]
    if not valid:
        return None
    return TermRange(min=valid[0], max=valid[-1])


# The three searches below back the validator's one-click fixes. They
# re-price the deal as entered, changing only the term, over the discrete
# term list.


def find_max_term_for_min_payment(deal: DealInput, program: LeaseProgram = DEFAULT_PROGRAM) -> Optional[int]:
    """Longest term that keeps the monthly-equivalent payment at the minimum."""

    passing = [
        term
        for term, calc in _quotes(deal, program.candidate_terms(SearchMode.DISCRETE), program)
        if meets_min_payment(calc, program)
    ]
    return passing[-1] if passing else None


def find_min_term_for_min_spread(deal: DealInput, program: LeaseProgram = DEFAULT_PROGRAM) -> Optional[int]:
    """Shortest term whose monthly-equivalent spread reaches the minimum."""

    for term in program.candidate_terms(SearchMode.DISCRETE):
        calc = calculate_deal(deal.model_copy(update={"term_months": term}), program)
        if meets_min_spread(calc, program):
            return term
    return None


def find_term_for_max_markup(deal: DealInput, program: LeaseProgram = DEFAULT_PROGRAM) -> Optional[int]:
    """Shortest term that brings the markup within the limit.

    Markup falls as the term grows, so this is the first term that fits.
    """

    for term in program.candidate_terms(SearchMode.DISCRETE):
        calc = calculate_deal(deal.model_copy(update={"term_months": term}), program)
        if meets_max_markup(calc, program):
            return term
    return None
