import pytest

from leasedesk.deal import calculate_deal
from leasedesk.models import DEFAULT_PROGRAM, DealInput, LeaseProgram, SearchMode, TermRange
from leasedesk.optimizer import (
    calculate_optimal_term,
    find_max_term_for_min_payment,
    find_min_term_for_min_spread,
    find_term_for_max_markup,
    find_valid_term_range,
    is_within_guardrails,
)


def test_continuous_search_picks_term_closest_to_target_spread():
    result = calculate_optimal_term(10000.0, 499.0, "TN", "monthly")
    assert result.is_valid
    assert result.mode is SearchMode.CONTINUOUS
    assert result.term == 48
    assert result.valid_range == TermRange(min=43, max=48)
    assert result.spread == pytest.approx(208.04, abs=0.005)
    assert result.markup == pytest.approx(4267.58, abs=0.005)
    assert result.base_payment == pytest.approx(473.84, abs=0.005)


def test_discrete_search_uses_valid_terms():
    result = calculate_optimal_term(10000.0, 499.0, "TN", "monthly", mode=SearchMode.DISCRETE)
    assert result.term == 60
    assert result.valid_range == TermRange(min=48, max=60)
    assert result.spread == pytest.approx(154.56, abs=0.005)


def test_small_cost_basis():
    result = calculate_optimal_term(3000.0, 499.0, "TN", "monthly")
    assert result.term == 22
    assert result.valid_range == TermRange(min=1, max=24)
    assert result.spread == pytest.approx(175.77, abs=0.005)
    discrete = calculate_optimal_term(3000.0, 499.0, "TN", "monthly", mode="discrete")
    assert discrete.term == 24
    assert discrete.valid_range == TermRange(min=12, max=24)


def test_no_valid_term_falls_back():
    result = calculate_optimal_term(20000.0, 499.0, "TN", "monthly")
    assert not result.is_valid
    assert result.valid_range is None
    assert result.term == 48
    assert result.markup > 5000
    assert find_valid_term_range(20000.0, 499.0, "TN", "monthly") is None


def test_chosen_term_passes_guardrails():
    result = calculate_optimal_term(10000.0, 499.0, "TN", "monthly")
    calc = calculate_deal(DealInput(cost_basis=10000.0, term_months=result.term, doc_fee=499.0))
    assert is_within_guardrails(calc)


def test_valid_range_respects_program_terms():
    program = LeaseProgram(max_term_months=45)
    assert find_valid_term_range(10000.0, 499.0, "TN", "monthly", program=program) == TermRange(min=43, max=45)


def test_suggestion_searches():
    deal = DealInput(cost_basis=5000.0, term_months=48, doc_fee=499.0, jurisdiction="TN")
    assert find_max_term_for_min_payment(deal) == 36
    assert find_min_term_for_min_spread(deal) == 12
    markup_deal = deal.model_copy(update={"cost_basis": 10000.0, "term_months": 36})
    assert find_term_for_max_markup(markup_deal) == 48


def test_suggestion_searches_return_none_when_nothing_fits():
    program = LeaseProgram(min_base_payment=100000.0, max_markup=-1.0)
    deal = DealInput(cost_basis=5000.0, term_months=48)
    assert find_max_term_for_min_payment(deal, program) is None
    assert find_term_for_max_markup(deal, program) is None


@pytest.mark.parametrize("cost_basis", [2000.0, 6000.0, 12000.0, 25000.0])
@pytest.mark.parametrize("freq", ["weekly", "biweekly", "monthly"])
def test_optimal_term_stays_in_search_domain(cost_basis, freq):
    result = calculate_optimal_term(cost_basis, 499.0, "TN", freq)
    assert 1 <= result.term <= 48
    if result.is_valid:
        assert result.spread >= 150
    discrete = calculate_optimal_term(cost_basis, 499.0, "TN", freq, mode=SearchMode.DISCRETE)
    assert discrete.term in (12, 24, 36, 48, 60, 72)


def test_down_payment_follows_frequency_and_program_is_keyword_only():
    positional = calculate_optimal_term(10000.0, 499.0, "TN", "monthly", 1000.0)
    assert positional == calculate_optimal_term(10000.0, 499.0, "TN", "monthly", down_payment=1000.0)
    assert find_valid_term_range(10000.0, 499.0, "TN", "monthly", 1000.0) == positional.valid_range
    with pytest.raises(TypeError):
        calculate_optimal_term(10000.0, 499.0, "TN", "monthly", 0.0, DEFAULT_PROGRAM)
