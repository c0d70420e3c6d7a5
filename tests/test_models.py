import math

import pytest
from pydantic import ValidationError

from leasedesk.deal import calculate_deal
from leasedesk.models import DEFAULT_PROGRAM, DealInput, Jurisdiction, LeaseProgram, SearchMode


@pytest.mark.parametrize(
    "field, value",
    [
        ("cost_basis", 0),
        ("cost_basis", -1),
        ("cost_basis", math.inf),
        ("cost_basis", math.nan),
        ("term_months", 0),
        ("term_months", 73),
        ("term_months", 10**6),
        ("doc_fee", -1),
        ("doc_fee", math.inf),
        ("down_payment", -10),
        ("down_payment", math.nan),
    ],
)
def test_deal_input_rejects_out_of_domain_values(field, value):
    params = {"cost_basis": 10000.0, "term_months": 36}
    params[field] = value
    with pytest.raises(ValidationError):
        DealInput(**params)


def test_deal_input_rejects_unknown_state():
    with pytest.raises(ValidationError):
        DealInput(cost_basis=10000.0, term_months=36, jurisdiction="GA")


def test_deal_input_accepts_camel_case():
    deal = DealInput.model_validate({"costBasis": 10000, "termMonths": 36, "paymentFrequency": "weekly"})
    assert deal.cost_basis == 10000
    assert deal.jurisdiction is Jurisdiction.TN


def test_default_program():
    assert DEFAULT_PROGRAM.money_factor == 0.009996
    assert DEFAULT_PROGRAM.tax_rate_for("TN") == 0.095
    assert DEFAULT_PROGRAM.tax_rate_for(Jurisdiction.MS) == 0.05
    assert DEFAULT_PROGRAM.candidate_terms() == tuple(range(1, 49))
    assert DEFAULT_PROGRAM.candidate_terms(SearchMode.DISCRETE) == (12, 24, 36, 48, 60, 72)


def test_program_rejects_bad_split_and_range():
    with pytest.raises(ValidationError):
        LeaseProgram(down_payment_dealer_percent=0.8)
    with pytest.raises(ValidationError):
        LeaseProgram(min_term_months=50)
    with pytest.raises(ValidationError):
        LeaseProgram(valid_terms=())
    with pytest.raises(ValidationError):
        LeaseProgram(valid_terms=(12, 36, 84))
    with pytest.raises(ValidationError):
        LeaseProgram(max_term_months=100)


def test_program_json_roundtrip():
    data = DEFAULT_PROGRAM.model_dump(mode="json", by_alias=True)
    assert data["taxRates"] == {"TN": 0.095, "MS": 0.05}
    assert LeaseProgram.model_validate(data) == DEFAULT_PROGRAM


def test_models_are_frozen():
    deal = DealInput(cost_basis=10000.0, term_months=36)
    with pytest.raises(ValidationError):
        deal.term_months = 48


def test_longest_valid_term_is_accepted():
    assert DealInput(cost_basis=10000.0, term_months=72, payment_frequency="weekly").term_months == 72


def test_default_tax_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_PROGRAM.tax_rates[Jurisdiction.TN] = 0.0
    with pytest.raises(TypeError):
        DEFAULT_PROGRAM.tax_rates["GA"] = 0.07
    assert calculate_deal(DealInput(cost_basis=10000.0, term_months=36)).tax_rate == 0.095


def test_program_does_not_share_caller_tax_table():
    rates = {"TN": 0.08, "MS": 0.05}
    program = LeaseProgram(tax_rates=rates)
    rates["TN"] = 0.0
    assert program.tax_rate_for("TN") == 0.08
