import json

from streamlit.testing.v1 import AppTest


def sidebar_app():
    from ui.deal_form import render_deal_form
    from ui.sidebar import render_program_sidebar

    render_program_sidebar()
    render_deal_form()


def _app_at_36_months():
    at = AppTest.from_function(sidebar_app)
    at.session_state["deal_form"] = {
        "cost_basis": 10000.0,
        "term_months": 36,
        "doc_fee": 499.0,
        "down_payment": 0.0,
        "jurisdiction": "TN",
        "payment_frequency": "monthly",
    }
    return at


def test_program_edit_changes_guardrails():
    at = _app_at_36_months()
    at.run()
    assert not at.session_state["deal_validation"].is_valid

    ta = next(w for w in at.sidebar.text_area if w.label == "Lease Program")
    program = json.loads(ta.value)
    program["maxMarkup"] = 6000.0
    ta.set_value(json.dumps(program, indent=2))
    at.run()
    assert at.session_state["lease_program"]["maxMarkup"] == 6000.0
    assert at.session_state["deal_validation"].is_valid


def test_invalid_program_keeps_previous():
    at = _app_at_36_months()
    at.run()
    ta = next(w for w in at.sidebar.text_area if w.label == "Lease Program")
    ta.set_value("{not json")
    at.run()
    assert at.sidebar.error
    assert at.session_state["lease_program"]["maxMarkup"] == 5000.0

    ta = next(w for w in at.sidebar.text_area if w.label == "Lease Program")
    ta.set_value(json.dumps({"downPaymentDealerPercent": 0.9}))
    at.run()
    assert at.sidebar.error
    assert at.session_state["lease_program"]["downPaymentDealerPercent"] == 0.75
