import calendar
import logging

import streamlit as st
from pydantic import ValidationError

from leasedesk.deal import calculate_deal
from leasedesk.models import DealInput, Jurisdiction, PayDay, PaymentFrequency
from leasedesk.optimizer import calculate_optimal_term
from leasedesk.payment_dates import first_payment_date
from leasedesk.rules import validate_deal
from leasedesk.state import save_state
from leasedesk.utils import format_currency
from ui.sidebar import current_program

logger = logging.getLogger(__name__)

DEFAULT_FORM = {
    "cost_basis": 10000.0,
    "term_months": 0,
    "doc_fee": 499.0,
    "down_payment": 0.0,
    "jurisdiction": Jurisdiction.TN.value,
    "payment_frequency": PaymentFrequency.MONTHLY.value,
}

# Keys rebuilt from ``deal_form`` on every run.
RESULT_KEYS = ("deal_input", "deal_calc", "deal_validation", "optimal_term", "first_payment")


def _clear_results():
    for key in RESULT_KEYS:
        st.session_state[key] = None


def _render_pay_day(frequency: PaymentFrequency) -> PayDay:
    pay = st.session_state.setdefault("pay_day", PayDay().model_dump())
    if frequency in (PaymentFrequency.WEEKLY, PaymentFrequency.BIWEEKLY):
        pay["day_of_week"] = st.selectbox(
            "Customer Pay Day",
            list(range(7)),
            index=int(pay.get("day_of_week", 4)),
            format_func=lambda d: calendar.day_name[d],
        )
    elif frequency is PaymentFrequency.MONTHLY:
        pay["monthly_day"] = st.selectbox(
            "Pay Day of Month",
            list(range(1, 29)),
            index=int(pay.get("monthly_day", 1)) - 1,
        )
    st.session_state["pay_day"] = pay
    return PayDay.model_validate(pay)


def render_deal_form(expanded: bool = True):
    """Deal inputs; prices, validates and stores the deal on every run.

    A term of 0 lets the optimizer choose the term. Returns the
    :class:`DealCalculation` or ``None`` when the inputs cannot be priced.
    """
    form = st.session_state.setdefault("deal_form", dict(DEFAULT_FORM))
    program = current_program()
    max_term = max(program.max_term_months, max(program.valid_terms))

    with st.expander("Deal", expanded=expanded):
        cols = st.columns(2)
        form["cost_basis"] = cols[0].number_input(
            "Cost Basis (ACV)",
            min_value=0.0,
            value=float(form.get("cost_basis", 0.0)),
            step=100.0,
            help="Lender acquisition cost. Never shown to the customer.",
        )
        form["term_months"] = int(
            cols[1].number_input(
                "Term (months, 0 = auto)",
                min_value=0,
                max_value=max_term,
                value=min(int(form.get("term_months", 0)), max_term),
                step=1,
            )
        )
        form["doc_fee"] = cols[0].number_input("Doc Fee", min_value=0.0, value=float(form.get("doc_fee", 0.0)), step=25.0)
        form["down_payment"] = cols[1].number_input(
            "Down Payment", min_value=0.0, value=float(form.get("down_payment", 0.0)), step=100.0
        )
        states = [j.value for j in Jurisdiction]
        form["jurisdiction"] = cols[0].selectbox(
            "State", states, index=states.index(form.get("jurisdiction", Jurisdiction.TN.value))
        )
        freqs = [f.value for f in PaymentFrequency]
        form["payment_frequency"] = cols[1].selectbox(
            "Payment Frequency",
            freqs,
            index=freqs.index(form.get("payment_frequency", PaymentFrequency.MONTHLY.value)),
            format_func=lambda v: PaymentFrequency(v).label,
        )
        pay_day = _render_pay_day(PaymentFrequency(form["payment_frequency"]))

    st.session_state["deal_form"] = form
    save_state()

    if form["cost_basis"] <= 0:
        _clear_results()
        st.info("Enter the cost basis to price the deal.")
        return None

    optimal = calculate_optimal_term(
        form["cost_basis"],
        form["doc_fee"],
        form["jurisdiction"],
        form["payment_frequency"],
        form["down_payment"],
        program=program,
    )
    term = form["term_months"] or optimal.term
    try:
        deal_input = DealInput(
            cost_basis=form["cost_basis"],
            term_months=term,
            doc_fee=form["doc_fee"],
            jurisdiction=form["jurisdiction"],
            payment_frequency=form["payment_frequency"],
            down_payment=form["down_payment"],
        )
    except ValidationError as exc:
        logger.info("deal form rejected: %s", exc)
        _clear_results()
        st.error("Check the deal inputs; some values are out of range.")
        return None

    calc = calculate_deal(deal_input, program)
    validation = validate_deal(calc, program)
    first = first_payment_date(deal_input.payment_frequency, pay_day)

    st.session_state["deal_input"] = deal_input
    st.session_state["deal_calc"] = calc
    st.session_state["deal_validation"] = validation
    st.session_state["optimal_term"] = optimal
    st.session_state["first_payment"] = first

    if not form["term_months"]:
        note = "" if optimal.is_valid else " (no term meets every guardrail)"
        st.caption(f"Auto term: {term} months{note}")
    st.caption(f"Agreed Price: {format_currency(calc.agreed_price)}")
    st.caption(f"Base Payment: {format_currency(calc.base_payment)} {calc.payment_frequency_label}")
    st.caption(f"Total Payment: {format_currency(calc.total_payment)}")
    if first is not None:
        st.caption(f"First Payment: {first.due_date:%m/%d/%Y} ({first.days_until} days)")
    return calc
