import streamlit as st

from leasedesk.schedule import build_payment_schedule
from leasedesk.utils import format_currency
from ui.sidebar import current_program


def use_term(term: int):
    """Apply a suggested term to the deal form and rerun."""
    st.session_state.setdefault("deal_form", {})["term_months"] = int(term)
    st.rerun()


def render_deal_dashboard():
    """Render deal metrics, guardrail errors and the payment schedule."""
    st.header("Dashboard")
    calc = st.session_state.get("deal_calc")
    validation = st.session_state.get("deal_validation")
    if calc is None:
        st.info("Price a deal first.")
        return
    program = current_program()

    cols = st.columns(4)
    cols[0].metric("Agreed Price", format_currency(calc.agreed_price))
    cols[1].metric("Residual Value", format_currency(calc.residual_value))
    cols[2].metric(f"{calc.payment_frequency_label} Payment", format_currency(calc.total_payment))
    cols[3].metric("Due at Signing", format_currency(calc.amount_due_at_signing))
    cols = st.columns(4)
    cols[0].metric(
        "Base Payment (mo)",
        format_currency(calc.base_payment_monthly_equivalent),
        delta="PASS" if calc.base_payment_monthly_equivalent >= program.min_base_payment else "CHECK",
    )
    cols[1].metric(
        "Spread (mo)",
        format_currency(calc.monthly_spread_equivalent),
        delta="PASS" if calc.monthly_spread_equivalent >= program.min_spread else "CHECK",
    )
    cols[2].metric(
        "Markup",
        format_currency(calc.markup),
        delta="PASS" if calc.markup <= program.max_markup else "CHECK",
    )
    cols[3].metric("Investor Payment", format_currency(calc.investor_payment))

    if validation is not None and validation.errors:
        for err in validation.errors:
            st.error(err.message)
            if err.suggested_value is not None and err.suggested_value != calc.term_months:
                if st.button(f"Use {err.suggested_value} months", key=f"use_term_{err.field.value}"):
                    use_term(err.suggested_value)
    else:
        st.success("Deal is within program guardrails.")

    if validation is not None and validation.valid_term_range is not None:
        rng = validation.valid_term_range
        st.caption(f"Valid terms: {rng.min} to {rng.max} months")
    else:
        st.caption("No term satisfies every guardrail at this cost basis.")

    with st.expander("Payment Schedule"):
        st.dataframe(
            build_payment_schedule(calc, st.session_state.get("first_payment"), program),
            use_container_width=True,
        )
