import streamlit as st

from leasedesk.utils import format_currency


def render_bottombar(enabled: bool = True):
    calc = st.session_state.get("deal_calc")
    validation = st.session_state.get("deal_validation")
    if not enabled or calc is None:
        return
    st.markdown(
        """
        <style>
        .leasedesk-bottombar {position:fixed; bottom:0; left:0; right:0; background-color:white; border-top:1px solid #ddd; padding:4px 8px; z-index:100;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    with st.container():
        st.markdown('<div class="leasedesk-bottombar">', unsafe_allow_html=True)
        cols = st.columns([1, 1, 1, 1, 1])
        cols[0].metric("Term", f"{calc.term_months} mo")
        cols[1].metric(f"{calc.payment_frequency_label} Payment", format_currency(calc.total_payment))
        cols[2].metric("Spread (mo)", format_currency(calc.monthly_spread_equivalent))
        status = "PASS" if validation is None or validation.is_valid else "CHECK"
        cols[3].metric("Guardrails", status)
        if cols[4].button("Open Dashboard", key="open_dashboard"):
            st.session_state["view_mode"] = "Dashboard"
            st.rerun()
        st.markdown("</div>", unsafe_allow_html=True)
