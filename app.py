import logging

import streamlit as st

from leasedesk.state import load_state
from leasedesk.version import __version__
from ui.bottombar import render_bottombar
from ui.dashboard import render_deal_dashboard
from ui.deal_form import render_deal_form
from ui.documents import render_stip_checklist
from ui.exports import render_exports
from ui.sidebar import render_dealer_sidebar, render_program_sidebar

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="LEASEDESK DEAL CALCULATOR", layout="wide")

load_state()
render_dealer_sidebar()
render_program_sidebar()

steps = ["Deal", "Dashboard", "Stips", "Exports"]
st.session_state.setdefault("view_mode", "Deal")
if st.session_state["view_mode"] not in steps:
    st.session_state["view_mode"] = "Deal"
nav = st.sidebar.radio("Navigate", steps, index=steps.index(st.session_state["view_mode"]))
st.session_state["view_mode"] = nav

st.title("LEASEDESK DEAL CALCULATOR")
st.caption(f"v{__version__} • Closed-end lease pricing • Program guardrails • Disclosures")

# The form prices the deal for every view, so it always runs.
render_deal_form(expanded=nav == "Deal")

if nav == "Dashboard":
    render_deal_dashboard()
elif nav == "Stips":
    render_stip_checklist()
elif nav == "Exports":
    render_exports()

render_bottombar(enabled=nav != "Dashboard")
