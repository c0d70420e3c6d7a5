import json
import logging

import streamlit as st
from pydantic import ValidationError

from leasedesk.models import DEFAULT_PROGRAM, LeaseProgram
from leasedesk.state import save_state

logger = logging.getLogger(__name__)


def _program_json(program: LeaseProgram) -> dict:
    return program.model_dump(mode="json", by_alias=True)


def current_program() -> LeaseProgram:
    """The lease program being edited in the sidebar, or the default one."""
    raw = st.session_state.get("lease_program")
    if not raw:
        return DEFAULT_PROGRAM
    try:
        return LeaseProgram.model_validate(raw)
    except ValidationError as exc:
        logger.warning("stored lease program is invalid, using defaults: %s", exc)
        return DEFAULT_PROGRAM


def render_program_sidebar():
    """Sidebar with the editable lease program (rates, guardrails, tax table)."""
    st.session_state.setdefault("lease_program", _program_json(DEFAULT_PROGRAM))

    st.sidebar.header("Lease Program")
    program_json = st.sidebar.text_area(
        "Lease Program",
        value=json.dumps(st.session_state["lease_program"], indent=2),
        height=360,
    )
    try:
        program = LeaseProgram.model_validate(json.loads(program_json))
    except json.JSONDecodeError as exc:
        st.sidebar.error(f"Lease program is not valid JSON: {exc.msg}")
    except ValidationError as exc:
        st.sidebar.error(f"Lease program rejected: {exc.error_count()} invalid value(s)")
    else:
        st.session_state["lease_program"] = _program_json(program)
    if st.sidebar.button("Reset to defaults", key="reset_program"):
        st.session_state["lease_program"] = _program_json(DEFAULT_PROGRAM)
        st.rerun()
    save_state()


def render_dealer_sidebar():
    """Dealer profile printed on the disclosure. Name and address are both required."""
    branding = st.session_state.setdefault("branding", {"dealer": "", "address": ""})

    st.sidebar.header("Dealer Profile")
    name = st.sidebar.text_input("Dealer Name", value=branding.get("dealer", ""))
    address = st.sidebar.text_area("Dealer Address", value=branding.get("address", ""), height=80)
    if name.strip() and address.strip():
        st.session_state["branding"] = {"dealer": name.strip(), "address": address.strip()}
    else:
        st.sidebar.warning("Dealer name and address are required for the disclosure letterhead.")
    save_state()
