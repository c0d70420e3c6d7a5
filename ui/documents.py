"""UI helpers for the stip checklist."""
from __future__ import annotations
import streamlit as st
from leasedesk.checklist import STIP_ITEMS, build_stip_checklist, missing_stips
from leasedesk.state import save_state


def render_stip_checklist():
    """Render one checkbox per stip and store the resulting checklist."""
    received = set(st.session_state.setdefault("stip_received", []))
    with st.expander("Stip Checklist", expanded=True):
        for item in STIP_ITEMS:
            checked = st.checkbox(
                item["label"],
                value=item["type"] in received,
                key=f"stip_{item['type'].lower()}",
                help=item["description"],
            )
            if checked:
                received.add(item["type"])
            else:
                received.discard(item["type"])
    checklist = build_stip_checklist(received)
    st.session_state["stip_received"] = [item["type"] for item in checklist if item["checked"]]
    st.session_state["stip_checklist"] = checklist
    missing = missing_stips(checklist)
    st.caption(f"{len(checklist) - len(missing)} of {len(checklist)} stips received")
    save_state()
    return checklist
