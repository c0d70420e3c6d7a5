import io

import streamlit as st

from export.lease_record import lease_record_json
from export.pdf_export import build_deal_summary, build_disclosure_pdf
from leasedesk.checklist import build_stip_checklist
from leasedesk.rules import has_blocking
from leasedesk.schedule import build_payment_schedule
from leasedesk.version import DISCLAIMER
from ui.sidebar import current_program


def render_exports():
    """Downloads for the lease record, schedule, summary and disclosure."""
    st.write("**Disclaimer**")
    st.caption(DISCLAIMER)
    st.divider()
    calc = st.session_state.get("deal_calc")
    if calc is None:
        st.info("Price a deal first.")
        return
    validation = st.session_state.get("deal_validation")
    checklist = st.session_state.get("stip_checklist") or build_stip_checklist(
        st.session_state.get("stip_received", [])
    )
    program = current_program()
    st.session_state.setdefault("override_reason", "")

    c1, c2, c3 = st.columns([2, 1, 1])
    blocking = validation is not None and has_blocking(validation)
    if blocking:
        st.error("This deal fails program guardrails. Provide an override reason to enable document export.")
        st.session_state["override_reason"] = c1.text_input(
            "Override reason (printed on the summary)", value=st.session_state["override_reason"]
        )
    else:
        st.session_state["override_reason"] = ""

    metadata = {"stips": [c["type"] for c in checklist if c.get("checked")]}
    st.download_button(
        "Download Lease Record (JSON)",
        data=lease_record_json(calc, metadata).encode("utf-8"),
        file_name="lease_record.json",
        mime="application/json",
    )

    buf = io.StringIO()
    build_payment_schedule(calc, st.session_state.get("first_payment"), program).to_csv(buf, index=False)
    st.download_button(
        "Download Payment Schedule (CSV)",
        data=buf.getvalue().encode("utf-8"),
        file_name="payment_schedule.csv",
        mime="text/csv",
    )

    override = st.session_state["override_reason"].strip()
    if blocking and not override:
        c3.info("Resolve validation errors or add an override reason to enable document export.")
        return

    summary = build_deal_summary(
        {
            "calculation": calc,
            "validation": validation,
            "checklist": checklist,
            "override_reason": override,
        }
    )
    c2.download_button("Download Deal Summary", data=summary, file_name="deal_summary.txt", mime="text/plain")
    branding = st.session_state.get("branding") or {}
    pdf = build_disclosure_pdf(calc, branding, validation, checklist)
    c3.download_button("Download Disclosure PDF", data=pdf, file_name="lease_disclosure.pdf", mime="application/pdf")
