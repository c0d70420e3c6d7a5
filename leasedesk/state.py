import json
import logging
import os
from typing import Any

import streamlit as st

logger = logging.getLogger(__name__)

SESSION_FILE = "session_data.json"

# Only a curated subset of ``st.session_state`` is persisted. Widgets inject
# their own keys (``use_term_36``, ``calc_btn``...) and restoring those raises
# ``StreamlitAPIException`` because widget-backed keys cannot be assigned.
# Computed results (``deal_calc``, ``deal_validation``) are rebuilt on every
# run and are not persisted either.
PERSISTED_KEYS = {
    "view_mode",
    "deal_form",
    "lease_program",
    "pay_day",
    "stip_received",
    "branding",
}


def _serializable(value: Any) -> bool:
    return isinstance(value, (int, float, str, bool, list, dict))


def load_state() -> None:
    """Restore Streamlit session state from ``SESSION_FILE`` if it exists."""
    if not os.path.exists(SESSION_FILE):
        return
    try:
        with open(SESSION_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("could not restore session from %s: %s", SESSION_FILE, exc)
        return
    if not isinstance(data, dict):
        logger.warning("ignoring session file %s: expected an object", SESSION_FILE)
        return
    for key, val in data.items():
        if key in PERSISTED_KEYS:
            st.session_state.setdefault(key, val)


def save_state() -> None:
    """Persist serializable session state to ``SESSION_FILE``."""
    data = {
        k: v
        for k, v in st.session_state.items()
        if k in PERSISTED_KEYS and _serializable(v)
    }
    try:
        with open(SESSION_FILE, "w", encoding="utf-8") as f:
            json.dump(data, f, default=str)
    except OSError as exc:
        logger.warning("could not save session to %s: %s", SESSION_FILE, exc)
