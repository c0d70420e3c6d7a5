"""Stipulation (stip) checklist helpers."""
from __future__ import annotations
from typing import Dict, Iterable, List

# Documents a dealer must upload before a lease can fund, in display order.
STIP_ITEMS: List[Dict[str, str]] = [
    {"type": "CONTRACT", "label": "Contract", "description": "Upload a copy of the executed lease contract"},
    {"type": "TIER_SHEET", "label": "Tier Sheet", "description": "Copy of the customer Tier Calculator result"},
    {"type": "DRIVERS_LICENSE", "label": "Driver's License", "description": "Copy of valid driver's license"},
    {
        "type": "PROOF_OF_RESIDENCE",
        "label": "Proof of Residence",
        "description": "Copy of acceptable POR (utility bill, bank statement, etc.)",
    },
    {
        "type": "PROOF_OF_INCOME",
        "label": "Proof of Income",
        "description": "Copy of acceptable POI (pay stubs, bank statements, etc.)",
    },
    {"type": "INSURANCE", "label": "Insurance", "description": "Declarations page with $500 deductibles"},
    {"type": "CREDIT_APPLICATION", "label": "Credit Application", "description": "Copy of completed credit application"},
    {"type": "CREDIT_REPORT", "label": "Credit Report", "description": "Copy of credit report"},
    {
        "type": "TITLE_APPLICATION",
        "label": "Title Application",
        "description": "Title application from state where titled (MS or TN only)",
    },
]

STIP_TYPES = [item["type"] for item in STIP_ITEMS]


def build_stip_checklist(received: Iterable[str] = ()) -> List[Dict]:
    """Return the stip list with ``checked`` set for every received type.

    Unknown types in ``received`` are ignored.
    """
    got = set(received)
    return [{**item, "checked": item["type"] in got} for item in STIP_ITEMS]


def missing_stips(checklist: List[Dict]) -> List[str]:
    return [item["label"] for item in checklist if not item.get("checked")]


def is_complete(checklist: List[Dict]) -> bool:
    return bool(checklist) and not missing_stips(checklist)
