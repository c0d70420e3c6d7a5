"""Lease record handed to the persistence service."""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from leasedesk.models import DealCalculation
from leasedesk.version import __version__


def lease_record(calc: DealCalculation, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the stored shape of a lease: camelCase figures plus metadata.

    ``metadata`` (dealer, customer, vehicle...) is opaque here and copied as
    given; it cannot overwrite the ``calculation`` or ``engineVersion`` keys.
    """
    record: Dict[str, Any] = dict(metadata or {})
    record["calculation"] = calc.model_dump(mode="json", by_alias=True)
    record["engineVersion"] = __version__
    return record


def lease_record_json(calc: DealCalculation, metadata: Optional[Dict[str, Any]] = None) -> str:
    return json.dumps(lease_record(calc, metadata), indent=2, default=str)
