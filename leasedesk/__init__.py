"""Lease deal-calculation engine.

The public surface mirrors what the dealer UI calls on every input change:
``calculate_deal``, ``validate_deal`` and ``calculate_optimal_term``."""

from leasedesk.deal import calculate_deal
from leasedesk.models import (
    DEFAULT_PROGRAM,
    DealCalculation,
    DealInput,
    Jurisdiction,
    LeaseProgram,
    OptimalTermResult,
    PaymentFrequency,
    SearchMode,
    ValidationResult,
)
from leasedesk.optimizer import calculate_optimal_term
from leasedesk.rules import validate_deal
from leasedesk.version import __version__

__all__ = [
    "__version__",
    "DEFAULT_PROGRAM",
    "DealCalculation",
    "DealInput",
    "Jurisdiction",
    "LeaseProgram",
    "OptimalTermResult",
    "PaymentFrequency",
    "SearchMode",
    "ValidationResult",
    "calculate_deal",
    "calculate_optimal_term",
    "validate_deal",
]
