from importlib import metadata

try:
    __version__ = metadata.version("leasedesk")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.1.0"

DISCLAIMER = ("Lease figures are derived from the lender cost basis using the program money factor, "
"residual and investor rate in effect at quoting time. Payment, spread and markup checks are program "
"guardrails, not a credit decision. Tax is estimated for the selected state only; title, registration "
"and other governmental fees are not included.")
