# Money factor converts to APR as MF * 2400, so 0.009996 is 23.99% APR.
MONEY_FACTOR = 0.009996

# Residual is a share of the agreed price, never of the cost basis.
RESIDUAL_PERCENT = 0.15

# Prime (7.50%) + 5.00%
INVESTOR_RATE = 0.125

# Total collected over the lease as a multiple of the cost basis.
LENDER_RECOVERY_MULTIPLE = 2.0

PAYMENT_FREQUENCIES = {
    "weekly": {"label": "Weekly", "payments_per_year": 52},
    "biweekly": {"label": "Bi-Weekly", "payments_per_year": 26},
    "semimonthly": {"label": "Semi-Monthly", "payments_per_year": 24},
    "monthly": {"label": "Monthly", "payments_per_year": 12},
}

# Monthly-equivalent thresholds
TARGET_SPREAD = 175.0
MIN_SPREAD = 150.0
MIN_BASE_PAYMENT = 300.0

MAX_MARKUP = 5000.0

PURCHASE_OPTION_FEE = 300.0

# Cap cost reduction split between the selling dealer and the lessor.
DOWN_PAYMENT_DEALER_PERCENT = 0.75
DOWN_PAYMENT_LESSOR_PERCENT = 0.25

TAX_RATES = {"TN": 0.095, "MS": 0.05}

MIN_TERM_MONTHS = 1
MAX_TERM_MONTHS = 48
VALID_TERMS = (12, 24, 36, 48, 60, 72)
# Longest term any deal or program may carry
MAX_CONTRACT_MONTHS = max(MAX_TERM_MONTHS, *VALID_TERMS)
