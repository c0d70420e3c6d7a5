from __future__ import annotations

from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from leasedesk.presets import (
    DOWN_PAYMENT_DEALER_PERCENT,
    DOWN_PAYMENT_LESSOR_PERCENT,
    INVESTOR_RATE,
    LENDER_RECOVERY_MULTIPLE,
    MAX_CONTRACT_MONTHS,
    MAX_MARKUP,
    MAX_TERM_MONTHS,
    MIN_BASE_PAYMENT,
    MIN_SPREAD,
    MIN_TERM_MONTHS,
    MONEY_FACTOR,
    PAYMENT_FREQUENCIES,
    PURCHASE_OPTION_FEE,
    RESIDUAL_PERCENT,
    TARGET_SPREAD,
    TAX_RATES,
    VALID_TERMS,
)


class PaymentFrequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"

    @property
    def label(self) -> str:
        return PAYMENT_FREQUENCIES[self.value]["label"]


class Jurisdiction(str, Enum):
    TN = "TN"
    MS = "MS"


class SearchMode(str, Enum):
    """Which candidate terms a term search walks through."""

    CONTINUOUS = "continuous"
    DISCRETE = "discrete"


class ValidationField(str, Enum):
    BASE_PAYMENT = "basePayment"
    SPREAD = "spread"
    MARKUP = "markup"
    AGREED_PRICE = "agreedPrice"
    RESIDUAL_VALUE = "residualValue"
    JURISDICTION = "jurisdiction"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


class LeaseProgram(_Frozen):
    """Pricing policy and guardrails for one lease program.

    Every rate is a fraction (``0.125`` for 12.5%). Spread, markup and
    payment thresholds are in dollars; spread and payment thresholds are
    monthly equivalents.
    """

    money_factor: float = Field(MONEY_FACTOR, gt=0)
    residual_percent: float = Field(RESIDUAL_PERCENT, gt=0, lt=1)
    investor_rate: float = Field(INVESTOR_RATE, ge=0)
    recovery_multiple: float = Field(LENDER_RECOVERY_MULTIPLE, gt=0)
    tax_rates: Mapping[Jurisdiction, float] = Field(default_factory=lambda: dict(TAX_RATES), validate_default=True)
    target_spread: float = TARGET_SPREAD
    min_spread: float = MIN_SPREAD
    max_markup: float = MAX_MARKUP
    min_base_payment: float = MIN_BASE_PAYMENT
    purchase_option_fee: float = Field(PURCHASE_OPTION_FEE, ge=0)
    down_payment_dealer_percent: float = Field(DOWN_PAYMENT_DEALER_PERCENT, ge=0, le=1)
    down_payment_lessor_percent: float = Field(DOWN_PAYMENT_LESSOR_PERCENT, ge=0, le=1)
    min_term_months: int = Field(MIN_TERM_MONTHS, ge=1)
    max_term_months: int = Field(MAX_TERM_MONTHS, ge=1, le=MAX_CONTRACT_MONTHS)
    valid_terms: Tuple[int, ...] = VALID_TERMS

    @field_validator("tax_rates", mode="after")
    @classmethod
    def _freeze_tax_rates(cls, rates: Mapping[Jurisdiction, float]) -> Mapping[Jurisdiction, float]:
        # DEFAULT_PROGRAM is shared by every caller; its table must stay read-only
        return MappingProxyType(dict(rates))

    @field_serializer("tax_rates")
    def _dump_tax_rates(self, rates: Mapping[Jurisdiction, float]) -> dict:
        return {j.value: rate for j, rate in rates.items()}

    @model_validator(mode="after")
    def _check_policy(self) -> "LeaseProgram":
        split = self.down_payment_dealer_percent + self.down_payment_lessor_percent
        if abs(split - 1.0) > 1e-9:
            raise ValueError("down payment split must add up to 100%")
        if self.min_term_months > self.max_term_months:
            raise ValueError("min_term_months must not exceed max_term_months")
        if not self.valid_terms or any(t <= 0 or t > MAX_CONTRACT_MONTHS for t in self.valid_terms):
            raise ValueError(f"valid_terms must be a non-empty list of terms from 1 to {MAX_CONTRACT_MONTHS}")
        return self

    def tax_rate_for(self, jurisdiction: Jurisdiction) -> Optional[float]:
        return self.tax_rates.get(Jurisdiction(jurisdiction))

    def candidate_terms(self, mode: SearchMode = SearchMode.CONTINUOUS) -> Tuple[int, ...]:
        if SearchMode(mode) is SearchMode.DISCRETE:
            return tuple(sorted(self.valid_terms))
        return tuple(range(self.min_term_months, self.max_term_months + 1))


class DealInput(_Frozen):
    cost_basis: float = Field(gt=0)
    term_months: int = Field(gt=0, le=MAX_CONTRACT_MONTHS)
    doc_fee: float = Field(0.0, ge=0)
    jurisdiction: Jurisdiction = Jurisdiction.TN
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    down_payment: float = Field(0.0, ge=0)


class DealCalculation(_Frozen):
    """Every quantity the contract, the lease record and the UI read.

    Serialize with ``by_alias=True`` to get the camelCase names the
    document generators and the lease store expect.
    """

    cost_basis: float
    term_months: int
    doc_fee: float
    jurisdiction: Jurisdiction
    payment_frequency: PaymentFrequency
    payment_frequency_label: str
    down_payment: float

    money_factor: float
    residual_percent: float

    agreed_price: float
    residual_value: float
    markup: float

    tax_rate: float
    sales_tax_on_price: float

    gross_cap_cost: float
    cap_cost_reduction: float
    adjusted_cap_cost: float
    depreciation: float
    rent_charge: float
    total_of_base_payments: float

    number_of_payments: int
    base_payment: float
    tax_per_payment: float
    total_payment: float
    total_of_payments: float
    base_payment_monthly_equivalent: float

    investor_payment: float
    spread: float
    monthly_spread_equivalent: float

    amount_due_at_signing: float
    purchase_option_price: float
    down_payment_dealer_share: float
    down_payment_lessor_share: float

    def deal_input(self) -> DealInput:
        """The form input this calculation was priced from."""
        return DealInput(
            cost_basis=self.cost_basis,
            term_months=self.term_months,
            doc_fee=self.doc_fee,
            jurisdiction=self.jurisdiction,
            payment_frequency=self.payment_frequency,
            down_payment=self.down_payment,
        )


class TermRange(_Frozen):
    min: int
    max: int


class ValidationIssue(_Frozen):
    field: ValidationField
    message: str
    suggested_value: Optional[int] = None


class ValidationResult(_Frozen):
    is_valid: bool
    errors: Tuple[ValidationIssue, ...] = ()
    valid_term_range: Optional[TermRange] = None

    def for_field(self, field: ValidationField) -> Optional[ValidationIssue]:
        return next((e for e in self.errors if e.field == ValidationField(field)), None)


class OptimalTermResult(_Frozen):
    term: int
    is_valid: bool
    spread: float
    markup: float
    base_payment: float
    valid_range: Optional[TermRange] = None
    mode: SearchMode = SearchMode.CONTINUOUS


class PayDay(_Frozen):
    """Customer pay schedule used to place the first payment."""

    day_of_week: int = Field(4, ge=0, le=6)
    monthly_day: int = Field(1, ge=1, le=28)


class FirstPayment(_Frozen):
    due_date: date
    days_until: int
    skipped_pay_days: int = 0


DEFAULT_PROGRAM = LeaseProgram()
