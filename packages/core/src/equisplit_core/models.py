"""Core data models for marital property division calculations.

This module implements the input records consumed by the calculation engine
(assets, debts, marriage information and equitable distribution factors) and
the result records it produces (line-item divisions and per-spouse totals).

All money amounts are ``Decimal``. Models accept both snake_case field names
and the camelCase keys used by the web application's JSON payloads.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


def _utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


# Shared configuration for every engine record. Inputs are immutable for the
# duration of a calculation.
_RECORD_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "frozen": True,
}


# =============================================================================
# ENUMERATIONS
# =============================================================================

class PropertyRegime(str, Enum):
    """Marital property regime of a jurisdiction."""
    COMMUNITY = "community"
    EQUITABLE = "equitable"


class Spouse(str, Enum):
    """One of the two parties to the divorce."""
    SPOUSE1 = "spouse1"
    SPOUSE2 = "spouse2"


class Ownership(str, Enum):
    """Declared owner of a separate asset or party responsible for a debt."""
    SPOUSE1 = "spouse1"
    SPOUSE2 = "spouse2"
    JOINT = "joint"


class AssetType(str, Enum):
    """Types of marital assets."""
    REAL_ESTATE = "real_estate"
    VEHICLE = "vehicle"
    BANK_ACCOUNT = "bank_account"
    INVESTMENT_ACCOUNT = "investment_account"
    RETIREMENT_ACCOUNT = "retirement_account"
    BUSINESS_INTEREST = "business_interest"
    PERSONAL_PROPERTY = "personal_property"
    CRYPTOCURRENCY = "cryptocurrency"
    INSURANCE = "insurance"
    OTHER = "other"


class DebtType(str, Enum):
    """Types of marital debt."""
    MORTGAGE = "mortgage"
    VEHICLE_LOAN = "vehicle_loan"
    CREDIT_CARD = "credit_card"
    STUDENT_LOAN = "student_loan"
    BUSINESS_DEBT = "business_debt"
    PERSONAL_LOAN = "personal_loan"
    OTHER = "other"


class HealthStatus(str, Enum):
    """Self-reported health of a spouse."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class CustodyArrangement(str, Enum):
    """Child custody arrangement."""
    SOLE_1 = "sole_1"  # Spouse 1 has sole custody
    SOLE_2 = "sole_2"  # Spouse 2 has sole custody
    JOINT = "joint"
    NONE = "none"


class DivisionRule(str, Enum):
    """Rule that produced a line-item split.

    Downstream consumers branch on this tag instead of parsing reasoning text.
    """
    COMMUNITY_SPLIT = "community_split"
    QUASI_COMMUNITY = "quasi_community"
    SEPARATE_PROPERTY = "separate_property"
    TEXAS_APPRECIATION = "texas_appreciation"
    TEXAS_APPRECIATION_UNKNOWN = "texas_appreciation_unknown"
    EQUITABLE_SPLIT = "equitable_split"
    EQUITABLE_SEPARATE = "equitable_separate"


# =============================================================================
# INPUT MODELS
# =============================================================================

class Asset(BaseModel):
    """A marital or separate asset."""

    model_config = _RECORD_CONFIG

    id: str
    description: str
    type: AssetType = AssetType.OTHER
    current_value: Decimal = Field(ge=0, description="Fair market value today")
    acquisition_value: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Value when acquired; required for the Texas appreciation rule",
    )
    acquisition_date: Optional[date] = None
    is_separate_property: bool = False
    owned_by: Optional[Ownership] = None
    is_quasi_community_property: bool = False
    notes: Optional[str] = None

    @property
    def appreciation(self) -> Optional[Decimal]:
        """Increase in value since acquisition, or None if unknown."""
        if self.acquisition_value is None:
            return None
        return max(self.current_value - self.acquisition_value, Decimal("0"))


class Debt(BaseModel):
    """A marital or separate debt."""

    model_config = _RECORD_CONFIG

    id: str
    description: str
    type: DebtType = DebtType.OTHER
    current_balance: Decimal = Field(ge=0)
    original_amount: Optional[Decimal] = Field(default=None, ge=0)
    acquisition_date: Optional[date] = None
    is_separate_property: bool = False
    responsibility: Optional[Ownership] = None
    notes: Optional[str] = None


class MarriageInfo(BaseModel):
    """Marriage dates, jurisdiction and agreements."""

    model_config = _RECORD_CONFIG

    marriage_date: date
    separation_date: Optional[date] = None
    jurisdiction: Optional[str] = None
    property_regime: Optional[PropertyRegime] = None
    has_prenup: bool = False
    special_circumstances: list[str] = Field(default_factory=list)

    @field_validator("separation_date")
    @classmethod
    def validate_separation_date(
        cls, v: Optional[date], info: ValidationInfo
    ) -> Optional[date]:
        """Separation cannot precede the marriage."""
        marriage_date = info.data.get("marriage_date")
        if v is not None and marriage_date is not None and v < marriage_date:
            raise ValueError("separation_date cannot be before marriage_date")
        return v


class EquitableDistributionFactors(BaseModel):
    """Factors weighed by courts in equitable distribution states.

    The first group applies everywhere. The extended group mirrors the
    statutory factor lists of states such as Pennsylvania (23 Pa.C.S. 3502)
    and is optional.
    """

    model_config = _RECORD_CONFIG

    marriage_duration: float = Field(ge=0, description="Length of marriage in years")
    age_spouse1: int = Field(ge=0)
    age_spouse2: int = Field(ge=0)
    health_spouse1: HealthStatus = HealthStatus.GOOD
    health_spouse2: HealthStatus = HealthStatus.GOOD
    income_spouse1: Decimal = Field(default=Decimal("0"), ge=0)
    income_spouse2: Decimal = Field(default=Decimal("0"), ge=0)
    earn_capacity_spouse1: Decimal = Field(default=Decimal("0"), ge=0)
    earn_capacity_spouse2: Decimal = Field(default=Decimal("0"), ge=0)
    contribution_to_marriage: str = ""
    custody_arrangement: Optional[CustodyArrangement] = None
    domestic_violence: bool = False
    wasting_of_assets: bool = False
    tax_consequences: bool = False

    # Extended (state-specific) factors
    prior_marriage_spouse1: Optional[bool] = None
    prior_marriage_spouse2: Optional[bool] = None
    contribution_to_education_training_spouse1: Optional[bool] = None
    contribution_to_education_training_spouse2: Optional[bool] = None
    opportunity_future_acquisitions_spouse1: Optional[str] = None
    opportunity_future_acquisitions_spouse2: Optional[str] = None
    needs_spouse1: Optional[str] = None
    needs_spouse2: Optional[str] = None
    economic_circumstances_at_divorce_spouse1: Optional[str] = None
    economic_circumstances_at_divorce_spouse2: Optional[str] = None
    estate_spouse1: Optional[Decimal] = Field(default=None, ge=0)
    estate_spouse2: Optional[Decimal] = Field(default=None, ge=0)
    expense_of_sale_assets: Optional[Decimal] = Field(default=None, ge=0)
    station_spouse1: Optional[str] = None
    station_spouse2: Optional[str] = None
    sources_of_income_details_spouse1: Optional[str] = None
    sources_of_income_details_spouse2: Optional[str] = None
    vocational_skills_spouse1: Optional[str] = None
    vocational_skills_spouse2: Optional[str] = None
    standard_of_living: Optional[str] = None

    @property
    def has_extended_factors(self) -> bool:
        """Whether any state-specific factor was supplied."""
        return any(
            getattr(self, name) is not None for name in EXTENDED_FACTOR_FIELDS
        )


EXTENDED_FACTOR_FIELDS = (
    "prior_marriage_spouse1",
    "prior_marriage_spouse2",
    "contribution_to_education_training_spouse1",
    "contribution_to_education_training_spouse2",
    "opportunity_future_acquisitions_spouse1",
    "opportunity_future_acquisitions_spouse2",
    "needs_spouse1",
    "needs_spouse2",
    "economic_circumstances_at_divorce_spouse1",
    "economic_circumstances_at_divorce_spouse2",
    "estate_spouse1",
    "estate_spouse2",
    "expense_of_sale_assets",
    "station_spouse1",
    "station_spouse2",
    "sources_of_income_details_spouse1",
    "sources_of_income_details_spouse2",
    "vocational_skills_spouse1",
    "vocational_skills_spouse2",
    "standard_of_living",
)


class CalculationInput(BaseModel):
    """Everything the engine needs for one property division request."""

    model_config = _RECORD_CONFIG

    jurisdiction: str = Field(pattern="^[A-Z]{2}$")
    property_regime: Optional[PropertyRegime] = None
    marriage_info: MarriageInfo
    assets: list[Asset] = Field(default_factory=list)
    debts: list[Debt] = Field(default_factory=list)
    special_factors: Optional[EquitableDistributionFactors] = None

    @field_validator("jurisdiction", mode="before")
    @classmethod
    def normalize_jurisdiction(cls, v):
        """Accept lower-case state codes."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


# =============================================================================
# RESULT MODELS
# =============================================================================

class AssetDivision(BaseModel):
    """How a single asset is split between the spouses."""

    model_config = _RECORD_CONFIG

    asset_id: str
    description: str
    total_value: Decimal
    spouse1_share: Decimal
    spouse2_share: Decimal
    rule_applied: DivisionRule
    community_portion: Decimal = Decimal("0")
    reasoning: str


class DebtDivision(BaseModel):
    """How responsibility for a single debt is split between the spouses."""

    model_config = _RECORD_CONFIG

    debt_id: str
    description: str
    total_balance: Decimal
    spouse1_responsibility: Decimal
    spouse2_responsibility: Decimal
    rule_applied: DivisionRule
    community_portion: Decimal = Decimal("0")
    reasoning: str


class PropertyDivision(BaseModel):
    """Line-item allocation plus per-spouse net totals."""

    model_config = _RECORD_CONFIG

    spouse1_assets: list[AssetDivision] = Field(default_factory=list)
    spouse2_assets: list[AssetDivision] = Field(default_factory=list)
    spouse1_debts: list[DebtDivision] = Field(default_factory=list)
    spouse2_debts: list[DebtDivision] = Field(default_factory=list)
    total_spouse1_value: Decimal = Decimal("0")
    total_spouse2_value: Decimal = Decimal("0")
    equalization_payment: Optional[Decimal] = None
    payment_from: Optional[Spouse] = None

    @property
    def total_estate_value(self) -> Decimal:
        """Combined net value awarded to both spouses."""
        return self.total_spouse1_value + self.total_spouse2_value


class DivisionOutcome(BaseModel):
    """A division plus what the divider learned while producing it."""
    division: PropertyDivision
    warnings: list[str] = Field(default_factory=list)
    equity_factor: Optional[Decimal] = None
    factors: list[str] = Field(default_factory=list)


class AuditEntry(BaseModel):
    """Audit log entry for calculation transparency."""
    timestamp: datetime = Field(default_factory=_utc_now)
    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None


class CalculationResult(BaseModel):
    """Complete result of a property division calculation."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    jurisdiction: str
    property_regime: PropertyRegime
    division: PropertyDivision
    confidence_level: int = Field(ge=50, le=95)
    equity_factor: Optional[Decimal] = None
    factors: list[str] = Field(default_factory=list)
    methodology: str
    methodology_version: str
    audit_log: list[AuditEntry] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    calculated_at: datetime = Field(default_factory=_utc_now)
