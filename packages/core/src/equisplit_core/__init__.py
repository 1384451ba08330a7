"""EquiSplit Core - Marital property division calculations."""

__version__ = "0.1.0"

from .calculator import PropertyDivisionCalculator, verify_conservation
from .community import CommunityPropertyDivider
from .confidence import calculate_confidence_level
from .config import EngineConfig, configure_logging
from .equitable import EquitableDistributionDivider, calculate_equalization
from .equity_factor import (
    EQUITY_RULES,
    EquityFactorScorer,
    EquityRule,
    EquityScore,
    calculate_equity_factor,
    score_factors,
)
from .exceptions import (
    CalculationError,
    ConfigurationError,
    EquiSplitError,
    InvalidJurisdictionError,
    MissingFactorsError,
    ValidationError,
)
from .formatting import calculate_percentage, format_currency, format_percentage
from .models import (
    Asset,
    AssetDivision,
    AssetType,
    CalculationInput,
    CalculationResult,
    CustodyArrangement,
    Debt,
    DebtDivision,
    DebtType,
    DivisionRule,
    EquitableDistributionFactors,
    HealthStatus,
    MarriageInfo,
    Ownership,
    PropertyDivision,
    PropertyRegime,
    Spouse,
)
from .state_registry import (
    COMMUNITY_PROPERTY_STATES,
    DEFAULT_STATE_REGISTRY,
    StateRegistry,
    StateRule,
)

__all__ = [
    # Calculator
    "PropertyDivisionCalculator",
    "verify_conservation",
    "CommunityPropertyDivider",
    "EquitableDistributionDivider",
    "calculate_equalization",
    "calculate_confidence_level",
    # Equity factor
    "EQUITY_RULES",
    "EquityFactorScorer",
    "EquityRule",
    "EquityScore",
    "calculate_equity_factor",
    "score_factors",
    # Configuration
    "EngineConfig",
    "configure_logging",
    # Exceptions
    "EquiSplitError",
    "CalculationError",
    "InvalidJurisdictionError",
    "MissingFactorsError",
    "ValidationError",
    "ConfigurationError",
    # Formatting
    "format_currency",
    "calculate_percentage",
    "format_percentage",
    # Models
    "Asset",
    "AssetDivision",
    "AssetType",
    "CalculationInput",
    "CalculationResult",
    "CustodyArrangement",
    "Debt",
    "DebtDivision",
    "DebtType",
    "DivisionRule",
    "EquitableDistributionFactors",
    "HealthStatus",
    "MarriageInfo",
    "Ownership",
    "PropertyDivision",
    "PropertyRegime",
    "Spouse",
    # State registry
    "COMMUNITY_PROPERTY_STATES",
    "DEFAULT_STATE_REGISTRY",
    "StateRegistry",
    "StateRule",
]
