"""Confidence heuristic for a property division estimate.

Courts have the most discretion in cases with misconduct, hard-to-value
assets or many items, so those lower confidence. A prenuptial agreement
narrows what a court decides and raises it.
"""

from .models import AssetType, CalculationInput

BASE_CONFIDENCE = 85
MIN_CONFIDENCE = 50
MAX_CONFIDENCE = 95

DOMESTIC_VIOLENCE_PENALTY = 10
WASTING_OF_ASSETS_PENALTY = 10
BUSINESS_INTEREST_PENALTY = 15
CRYPTOCURRENCY_PENALTY = 10
SIMPLE_ESTATE_BONUS = 5
PRENUP_BONUS = 10

SIMPLE_ESTATE_MAX_ASSETS = 5
SIMPLE_ESTATE_MAX_DEBTS = 3


def calculate_confidence_level(calculation_input: CalculationInput) -> int:
    """Estimate confidence in the result, from 50 to 95."""
    confidence = BASE_CONFIDENCE
    factors = calculation_input.special_factors
    asset_types = {asset.type for asset in calculation_input.assets}

    if factors is not None and factors.domestic_violence:
        confidence -= DOMESTIC_VIOLENCE_PENALTY
    if factors is not None and factors.wasting_of_assets:
        confidence -= WASTING_OF_ASSETS_PENALTY
    if AssetType.BUSINESS_INTEREST in asset_types:
        confidence -= BUSINESS_INTEREST_PENALTY
    if AssetType.CRYPTOCURRENCY in asset_types:
        confidence -= CRYPTOCURRENCY_PENALTY

    if (
        len(calculation_input.assets) <= SIMPLE_ESTATE_MAX_ASSETS
        and len(calculation_input.debts) <= SIMPLE_ESTATE_MAX_DEBTS
    ):
        confidence += SIMPLE_ESTATE_BONUS
    if calculation_input.marriage_info.has_prenup:
        confidence += PRENUP_BONUS

    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))
