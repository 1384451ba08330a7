"""Equitable distribution division.

Used by the 41 equitable distribution states and DC. Marital assets and debts
are split by the equity factor (spouse 1's share, 30% to 70%). Separate
property is not divided. The calculator is used from spouse 1's side, so
separate items are awarded wholly to spouse 1.

When the resulting net values differ by more than the equalization threshold,
the spouse with the larger net value owes half the difference to the other.
"""

from decimal import Decimal
from typing import Optional

import structlog

from .equity_factor import EquityFactorScorer
from .exceptions import MissingFactorsError
from .formatting import format_percentage
from .models import (
    Asset,
    AssetDivision,
    CalculationInput,
    Debt,
    DebtDivision,
    DivisionOutcome,
    DivisionRule,
    Ownership,
    PropertyDivision,
    Spouse,
)
from .state_registry import StateRule

logger = structlog.get_logger()

ZERO = Decimal("0")
DEFAULT_EQUALIZATION_THRESHOLD = Decimal("1000")


def calculate_equalization(
    spouse1_net: Decimal,
    spouse2_net: Decimal,
    threshold: Decimal = DEFAULT_EQUALIZATION_THRESHOLD,
) -> tuple[Optional[Decimal], Optional[Spouse]]:
    """Return (payment, payer) needed to even out two net values.

    No payment is due when the difference does not exceed ``threshold``.
    """
    difference = abs(spouse1_net - spouse2_net)
    if difference <= threshold:
        return None, None
    payer = Spouse.SPOUSE1 if spouse1_net > spouse2_net else Spouse.SPOUSE2
    return difference / 2, payer


def flag_spouse1_award(
    declared: Optional[Ownership],
    item_id: str,
    kind: str,
    warnings: list[str],
) -> None:
    """Warn when a separate item goes to spouse 1 without being declared theirs.

    Equitable separate items always go to spouse 1. A declared owner other
    than spouse 1 is reported rather than silently overridden.
    """
    if declared == Ownership.SPOUSE1:
        return

    owner = "not specified" if declared is None else declared.value
    warnings.append(
        f"Separate {kind} '{item_id}' has owner {owner}; "
        "awarded to spouse 1 under equitable distribution"
    )
    logger.warning(
        "separate_property_awarded_to_spouse1",
        item_id=item_id,
        kind=kind,
        declared=declared.value if declared else None,
    )


class EquitableDistributionDivider:
    """Divide assets and debts by the equity factor."""

    def __init__(
        self,
        state: StateRule,
        scorer: Optional[EquityFactorScorer] = None,
        equalization_threshold: Decimal = DEFAULT_EQUALIZATION_THRESHOLD,
    ):
        self.state = state
        self.scorer = scorer or EquityFactorScorer()
        self.equalization_threshold = equalization_threshold

    def _divide_asset(
        self, asset: Asset, equity_factor: Decimal, warnings: list[str]
    ) -> AssetDivision:
        value = asset.current_value
        if asset.is_separate_property:
            flag_spouse1_award(asset.owned_by, asset.id, "asset", warnings)
            return AssetDivision(
                asset_id=asset.id,
                description=asset.description,
                total_value=value,
                spouse1_share=value,
                spouse2_share=ZERO,
                rule_applied=DivisionRule.EQUITABLE_SEPARATE,
                reasoning="Separate property not subject to division",
            )

        spouse1_share = value * equity_factor
        return AssetDivision(
            asset_id=asset.id,
            description=asset.description,
            total_value=value,
            spouse1_share=spouse1_share,
            spouse2_share=value - spouse1_share,
            rule_applied=DivisionRule.EQUITABLE_SPLIT,
            community_portion=value,
            reasoning=(
                "Equitable distribution based on marriage factors "
                f"({format_percentage(equity_factor)}/"
                f"{format_percentage(1 - equity_factor)})"
            ),
        )

    def _divide_debt(
        self, debt: Debt, equity_factor: Decimal, warnings: list[str]
    ) -> DebtDivision:
        balance = debt.current_balance
        if debt.is_separate_property:
            flag_spouse1_award(debt.responsibility, debt.id, "debt", warnings)
            return DebtDivision(
                debt_id=debt.id,
                description=debt.description,
                total_balance=balance,
                spouse1_responsibility=balance,
                spouse2_responsibility=ZERO,
                rule_applied=DivisionRule.EQUITABLE_SEPARATE,
                reasoning="Separate debt not subject to division",
            )

        spouse1_share = balance * equity_factor
        return DebtDivision(
            debt_id=debt.id,
            description=debt.description,
            total_balance=balance,
            spouse1_responsibility=spouse1_share,
            spouse2_responsibility=balance - spouse1_share,
            rule_applied=DivisionRule.EQUITABLE_SPLIT,
            community_portion=balance,
            reasoning=(
                "Equitable debt allocation "
                f"({format_percentage(equity_factor)}/"
                f"{format_percentage(1 - equity_factor)})"
            ),
        )

    def divide(self, calculation_input: CalculationInput) -> DivisionOutcome:
        """Divide the marital estate by the equity factor.

        Raises:
            MissingFactorsError: If the input has no equitable distribution factors.
        """
        factors = calculation_input.special_factors
        if factors is None:
            raise MissingFactorsError(jurisdiction=self.state.code)

        score = self.scorer.score(factors)
        equity_factor = score.value
        warnings: list[str] = []

        marital_assets = ZERO
        separate_assets = ZERO
        asset_divisions: list[AssetDivision] = []
        for asset in calculation_input.assets:
            asset_divisions.append(self._divide_asset(asset, equity_factor, warnings))
            if asset.is_separate_property:
                separate_assets += asset.current_value
            else:
                marital_assets += asset.current_value

        marital_debts = ZERO
        separate_debts = ZERO
        debt_divisions: list[DebtDivision] = []
        for debt in calculation_input.debts:
            debt_divisions.append(self._divide_debt(debt, equity_factor, warnings))
            if debt.is_separate_property:
                separate_debts += debt.current_balance
            else:
                marital_debts += debt.current_balance

        spouse1_asset_share = marital_assets * equity_factor
        spouse1_debt_share = marital_debts * equity_factor
        spouse2_asset_share = marital_assets - spouse1_asset_share
        spouse2_debt_share = marital_debts - spouse1_debt_share

        total_spouse1 = (spouse1_asset_share + separate_assets) - (
            spouse1_debt_share + separate_debts
        )
        total_spouse2 = spouse2_asset_share - spouse2_debt_share

        payment, payer = calculate_equalization(
            total_spouse1, total_spouse2, self.equalization_threshold
        )

        logger.info(
            "equitable_distribution_divided",
            jurisdiction=self.state.code,
            equity_factor=str(equity_factor),
            marital_assets=str(marital_assets),
            marital_debts=str(marital_debts),
            total_spouse1=str(total_spouse1),
            total_spouse2=str(total_spouse2),
            equalization_payment=str(payment) if payment is not None else None,
        )

        division = PropertyDivision(
            spouse1_assets=[a for a in asset_divisions if a.spouse1_share != 0],
            spouse2_assets=[a for a in asset_divisions if a.spouse2_share != 0],
            spouse1_debts=[d for d in debt_divisions if d.spouse1_responsibility != 0],
            spouse2_debts=[d for d in debt_divisions if d.spouse2_responsibility != 0],
            total_spouse1_value=total_spouse1,
            total_spouse2_value=total_spouse2,
            equalization_payment=payment,
            payment_from=payer,
        )
        return DivisionOutcome(
            division=division,
            warnings=warnings,
            equity_factor=equity_factor,
            factors=score.labels,
        )
