"""Community property division.

Used by the nine community property states. Community assets and debts are
split 50/50. Separate property goes to its owner, with two carve-outs:

- Quasi-community property (AZ, CA, ID, WA): property acquired while living
  elsewhere that would have been community property here is divided as
  community property, whatever its separate-property flag says.
- Appreciation during marriage (TX): the growth in value of a separate asset
  during the marriage is community property. The original value stays
  separate.

The net community estate is always split exactly in half, so this path never
produces an equalization payment.
"""

from decimal import Decimal
from typing import Optional

import structlog

from .formatting import format_currency
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
TWO = Decimal("2")


def resolve_owner(
    declared: Optional[Ownership],
    item_id: str,
    kind: str,
    warnings: list[str],
) -> Spouse:
    """Map a declared owner of separate property onto one spouse.

    Missing or joint ownership of a separate item is ambiguous. It defaults to
    spouse 1 and records a warning rather than failing the calculation.
    """
    if declared == Ownership.SPOUSE1:
        return Spouse.SPOUSE1
    if declared == Ownership.SPOUSE2:
        return Spouse.SPOUSE2

    reason = "not specified" if declared is None else "joint"
    message = (
        f"Separate {kind} '{item_id}' has {reason} ownership; "
        "assigned to spouse 1"
    )
    warnings.append(message)
    logger.warning(
        "separate_property_owner_defaulted",
        item_id=item_id,
        kind=kind,
        declared=declared.value if declared else None,
        assigned=Spouse.SPOUSE1.value,
    )
    return Spouse.SPOUSE1


def _split_for(
    owner: Spouse, owner_amount: Decimal, other_amount: Decimal
) -> tuple[Decimal, Decimal]:
    """Return (spouse1, spouse2) amounts given the owner's and the other's share."""
    if owner == Spouse.SPOUSE1:
        return owner_amount, other_amount
    return other_amount, owner_amount


class CommunityPropertyDivider:
    """Divide assets and debts under community property rules."""

    def __init__(self, state: StateRule):
        self.state = state

    def _divide_asset(
        self,
        asset: Asset,
        totals: dict[str, Decimal],
        warnings: list[str],
    ) -> AssetDivision:
        value = asset.current_value

        if self.state.is_qcp_state and asset.is_quasi_community_property:
            half = value / TWO
            totals["community_assets"] += value
            return AssetDivision(
                asset_id=asset.id,
                description=asset.description,
                total_value=value,
                spouse1_share=half,
                spouse2_share=value - half,
                rule_applied=DivisionRule.QUASI_COMMUNITY,
                community_portion=value,
                reasoning=(
                    f"Acquired while domiciled outside {self.state.name}; "
                    "treated as community property under QCP rules - equal division"
                ),
            )

        if not asset.is_separate_property:
            half = value / TWO
            totals["community_assets"] += value
            return AssetDivision(
                asset_id=asset.id,
                description=asset.description,
                total_value=value,
                spouse1_share=half,
                spouse2_share=value - half,
                rule_applied=DivisionRule.COMMUNITY_SPLIT,
                community_portion=value,
                reasoning="Community property acquired during marriage - equal division",
            )

        owner = resolve_owner(asset.owned_by, asset.id, "asset", warnings)

        if self.state.separate_appreciation_is_community:
            if asset.acquisition_value is None:
                totals[f"separate_assets_{owner.value}"] += value
                spouse1, spouse2 = _split_for(owner, value, ZERO)
                return AssetDivision(
                    asset_id=asset.id,
                    description=asset.description,
                    total_value=value,
                    spouse1_share=spouse1,
                    spouse2_share=spouse2,
                    rule_applied=DivisionRule.TEXAS_APPRECIATION_UNKNOWN,
                    reasoning=(
                        "Separate property; acquisition value unknown, so "
                        "appreciation during marriage could not be computed "
                        f"under {self.state.name} law"
                    ),
                )

            appreciation = asset.appreciation
            if appreciation > 0:
                corpus = value - appreciation
                half = appreciation / TWO
                totals[f"separate_assets_{owner.value}"] += corpus
                totals["community_assets"] += appreciation
                spouse1, spouse2 = _split_for(owner, corpus + half, appreciation - half)
                return AssetDivision(
                    asset_id=asset.id,
                    description=asset.description,
                    total_value=value,
                    spouse1_share=spouse1,
                    spouse2_share=spouse2,
                    rule_applied=DivisionRule.TEXAS_APPRECIATION,
                    community_portion=appreciation,
                    reasoning=(
                        f"Separate property; original value {format_currency(corpus)} remains "
                        f"with {owner.value}, appreciation of {format_currency(appreciation)} during "
                        "marriage is community property split equally"
                    ),
                )

        totals[f"separate_assets_{owner.value}"] += value
        spouse1, spouse2 = _split_for(owner, value, ZERO)
        return AssetDivision(
            asset_id=asset.id,
            description=asset.description,
            total_value=value,
            spouse1_share=spouse1,
            spouse2_share=spouse2,
            rule_applied=DivisionRule.SEPARATE_PROPERTY,
            reasoning="Separate property acquired before marriage or through inheritance/gift",
        )

    def _divide_debt(
        self,
        debt: Debt,
        totals: dict[str, Decimal],
        warnings: list[str],
    ) -> DebtDivision:
        balance = debt.current_balance

        if debt.is_separate_property:
            owner = resolve_owner(debt.responsibility, debt.id, "debt", warnings)
            totals[f"separate_debts_{owner.value}"] += balance
            spouse1, spouse2 = _split_for(owner, balance, ZERO)
            return DebtDivision(
                debt_id=debt.id,
                description=debt.description,
                total_balance=balance,
                spouse1_responsibility=spouse1,
                spouse2_responsibility=spouse2,
                rule_applied=DivisionRule.SEPARATE_PROPERTY,
                reasoning="Separate debt incurred before marriage",
            )

        half = balance / TWO
        totals["community_debts"] += balance
        return DebtDivision(
            debt_id=debt.id,
            description=debt.description,
            total_balance=balance,
            spouse1_responsibility=half,
            spouse2_responsibility=balance - half,
            rule_applied=DivisionRule.COMMUNITY_SPLIT,
            community_portion=balance,
            reasoning="Community debt incurred during marriage - equal responsibility",
        )

    def divide(self, calculation_input: CalculationInput) -> DivisionOutcome:
        """Divide the estate 50/50 with separate-property carve-outs."""
        warnings: list[str] = []
        totals: dict[str, Decimal] = {
            "community_assets": ZERO,
            "community_debts": ZERO,
            "separate_assets_spouse1": ZERO,
            "separate_assets_spouse2": ZERO,
            "separate_debts_spouse1": ZERO,
            "separate_debts_spouse2": ZERO,
        }

        asset_divisions = [
            self._divide_asset(asset, totals, warnings)
            for asset in calculation_input.assets
        ]
        debt_divisions = [
            self._divide_debt(debt, totals, warnings)
            for debt in calculation_input.debts
        ]

        net_community_estate = totals["community_assets"] - totals["community_debts"]
        community_share = net_community_estate / TWO

        total_spouse1 = (
            community_share
            + totals["separate_assets_spouse1"]
            - totals["separate_debts_spouse1"]
        )
        total_spouse2 = (
            (net_community_estate - community_share)
            + totals["separate_assets_spouse2"]
            - totals["separate_debts_spouse2"]
        )

        logger.info(
            "community_property_divided",
            jurisdiction=self.state.code,
            community_assets=str(totals["community_assets"]),
            community_debts=str(totals["community_debts"]),
            net_community_estate=str(net_community_estate),
            total_spouse1=str(total_spouse1),
            total_spouse2=str(total_spouse2),
        )

        division = PropertyDivision(
            spouse1_assets=[a for a in asset_divisions if a.spouse1_share != 0],
            spouse2_assets=[a for a in asset_divisions if a.spouse2_share != 0],
            spouse1_debts=[d for d in debt_divisions if d.spouse1_responsibility != 0],
            spouse2_debts=[d for d in debt_divisions if d.spouse2_responsibility != 0],
            total_spouse1_value=total_spouse1,
            total_spouse2_value=total_spouse2,
        )
        return DivisionOutcome(division=division, warnings=warnings)
