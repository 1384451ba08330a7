"""Property division calculations per U.S. state marital property law.

The calculator looks up the jurisdiction in the state registry and routes
the request:

1. Community property states -> CommunityPropertyDivider (50/50 with QCP and
   Texas appreciation carve-outs)
2. Equitable distribution states -> EquitableDistributionDivider (equity
   factor weighting with an optional equalization payment)

All calculation steps are logged for the audit trail.
"""

from decimal import Decimal
from typing import Optional, Union

import structlog

from .community import CommunityPropertyDivider
from .confidence import calculate_confidence_level
from .config import EngineConfig
from .equitable import EquitableDistributionDivider
from .equity_factor import EquityFactorScorer
from .exceptions import ValidationError
from .formatting import format_currency, format_percentage
from .models import (
    AuditEntry,
    CalculationInput,
    CalculationResult,
    DivisionOutcome,
    PropertyDivision,
    PropertyRegime,
)
from .state_registry import DEFAULT_STATE_REGISTRY, StateRegistry, StateRule

logger = structlog.get_logger()

Divider = Union[CommunityPropertyDivider, EquitableDistributionDivider]


class PropertyDivisionCalculator:
    """
    Divide a marital estate between two spouses.

    The calculator is a pure function of its inputs: the state registry and
    configuration are injected, and no I/O happens during a calculation.
    Each call to ``calculate`` builds its own audit log, so one instance can
    be shared across threads.
    """

    def __init__(
        self,
        registry: StateRegistry = DEFAULT_STATE_REGISTRY,
        config: Optional[EngineConfig] = None,
        scorer: Optional[EquityFactorScorer] = None,
    ):
        """
        Initialize calculator.

        Args:
            registry: Jurisdiction lookup (default: all 50 states and DC)
            config: Engine settings (default: loaded from environment)
            scorer: Equity factor scorer for equitable distribution states
        """
        self.registry = registry
        self.config = config or EngineConfig()
        self.scorer = scorer or EquityFactorScorer()

    def _log_step(
        self,
        audit_log: list[AuditEntry],
        step: str,
        input_value: str,
        output_value: str,
        source: str,
        notes: Optional[str] = None,
    ) -> None:
        """Append an entry to this calculation's audit log."""
        entry = AuditEntry(
            step=step,
            input_value=input_value,
            output_value=output_value,
            source=source,
            notes=notes,
        )
        audit_log.append(entry)
        logger.info(
            "property_division_step",
            step=step,
            input=input_value,
            output=output_value,
            source=source,
        )

    def _select_divider(self, state: StateRule) -> Divider:
        if state.is_community_property:
            return CommunityPropertyDivider(state)
        return EquitableDistributionDivider(
            state,
            scorer=self.scorer,
            equalization_threshold=self.config.equalization_threshold,
        )

    def _check_regime(
        self, calculation_input: CalculationInput, state: StateRule
    ) -> list[str]:
        """Warn when the caller's stated regime disagrees with the registry."""
        declared = calculation_input.property_regime
        if declared is None or declared == state.property_regime:
            return []
        logger.warning(
            "property_regime_mismatch",
            jurisdiction=state.code,
            declared=declared.value,
            registry=state.property_regime.value,
        )
        return [
            f"{state.name} uses {state.property_regime.value} property rules; "
            f"the requested {declared.value} regime was ignored"
        ]

    def _run(
        self, calculation_input: CalculationInput
    ) -> tuple[StateRule, DivisionOutcome]:
        state = self.registry.get(calculation_input.jurisdiction)
        regime_warnings = self._check_regime(calculation_input, state)
        outcome = self._select_divider(state).divide(calculation_input)
        outcome.warnings = regime_warnings + outcome.warnings

        if self.config.verify_conservation:
            verify_conservation(
                calculation_input,
                outcome.division,
                tolerance=self.config.conservation_tolerance,
            )
        return state, outcome

    def divide(self, calculation_input: CalculationInput) -> PropertyDivision:
        """
        Divide assets and debts for the input's jurisdiction.

        Raises:
            InvalidJurisdictionError: Jurisdiction is not in the registry
            MissingFactorsError: Equitable distribution without factors
        """
        _, outcome = self._run(calculation_input)
        return outcome.division

    def calculate(self, calculation_input: CalculationInput) -> CalculationResult:
        """
        Divide the estate and attach confidence, methodology and audit trail.

        Args:
            calculation_input: Validated assets, debts and marriage details

        Returns:
            CalculationResult with the division and full audit trail
        """
        audit_log: list[AuditEntry] = []

        state, outcome = self._run(calculation_input)
        division = outcome.division

        # Step 1: Jurisdiction
        self._log_step(
            audit_log,
            step="jurisdiction",
            input_value=calculation_input.jurisdiction,
            output_value=state.property_regime.value,
            source=f"State registry {self.registry.version}",
            notes=state.name,
        )

        # Step 2: Estate composition
        total_assets = sum((a.current_value for a in calculation_input.assets), Decimal("0"))
        total_debts = sum((d.current_balance for d in calculation_input.debts), Decimal("0"))
        self._log_step(
            audit_log,
            step="estate_composition",
            input_value=(
                f"{len(calculation_input.assets)} assets, "
                f"{len(calculation_input.debts)} debts"
            ),
            output_value=f"assets={total_assets}, debts={total_debts}",
            source="User provided",
        )

        # Step 3: Equity factor (equitable distribution only)
        if outcome.equity_factor is not None:
            self._log_step(
                audit_log,
                step="equity_factor",
                input_value=f"{len(outcome.factors)} factors applied",
                output_value=str(outcome.equity_factor),
                source="Equitable distribution factor weighting",
                notes="; ".join(outcome.factors) or None,
            )

        # Step 4: Totals
        self._log_step(
            audit_log,
            step="spouse_totals",
            input_value=f"net estate={total_assets - total_debts}",
            output_value=(
                f"spouse1={division.total_spouse1_value}, "
                f"spouse2={division.total_spouse2_value}"
            ),
            source=_methodology(state, outcome),
        )

        # Step 5: Equalization
        if division.equalization_payment is not None:
            self._log_step(
                audit_log,
                step="equalization_payment",
                input_value=(
                    f"|{division.total_spouse1_value} - {division.total_spouse2_value}|"
                ),
                output_value=str(division.equalization_payment),
                source=f"Threshold {format_currency(self.config.equalization_threshold)}",
                notes=f"Paid by {division.payment_from.value}",
            )

        # Step 6: Confidence
        confidence = calculate_confidence_level(calculation_input)
        self._log_step(
            audit_log,
            step="confidence_level",
            input_value=(
                f"prenup={calculation_input.marriage_info.has_prenup}, "
                f"assets={len(calculation_input.assets)}, "
                f"debts={len(calculation_input.debts)}"
            ),
            output_value=str(confidence),
            source="Complexity heuristic",
        )

        return CalculationResult(
            jurisdiction=state.code,
            property_regime=state.property_regime,
            division=division,
            confidence_level=confidence,
            equity_factor=outcome.equity_factor,
            factors=outcome.factors,
            methodology=_methodology(state, outcome),
            methodology_version=self.config.methodology_version,
            audit_log=audit_log,
            warnings=outcome.warnings,
        )


def _methodology(state: StateRule, outcome: DivisionOutcome) -> str:
    if state.property_regime == PropertyRegime.COMMUNITY:
        return f"Community property (50/50) - {state.name}"
    factor = outcome.equity_factor
    return (
        f"Equitable distribution ({format_percentage(factor)}/"
        f"{format_percentage(1 - factor)}) - {state.name}"
    )


def verify_conservation(
    calculation_input: CalculationInput,
    division: PropertyDivision,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Check that spouse totals add up to the net estate.

    Every asset and debt is fully allocated between the spouses, so the two
    totals must sum to total assets minus total debts.

    Raises:
        ValidationError: If the totals drift by more than ``tolerance``.
    """
    net_estate = sum(
        (a.current_value for a in calculation_input.assets), Decimal("0")
    ) - sum((d.current_balance for d in calculation_input.debts), Decimal("0"))
    drift = abs(division.total_estate_value - net_estate)
    if drift > tolerance:
        raise ValidationError(
            "Division does not conserve estate value",
            field="total_estate_value",
            value=str(division.total_estate_value),
            constraint=f"must equal net estate {net_estate}",
            details={"drift": str(drift)},
        )
