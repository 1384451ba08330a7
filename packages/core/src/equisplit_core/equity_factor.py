"""Equity factor scoring for equitable distribution states.

The equity factor is spouse 1's share of the marital estate, between 30% and
70%. It starts at an even split and is moved by an ordered list of rules,
each a predicate over the factors plus a signed adjustment. Positive
adjustments favor spouse 1.

Every rule is evaluated over the same immutable factors snapshot and the
running score, so each one can be tested on its own and the list of applied
rules doubles as the explanation shown to the user.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Optional

import structlog

from .models import CustodyArrangement, EquitableDistributionFactors, HealthStatus

logger = structlog.get_logger()


BASE_EQUITY_FACTOR = Decimal("0.5")
MIN_EQUITY_FACTOR = Decimal("0.3")
MAX_EQUITY_FACTOR = Decimal("0.7")
SCORE_PRECISION = Decimal("0.001")

# The sale-expense rule only nudges scores that lean this far from even
SALE_EXPENSE_LEAN = Decimal("0.05")


Predicate = Callable[[EquitableDistributionFactors, Decimal], bool]


@dataclass(frozen=True)
class EquityRule:
    """A single scoring rule.

    Attributes:
        label: Human-readable description of the factor
        predicate: Called with (factors, running_score); True applies the delta
        delta: Adjustment to spouse 1's share when the rule applies
        extended: Only evaluated when state-specific factors were supplied
    """
    label: str
    predicate: Predicate
    delta: Decimal
    extended: bool = False


@dataclass(frozen=True)
class EquityScore:
    """Outcome of scoring a set of factors."""
    value: Decimal
    raw_value: Decimal
    applied: tuple[EquityRule, ...] = field(default_factory=tuple)

    @property
    def labels(self) -> list[str]:
        return [rule.label for rule in self.applied]

    @property
    def spouse2_value(self) -> Decimal:
        return Decimal("1") - self.value


# =============================================================================
# PREDICATE HELPERS
# =============================================================================

def _present(value: Any) -> bool:
    """Whether an optional factor was supplied with meaningful content."""
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def _only(first: str, second: str) -> Predicate:
    """Predicate: the ``first`` factor is present and ``second`` is not."""
    def predicate(factors: EquitableDistributionFactors, _score: Decimal) -> bool:
        return _present(getattr(factors, first)) and not _present(getattr(factors, second))
    return predicate


def _ratio(numerator: Decimal, other: Decimal) -> Optional[Decimal]:
    total = numerator + other
    if total <= 0:
        return None
    return numerator / total


def _income_ratio(factors: EquitableDistributionFactors) -> Optional[Decimal]:
    return _ratio(factors.income_spouse1, factors.income_spouse2)


def _capacity_ratio(factors: EquitableDistributionFactors) -> Optional[Decimal]:
    return _ratio(factors.earn_capacity_spouse1, factors.earn_capacity_spouse2)


def _ratio_below(
    ratio: Callable[[EquitableDistributionFactors], Optional[Decimal]], limit: Decimal
) -> Predicate:
    def predicate(factors: EquitableDistributionFactors, _score: Decimal) -> bool:
        value = ratio(factors)
        return value is not None and value < limit
    return predicate


def _ratio_above(
    ratio: Callable[[EquitableDistributionFactors], Optional[Decimal]], limit: Decimal
) -> Predicate:
    def predicate(factors: EquitableDistributionFactors, _score: Decimal) -> bool:
        value = ratio(factors)
        return value is not None and value > limit
    return predicate


def _estates(factors: EquitableDistributionFactors) -> tuple[Decimal, Decimal]:
    return (
        factors.estate_spouse1 or Decimal("0"),
        factors.estate_spouse2 or Decimal("0"),
    )


def _estate_much_larger(larger: int) -> Predicate:
    """Both estates are known and one is more than double the other."""
    def predicate(factors: EquitableDistributionFactors, _score: Decimal) -> bool:
        estate1, estate2 = _estates(factors)
        if estate1 <= 0 or estate2 <= 0:
            return False
        if larger == 1:
            return estate1 > estate2 * 2
        return estate2 > estate1 * 2
    return predicate


def _only_estate(owner: int) -> Predicate:
    """Exactly one spouse has a known, nonzero separate estate."""
    def predicate(factors: EquitableDistributionFactors, _score: Decimal) -> bool:
        estate1, estate2 = _estates(factors)
        if owner == 1:
            return estate1 > 0 and estate2 <= 0
        return estate2 > 0 and estate1 <= 0
    return predicate


def _sale_expense(direction: int) -> Predicate:
    """A positive sale expense pulls a lopsided score back toward even."""
    def predicate(factors: EquitableDistributionFactors, score: Decimal) -> bool:
        expense = factors.expense_of_sale_assets
        if expense is None or expense <= 0:
            return False
        if direction > 0:
            return score > BASE_EQUITY_FACTOR + SALE_EXPENSE_LEAN
        return score < BASE_EQUITY_FACTOR - SALE_EXPENSE_LEAN
    return predicate


def _age_gap(factors: EquitableDistributionFactors) -> int:
    return factors.age_spouse1 - factors.age_spouse2


# =============================================================================
# RULES
# =============================================================================

EQUITY_RULES: tuple[EquityRule, ...] = (
    # Marriage duration
    EquityRule(
        "Short marriage (under 5 years)",
        lambda f, _: f.marriage_duration < 5,
        Decimal("-0.05"),
    ),
    EquityRule(
        "Long marriage (over 20 years)",
        lambda f, _: f.marriage_duration > 20,
        Decimal("0.05"),
    ),
    # Age
    EquityRule(
        "Spouse 1 significantly older",
        lambda f, _: _age_gap(f) > 10,
        Decimal("-0.03"),
    ),
    EquityRule(
        "Spouse 2 significantly older",
        lambda f, _: _age_gap(f) < -10,
        Decimal("0.03"),
    ),
    # Income: lower-earning spouse receives more
    EquityRule(
        "Spouse 1 earns under 30% of household income",
        _ratio_below(_income_ratio, Decimal("0.3")),
        Decimal("0.10"),
    ),
    EquityRule(
        "Spouse 1 earns over 70% of household income",
        _ratio_above(_income_ratio, Decimal("0.7")),
        Decimal("-0.10"),
    ),
    # Earning capacity
    EquityRule(
        "Spouse 1 has lower earning capacity",
        _ratio_below(_capacity_ratio, Decimal("0.4")),
        Decimal("0.05"),
    ),
    EquityRule(
        "Spouse 1 has higher earning capacity",
        _ratio_above(_capacity_ratio, Decimal("0.6")),
        Decimal("-0.05"),
    ),
    # Health
    EquityRule(
        "Spouse 1 in poor health",
        lambda f, _: f.health_spouse1 == HealthStatus.POOR
        and f.health_spouse2 != HealthStatus.POOR,
        Decimal("0.05"),
    ),
    EquityRule(
        "Spouse 2 in poor health",
        lambda f, _: f.health_spouse2 == HealthStatus.POOR
        and f.health_spouse1 != HealthStatus.POOR,
        Decimal("-0.05"),
    ),
    # Custody: primary custodial parent receives more
    EquityRule(
        "Spouse 1 has sole custody",
        lambda f, _: f.custody_arrangement == CustodyArrangement.SOLE_1,
        Decimal("0.08"),
    ),
    EquityRule(
        "Spouse 2 has sole custody",
        lambda f, _: f.custody_arrangement == CustodyArrangement.SOLE_2,
        Decimal("-0.08"),
    ),
    # Conduct
    EquityRule(
        "Domestic violence",
        lambda f, _: f.domestic_violence,
        Decimal("0.10"),
    ),
    EquityRule(
        "Wasting of marital assets",
        lambda f, _: f.wasting_of_assets,
        Decimal("0.05"),
    ),
    # Extended (state-specific) factors
    EquityRule(
        "Spouse 1 has a prior marriage",
        _only("prior_marriage_spouse1", "prior_marriage_spouse2"),
        Decimal("0.01"),
        extended=True,
    ),
    EquityRule(
        "Spouse 2 has a prior marriage",
        _only("prior_marriage_spouse2", "prior_marriage_spouse1"),
        Decimal("-0.01"),
        extended=True,
    ),
    EquityRule(
        "Spouse 1 contributed to spouse 2's education or training",
        _only(
            "contribution_to_education_training_spouse1",
            "contribution_to_education_training_spouse2",
        ),
        Decimal("0.02"),
        extended=True,
    ),
    EquityRule(
        "Spouse 2 contributed to spouse 1's education or training",
        _only(
            "contribution_to_education_training_spouse2",
            "contribution_to_education_training_spouse1",
        ),
        Decimal("-0.02"),
        extended=True,
    ),
    EquityRule(
        "Spouse 1 has opportunity for future acquisitions",
        _only(
            "opportunity_future_acquisitions_spouse1",
            "opportunity_future_acquisitions_spouse2",
        ),
        Decimal("-0.01"),
        extended=True,
    ),
    EquityRule(
        "Spouse 2 has opportunity for future acquisitions",
        _only(
            "opportunity_future_acquisitions_spouse2",
            "opportunity_future_acquisitions_spouse1",
        ),
        Decimal("0.01"),
        extended=True,
    ),
    EquityRule(
        "Spouse 1 has documented needs",
        _only("needs_spouse1", "needs_spouse2"),
        Decimal("0.02"),
        extended=True,
    ),
    EquityRule(
        "Spouse 2 has documented needs",
        _only("needs_spouse2", "needs_spouse1"),
        Decimal("-0.02"),
        extended=True,
    ),
    EquityRule(
        "Spouse 1 economic circumstances at divorce",
        _only(
            "economic_circumstances_at_divorce_spouse1",
            "economic_circumstances_at_divorce_spouse2",
        ),
        Decimal("0.02"),
        extended=True,
    ),
    EquityRule(
        "Spouse 2 economic circumstances at divorce",
        _only(
            "economic_circumstances_at_divorce_spouse2",
            "economic_circumstances_at_divorce_spouse1",
        ),
        Decimal("-0.02"),
        extended=True,
    ),
    EquityRule(
        "Spouse 1 separate estate more than double spouse 2's",
        _estate_much_larger(1),
        Decimal("-0.02"),
        extended=True,
    ),
    EquityRule(
        "Spouse 2 separate estate more than double spouse 1's",
        _estate_much_larger(2),
        Decimal("0.02"),
        extended=True,
    ),
    EquityRule(
        "Only spouse 1 has a separate estate",
        _only_estate(1),
        Decimal("-0.01"),
        extended=True,
    ),
    EquityRule(
        "Only spouse 2 has a separate estate",
        _only_estate(2),
        Decimal("0.01"),
        extended=True,
    ),
    EquityRule(
        "Expense of sale moderates division favoring spouse 1",
        _sale_expense(1),
        Decimal("-0.01"),
        extended=True,
    ),
    EquityRule(
        "Expense of sale moderates division favoring spouse 2",
        _sale_expense(-1),
        Decimal("0.01"),
        extended=True,
    ),
    EquityRule(
        "Spouse 1 station in life",
        _only("station_spouse1", "station_spouse2"),
        Decimal("0.01"),
        extended=True,
    ),
    EquityRule(
        "Spouse 2 station in life",
        _only("station_spouse2", "station_spouse1"),
        Decimal("-0.01"),
        extended=True,
    ),
    EquityRule(
        "Spouse 1 has other sources of income",
        _only("sources_of_income_details_spouse1", "sources_of_income_details_spouse2"),
        Decimal("-0.01"),
        extended=True,
    ),
    EquityRule(
        "Spouse 2 has other sources of income",
        _only("sources_of_income_details_spouse2", "sources_of_income_details_spouse1"),
        Decimal("0.01"),
        extended=True,
    ),
)


def clamp_equity_factor(score: Decimal) -> Decimal:
    """Clamp to [0.3, 0.7] and round to three decimals."""
    bounded = max(MIN_EQUITY_FACTOR, min(MAX_EQUITY_FACTOR, score))
    return bounded.quantize(SCORE_PRECISION, rounding=ROUND_HALF_UP)


class EquityFactorScorer:
    """Fold an ordered rule list over a factors snapshot."""

    def __init__(self, rules: tuple[EquityRule, ...] = EQUITY_RULES):
        self.rules = rules

    def score(self, factors: EquitableDistributionFactors) -> EquityScore:
        """Score factors and report which rules applied."""
        include_extended = factors.has_extended_factors
        running = BASE_EQUITY_FACTOR
        applied: list[EquityRule] = []

        for rule in self.rules:
            if rule.extended and not include_extended:
                continue
            if rule.predicate(factors, running):
                running += rule.delta
                applied.append(rule)

        result = EquityScore(
            value=clamp_equity_factor(running),
            raw_value=running,
            applied=tuple(applied),
        )
        logger.debug(
            "equity_factor_scored",
            raw=str(running),
            equity_factor=str(result.value),
            rules=result.labels,
        )
        return result


def score_factors(factors: EquitableDistributionFactors) -> EquityScore:
    """Score factors with the default rule list."""
    return EquityFactorScorer().score(factors)


def calculate_equity_factor(factors: EquitableDistributionFactors) -> Decimal:
    """Spouse 1's share of the marital estate, between 0.3 and 0.7."""
    return score_factors(factors).value
