"""Marital property regimes for U.S. states and the District of Columbia.

Nine states follow community property. The remaining 41 states and DC use
equitable distribution. Four community property states also recognize
quasi-community property (QCP): property acquired while domiciled elsewhere
that would have been community property had it been acquired locally.

The registry is read-only data handed to the calculator, so tests can supply
a synthetic registry instead of the national table.

Sources:
- Community property states: IRS Publication 555
- Pennsylvania factors: 23 Pa.C.S. § 3502(a)

Updated: 2025
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from .exceptions import ConfigurationError, InvalidJurisdictionError
from .models import PropertyRegime


# =============================================================================
# VERSION TRACKING
# =============================================================================

STATE_RULES_VERSION = "2025.1"


@dataclass(frozen=True)
class StateRule:
    """Property division metadata for one jurisdiction."""
    code: str
    name: str
    property_regime: PropertyRegime
    is_qcp_state: bool = False
    # Appreciation of separate property during marriage is community (Texas)
    separate_appreciation_is_community: bool = False
    special_rules: tuple[str, ...] = ()
    equitable_factors: tuple[str, ...] = ()

    @property
    def is_community_property(self) -> bool:
        return self.property_regime == PropertyRegime.COMMUNITY


# =============================================================================
# COMMUNITY PROPERTY STATES
# =============================================================================

COMMUNITY_PROPERTY_STATES = ("AZ", "CA", "ID", "LA", "NV", "NM", "TX", "WA", "WI")

QCP_STATES = ("AZ", "CA", "ID", "WA")

APPRECIATION_RULE_STATES = ("TX",)


def _community(code: str, name: str, *special_rules: str) -> StateRule:
    return StateRule(
        code=code,
        name=name,
        property_regime=PropertyRegime.COMMUNITY,
        is_qcp_state=code in QCP_STATES,
        separate_appreciation_is_community=code in APPRECIATION_RULE_STATES,
        special_rules=special_rules,
    )


def _equitable(code: str, name: str, *equitable_factors: str) -> StateRule:
    return StateRule(
        code=code,
        name=name,
        property_regime=PropertyRegime.EQUITABLE,
        equitable_factors=equitable_factors,
    )


PENNSYLVANIA_FACTORS = (
    "Length of the marriage",
    "Prior marriage of either party",
    "Age, health, station, amount and sources of income",
    "Vocational skills, employability, estate, liabilities and needs",
    "Contribution by one party to education, training or increased earning power",
    "Opportunity for future acquisitions of capital assets and income",
    "Sources of income including medical, retirement, insurance or other benefits",
    "Contribution or dissipation of assets",
    "Value of property set apart to each party",
    "Standard of living established during marriage",
    "Economic circumstances at time of divorce",
    "Tax ramifications",
    "Expense of sale",
)


STATE_RULES: tuple[StateRule, ...] = (
    _equitable("AL", "Alabama"),
    _equitable("AK", "Alaska"),
    _community(
        "AZ", "Arizona",
        "Quasi-community property rules apply to out-of-state assets",
    ),
    _equitable("AR", "Arkansas"),
    _community(
        "CA", "California",
        "Income from separate property remains separate",
        "Putative spouse doctrine applies",
        "Strict 50/50 division unless agreement",
    ),
    _equitable("CO", "Colorado"),
    _equitable("CT", "Connecticut"),
    _equitable("DE", "Delaware"),
    _equitable("FL", "Florida"),
    _equitable("GA", "Georgia"),
    _equitable("HI", "Hawaii"),
    _community(
        "ID", "Idaho",
        "Community property with right of survivorship available",
    ),
    _equitable("IL", "Illinois"),
    _equitable("IN", "Indiana"),
    _equitable("IA", "Iowa"),
    _equitable("KS", "Kansas"),
    _equitable("KY", "Kentucky"),
    _community(
        "LA", "Louisiana",
        "Civil law system with unique property concepts",
        "Separate property includes gifts and inheritances",
    ),
    _equitable("ME", "Maine"),
    _equitable("MD", "Maryland"),
    _equitable("MA", "Massachusetts"),
    _equitable("MI", "Michigan"),
    _equitable("MN", "Minnesota"),
    _equitable("MS", "Mississippi"),
    _equitable("MO", "Missouri"),
    _equitable("MT", "Montana"),
    _equitable("NE", "Nebraska"),
    _community(
        "NV", "Nevada",
        "Allows for unequal division in cases of economic fault",
    ),
    _equitable("NH", "New Hampshire"),
    _equitable("NJ", "New Jersey"),
    _community(
        "NM", "New Mexico",
        "Judicial discretion allowed for unequal division",
    ),
    _equitable("NY", "New York"),
    _equitable("NC", "North Carolina"),
    _equitable("ND", "North Dakota"),
    _equitable("OH", "Ohio"),
    _equitable("OK", "Oklahoma"),
    _equitable("OR", "Oregon"),
    _equitable("PA", "Pennsylvania", *PENNSYLVANIA_FACTORS),
    _equitable("RI", "Rhode Island"),
    _equitable("SC", "South Carolina"),
    _equitable("SD", "South Dakota"),
    _equitable("TN", "Tennessee"),
    _community(
        "TX", "Texas",
        "Income from separate property is community property",
        "Inception of title rule for reimbursement claims",
        "Appreciation of separate property during marriage is community property",
    ),
    _equitable("UT", "Utah"),
    _equitable("VT", "Vermont"),
    _equitable("VA", "Virginia"),
    _community(
        "WA", "Washington",
        "Allows for unequal division based on economic misconduct",
    ),
    _equitable("WV", "West Virginia"),
    _community(
        "WI", "Wisconsin",
        "Marital Property Act with deferred community property system",
    ),
    _equitable("WY", "Wyoming"),
    _equitable("DC", "District of Columbia"),
)


# =============================================================================
# REGISTRY
# =============================================================================

@dataclass(frozen=True)
class StateRegistry:
    """Read-only lookup from jurisdiction code to StateRule."""
    rules: Mapping[str, StateRule]
    version: str = STATE_RULES_VERSION

    def __post_init__(self) -> None:
        if not self.rules:
            raise ConfigurationError(
                "State registry must contain at least one jurisdiction",
                config_key="rules",
                expected="non-empty mapping of jurisdiction code to StateRule",
            )
        normalized = {code.upper(): rule for code, rule in self.rules.items()}
        object.__setattr__(self, "rules", MappingProxyType(normalized))

    @classmethod
    def from_rules(
        cls, rules: Iterable[StateRule], version: str = STATE_RULES_VERSION
    ) -> "StateRegistry":
        """Build a registry from StateRule records keyed by their code."""
        return cls(rules={rule.code: rule for rule in rules}, version=version)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper() in self.rules

    def __len__(self) -> int:
        return len(self.rules)

    def get(self, code: str) -> StateRule:
        """Look up a jurisdiction.

        Raises:
            InvalidJurisdictionError: If the code is not in the registry.
        """
        rule = self.rules.get(code.upper()) if isinstance(code, str) else None
        if rule is None:
            raise InvalidJurisdictionError(
                f"Unknown jurisdiction: {code}",
                jurisdiction=str(code),
                details={"known_jurisdictions": len(self.rules)},
            )
        return rule

    def get_property_regime(self, code: str) -> PropertyRegime:
        return self.get(code).property_regime

    def get_state_name(self, code: str) -> str:
        return self.get(code).name

    def is_community_property_state(self, code: str) -> bool:
        return self.get(code).is_community_property

    def is_qcp_state(self, code: str) -> bool:
        return self.get(code).is_qcp_state

    def get_states_by_regime(self, regime: PropertyRegime) -> list[str]:
        """Jurisdiction codes using the given regime, in registry order."""
        return [
            code for code, rule in self.rules.items()
            if rule.property_regime == regime
        ]


DEFAULT_STATE_REGISTRY = StateRegistry.from_rules(STATE_RULES)


def get_state_rules_version() -> str:
    """Return current state rules version."""
    return STATE_RULES_VERSION
