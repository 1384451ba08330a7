"""Tests for community property division."""

from datetime import date
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from equisplit_core import (
    DEFAULT_STATE_REGISTRY,
    Asset,
    AssetType,
    CalculationInput,
    CommunityPropertyDivider,
    Debt,
    DebtType,
    DivisionRule,
    MarriageInfo,
    Ownership,
)


@pytest.fixture
def marriage() -> MarriageInfo:
    """A marriage without a prenup."""
    return MarriageInfo(marriage_date=date(2010, 6, 1))


def divide(jurisdiction: str, marriage: MarriageInfo, assets=(), debts=()):
    divider = CommunityPropertyDivider(DEFAULT_STATE_REGISTRY.get(jurisdiction))
    return divider.divide(
        CalculationInput(
            jurisdiction=jurisdiction,
            marriage_info=marriage,
            assets=list(assets),
            debts=list(debts),
        )
    )


def home(**overrides) -> Asset:
    values = {
        "id": "home",
        "description": "Family home",
        "type": AssetType.REAL_ESTATE,
        "current_value": Decimal("500000"),
    }
    values.update(overrides)
    return Asset(**values)


class TestCommunitySplit:
    """Test suite for the equal split of community property."""

    def test_community_assets_and_debts_split_equally(self, marriage: MarriageInfo):
        """Community property should be split 50/50 net of community debt."""
        mortgage = Debt(
            id="mortgage",
            description="Mortgage",
            type=DebtType.MORTGAGE,
            current_balance=Decimal("200000"),
        )
        outcome = divide("CA", marriage, [home()], [mortgage])
        division = outcome.division

        assert division.total_spouse1_value == Decimal("150000")
        assert division.total_spouse2_value == Decimal("150000")
        assert division.equalization_payment is None
        assert division.payment_from is None
        assert outcome.warnings == []

        asset = division.spouse1_assets[0]
        assert asset.rule_applied == DivisionRule.COMMUNITY_SPLIT
        assert asset.spouse1_share == Decimal("250000")
        assert asset.spouse2_share == Decimal("250000")
        assert division.spouse2_assets[0] == asset

        debt = division.spouse1_debts[0]
        assert debt.spouse1_responsibility == Decimal("100000")
        assert debt.spouse2_responsibility == Decimal("100000")

    def test_odd_cents_conserved(self, marriage: MarriageInfo):
        """Line items should sum exactly to the item value."""
        outcome = divide("NV", marriage, [home(current_value=Decimal("100.01"))])
        asset = outcome.division.spouse1_assets[0]

        assert asset.spouse1_share + asset.spouse2_share == Decimal("100.01")

    def test_empty_estate(self, marriage: MarriageInfo):
        """No assets or debts should produce zero totals and empty lists."""
        division = divide("CA", marriage).division

        assert division.total_spouse1_value == 0
        assert division.total_spouse2_value == 0
        assert division.spouse1_assets == []
        assert division.spouse2_debts == []

    def test_upside_down_estate(self, marriage: MarriageInfo):
        """Debts exceeding assets should leave both spouses with negative totals."""
        card = Debt(
            id="card",
            description="Credit card",
            type=DebtType.CREDIT_CARD,
            current_balance=Decimal("30000"),
        )
        car = Asset(id="car", description="Car", current_value=Decimal("10000"))
        division = divide("AZ", marriage, [car], [card]).division

        assert division.total_spouse1_value == Decimal("-10000")
        assert division.total_spouse2_value == Decimal("-10000")


class TestSeparateProperty:
    """Test suite for separate property in community property states."""

    def test_separate_asset_stays_with_owner(self, marriage: MarriageInfo):
        """Separate property should go entirely to its owner."""
        inheritance = Asset(
            id="inheritance",
            description="Inherited brokerage account",
            type=AssetType.INVESTMENT_ACCOUNT,
            current_value=Decimal("50000"),
            is_separate_property=True,
            owned_by=Ownership.SPOUSE2,
        )
        outcome = divide("CA", marriage, [home(), inheritance])
        division = outcome.division

        assert division.total_spouse1_value == Decimal("250000")
        assert division.total_spouse2_value == Decimal("300000")
        assert [a.asset_id for a in division.spouse1_assets] == ["home"]
        assert [a.asset_id for a in division.spouse2_assets] == ["home", "inheritance"]
        assert division.spouse2_assets[1].rule_applied == DivisionRule.SEPARATE_PROPERTY
        assert outcome.warnings == []

    def test_separate_debt_stays_with_responsible_spouse(self, marriage: MarriageInfo):
        """A separate debt should be borne by the responsible spouse."""
        loan = Debt(
            id="student",
            description="Student loan",
            type=DebtType.STUDENT_LOAN,
            current_balance=Decimal("40000"),
            is_separate_property=True,
            responsibility=Ownership.SPOUSE2,
        )
        division = divide("WA", marriage, [home()], [loan]).division

        assert division.total_spouse1_value == Decimal("250000")
        assert division.total_spouse2_value == Decimal("210000")
        assert division.spouse1_debts == []
        assert division.spouse2_debts[0].spouse2_responsibility == Decimal("40000")

    def test_missing_owner_defaults_to_spouse1(self, marriage: MarriageInfo):
        """Separate property without an owner should go to spouse 1 with a warning."""
        gift = home(id="gift", is_separate_property=True)

        with capture_logs() as logs:
            outcome = divide("NM", marriage, [gift])

        assert outcome.division.total_spouse1_value == Decimal("500000")
        assert outcome.division.total_spouse2_value == 0
        assert outcome.warnings == [
            "Separate asset 'gift' has not specified ownership; assigned to spouse 1"
        ]
        defaulted = [e for e in logs if e["event"] == "separate_property_owner_defaulted"]
        assert len(defaulted) == 1
        assert defaulted[0]["log_level"] == "warning"
        assert defaulted[0]["item_id"] == "gift"

    def test_joint_separate_debt_defaults_to_spouse1(self, marriage: MarriageInfo):
        """Joint responsibility on a separate debt should default to spouse 1."""
        loan = Debt(
            id="loan",
            description="Premarital loan",
            current_balance=Decimal("1000"),
            is_separate_property=True,
            responsibility=Ownership.JOINT,
        )
        outcome = divide("ID", marriage, debts=[loan])

        assert outcome.division.total_spouse1_value == Decimal("-1000")
        assert "joint ownership" in outcome.warnings[0]


class TestQuasiCommunityProperty:
    """Test suite for quasi-community property."""

    def test_qcp_divided_in_qcp_state(self, marriage: MarriageInfo):
        """QCP should be split equally in California despite the separate flag."""
        out_of_state = home(
            id="ny_condo",
            is_separate_property=True,
            is_quasi_community_property=True,
            owned_by=Ownership.SPOUSE1,
        )
        outcome = divide("CA", marriage, [out_of_state])
        asset = outcome.division.spouse1_assets[0]

        assert asset.rule_applied == DivisionRule.QUASI_COMMUNITY
        assert asset.spouse1_share == Decimal("250000")
        assert asset.spouse2_share == Decimal("250000")
        assert "California" in asset.reasoning

    def test_qcp_flag_ignored_outside_qcp_states(self, marriage: MarriageInfo):
        """Louisiana does not recognize QCP, so the asset stays separate."""
        out_of_state = home(
            id="ny_condo",
            is_separate_property=True,
            is_quasi_community_property=True,
            owned_by=Ownership.SPOUSE1,
        )
        division = divide("LA", marriage, [out_of_state]).division

        assert division.spouse1_assets[0].rule_applied == DivisionRule.SEPARATE_PROPERTY
        assert division.total_spouse1_value == Decimal("500000")
        assert division.spouse2_assets == []


class TestTexasAppreciation:
    """Test suite for the Texas rule on separate property appreciation."""

    def test_appreciation_is_community(self, marriage: MarriageInfo):
        """Appreciation during marriage should be split; the original value kept."""
        ranch = home(
            id="ranch",
            acquisition_value=Decimal("300000"),
            is_separate_property=True,
            owned_by=Ownership.SPOUSE1,
        )
        outcome = divide("TX", marriage, [ranch])
        division = outcome.division
        asset = division.spouse1_assets[0]

        assert asset.rule_applied == DivisionRule.TEXAS_APPRECIATION
        assert asset.spouse1_share == Decimal("400000")
        assert asset.spouse2_share == Decimal("100000")
        assert asset.community_portion == Decimal("200000")
        assert "$300,000" in asset.reasoning
        assert "$200,000" in asset.reasoning
        assert division.total_spouse1_value == Decimal("400000")
        assert division.total_spouse2_value == Decimal("100000")

    def test_appreciation_for_spouse2_owner(self, marriage: MarriageInfo):
        """The original value should follow the owner when spouse 2 owns the asset."""
        ranch = home(
            id="ranch",
            acquisition_value=Decimal("300000"),
            is_separate_property=True,
            owned_by=Ownership.SPOUSE2,
        )
        division = divide("TX", marriage, [ranch]).division

        assert division.total_spouse1_value == Decimal("100000")
        assert division.total_spouse2_value == Decimal("400000")

    def test_unknown_acquisition_value(self, marriage: MarriageInfo):
        """Without an acquisition value the asset should stay wholly separate."""
        ranch = home(id="ranch", is_separate_property=True, owned_by=Ownership.SPOUSE1)
        division = divide("TX", marriage, [ranch]).division
        asset = division.spouse1_assets[0]

        assert asset.rule_applied == DivisionRule.TEXAS_APPRECIATION_UNKNOWN
        assert asset.spouse1_share == Decimal("500000")
        assert division.spouse2_assets == []

    def test_depreciated_asset_stays_separate(self, marriage: MarriageInfo):
        """A separate asset that lost value has no community portion."""
        truck = home(
            id="truck",
            current_value=Decimal("20000"),
            acquisition_value=Decimal("45000"),
            is_separate_property=True,
            owned_by=Ownership.SPOUSE1,
        )
        asset = divide("TX", marriage, [truck]).division.spouse1_assets[0]

        assert asset.rule_applied == DivisionRule.SEPARATE_PROPERTY
        assert asset.community_portion == 0

    def test_appreciation_rule_only_in_texas(self, marriage: MarriageInfo):
        """Other community states should keep appreciation separate."""
        ranch = home(
            id="ranch",
            acquisition_value=Decimal("300000"),
            is_separate_property=True,
            owned_by=Ownership.SPOUSE1,
        )
        division = divide("CA", marriage, [ranch]).division

        assert division.total_spouse1_value == Decimal("500000")
        assert division.total_spouse2_value == 0
