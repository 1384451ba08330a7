"""Tests for input and result models."""

from datetime import date
from decimal import Decimal

import pytest

from equisplit_core import (
    Asset,
    EquitableDistributionFactors,
    MarriageInfo,
    PropertyDivision,
)


class TestAsset:
    """Test suite for Asset."""

    def test_appreciation(self):
        """Appreciation should be current value minus acquisition value."""
        asset = Asset(
            id="home",
            description="Home",
            current_value=Decimal("500000"),
            acquisition_value=Decimal("300000"),
        )
        assert asset.appreciation == Decimal("200000")

    def test_appreciation_never_negative(self):
        """A depreciated asset should have zero appreciation."""
        asset = Asset(
            id="car",
            description="Car",
            current_value=Decimal("10000"),
            acquisition_value=Decimal("30000"),
        )
        assert asset.appreciation == 0

    def test_appreciation_unknown(self):
        """Appreciation should be None without an acquisition value."""
        asset = Asset(id="art", description="Painting", current_value=Decimal("1"))
        assert asset.appreciation is None

    def test_negative_value_rejected(self):
        """Asset values cannot be negative."""
        with pytest.raises(ValueError):
            Asset(id="x", description="x", current_value=Decimal("-1"))


class TestMarriageInfo:
    """Test suite for MarriageInfo."""

    def test_separation_before_marriage_rejected(self):
        """Separation date cannot precede the marriage date."""
        with pytest.raises(ValueError):
            MarriageInfo(marriage_date=date(2010, 1, 1), separation_date=date(2009, 1, 1))

    def test_camel_case_keys(self):
        """MarriageInfo should accept camelCase keys."""
        info = MarriageInfo.model_validate(
            {"marriageDate": "2010-01-01", "hasPrenup": True}
        )

        assert info.marriage_date == date(2010, 1, 1)
        assert info.has_prenup is True
        assert info.special_circumstances == []


class TestEquitableDistributionFactors:
    """Test suite for EquitableDistributionFactors."""

    def test_defaults(self):
        """Optional factors should default to neutral values."""
        factors = EquitableDistributionFactors(
            marriage_duration=8, age_spouse1=35, age_spouse2=36
        )

        assert factors.income_spouse1 == 0
        assert factors.custody_arrangement is None
        assert factors.has_extended_factors is False

    def test_extended_factors_detected(self):
        """Any supplied extended factor should switch on extended scoring."""
        factors = EquitableDistributionFactors(
            marriage_duration=8,
            age_spouse1=35,
            age_spouse2=36,
            standard_of_living="Upper middle class",
        )
        assert factors.has_extended_factors is True


class TestPropertyDivision:
    """Test suite for PropertyDivision."""

    def test_total_estate_value(self):
        """Total estate value should be the sum of both spouses' totals."""
        division = PropertyDivision(
            total_spouse1_value=Decimal("120000"),
            total_spouse2_value=Decimal("-20000"),
        )
        assert division.total_estate_value == Decimal("100000")
