#!/usr/bin/env python3
"""
Property Division Demonstration

This script runs the same marital estate through three jurisdictions:
1. California (community property, 50/50)
2. Texas (community property with separate-property appreciation)
3. New York (equitable distribution with an equalization payment)

Run: python examples/property_division_demo.py
"""

from datetime import date
from decimal import Decimal

from equisplit_core import (
    Asset,
    AssetType,
    CalculationInput,
    CalculationResult,
    CustodyArrangement,
    Debt,
    DebtType,
    EngineConfig,
    EquitableDistributionFactors,
    MarriageInfo,
    Ownership,
    PropertyDivisionCalculator,
    configure_logging,
    format_currency,
)


def create_sample_input(jurisdiction: str) -> CalculationInput:
    """Create a sample estate with realistic data."""

    marriage_info = MarriageInfo(
        marriage_date=date(2006, 8, 19),
        separation_date=date(2024, 11, 1),
        has_prenup=False,
    )

    assets = [
        Asset(
            id="home",
            description="Family home",
            type=AssetType.REAL_ESTATE,
            current_value=Decimal("650000"),
            acquisition_date=date(2009, 3, 1),
        ),
        Asset(
            id="cabin",
            description="Lake cabin owned before marriage",
            type=AssetType.REAL_ESTATE,
            current_value=Decimal("240000"),
            acquisition_value=Decimal("150000"),
            acquisition_date=date(2003, 6, 15),
            is_separate_property=True,
            owned_by=Ownership.SPOUSE2,
        ),
        Asset(
            id="401k",
            description="Spouse 1 401(k)",
            type=AssetType.RETIREMENT_ACCOUNT,
            current_value=Decimal("310000"),
        ),
        Asset(
            id="checking",
            description="Joint checking",
            type=AssetType.BANK_ACCOUNT,
            current_value=Decimal("18500"),
        ),
    ]

    debts = [
        Debt(
            id="mortgage",
            description="Home mortgage",
            type=DebtType.MORTGAGE,
            current_balance=Decimal("280000"),
        ),
        Debt(
            id="auto",
            description="Auto loan",
            type=DebtType.VEHICLE_LOAN,
            current_balance=Decimal("22000"),
        ),
    ]

    special_factors = EquitableDistributionFactors(
        marriage_duration=18,
        age_spouse1=47,
        age_spouse2=49,
        income_spouse1=Decimal("42000"),
        income_spouse2=Decimal("128000"),
        earn_capacity_spouse1=Decimal("55000"),
        earn_capacity_spouse2=Decimal("130000"),
        contribution_to_marriage="Primary caregiver for two children",
        custody_arrangement=CustodyArrangement.SOLE_1,
    )

    return CalculationInput(
        jurisdiction=jurisdiction,
        marriage_info=marriage_info,
        assets=assets,
        debts=debts,
        special_factors=special_factors,
    )


def print_result(result: CalculationResult) -> None:
    division = result.division
    print(f"  - Methodology: {result.methodology}")
    print(f"  - Spouse 1 Net: {format_currency(division.total_spouse1_value)}")
    print(f"  - Spouse 2 Net: {format_currency(division.total_spouse2_value)}")
    if division.equalization_payment is not None:
        print(
            f"  - Equalization: {format_currency(division.equalization_payment)} "
            f"paid by {division.payment_from.value}"
        )
    if result.factors:
        print(f"  - Factors: {', '.join(result.factors)}")
    for warning in result.warnings:
        print(f"  - Warning: {warning}")
    print(f"  - Confidence Level: {result.confidence_level}%")


def main():
    """Run the property division demonstration."""
    config = EngineConfig(log_level="WARNING")
    configure_logging(config)
    calculator = PropertyDivisionCalculator(config=config)

    print("=" * 70)
    print("EQUISPLIT CORE - Property Division Demo")
    print("=" * 70)
    print()

    for step, jurisdiction in enumerate(("CA", "TX", "NY"), start=1):
        print(f"Step {step}: Dividing the estate under {jurisdiction} law...")
        result = calculator.calculate(create_sample_input(jurisdiction))
        print_result(result)
        print()

    print("Audit trail (last calculation):")
    for entry in result.audit_log:
        print(f"  - {entry.step}: {entry.output_value} ({entry.source})")

    print()
    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
