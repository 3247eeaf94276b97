"""National Insurance calculators for employee Class 1 and employer contributions."""

from typing import Any

from ukcalc.calculators.bands import evaluate_bands
from ukcalc.calculators.tax_data import DEFAULT_TAX_YEAR, TAX_YEARS


def calculate_national_insurance(
    annual_income: float,
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Calculate employee Class 1 NI with per-band breakdown.

    The NI threshold table carries its own free band, so no allowance is
    applied.

    Args:
        annual_income: Gross annual employment income (must be >= 0).
        tax_year: Tax year key, e.g. "2025-26".

    Returns:
        Dict with total_ni, breakdown, tax_year.
    """
    if tax_year not in TAX_YEARS:
        return {"error": f"Unknown tax year: {tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"}

    if annual_income < 0:
        return {"error": "Annual income must be non-negative."}

    result = evaluate_bands(annual_income, TAX_YEARS[tax_year].national_insurance)

    return {
        "annual_income": annual_income,
        "total_ni": result.total,
        "monthly_ni": result.total / 12,
        "breakdown": [entry.model_dump() for entry in result.breakdown],
        "tax_year": tax_year,
    }


def calculate_employer_ni(
    annual_salary: float,
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Calculate employer (secondary) NI on a salary.

    Charged at a flat rate on earnings above the secondary threshold.

    Args:
        annual_salary: Gross annual salary paid (must be >= 0).
        tax_year: Tax year key, e.g. "2025-26".

    Returns:
        Dict with employer_ni, employer_rate, secondary_threshold, tax_year.
    """
    if tax_year not in TAX_YEARS:
        return {"error": f"Unknown tax year: {tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"}

    if annual_salary < 0:
        return {"error": "Annual salary must be non-negative."}

    employer = TAX_YEARS[tax_year].employer_ni
    liable_earnings = max(0.0, annual_salary - employer.threshold)

    return {
        "annual_salary": annual_salary,
        "employer_ni": liable_earnings * employer.rate,
        "employer_rate": employer.rate,
        "liable_earnings": liable_earnings,
        "secondary_threshold": employer.threshold,
        "tax_year": tax_year,
    }
