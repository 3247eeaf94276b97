"""Income tax calculator with a band-by-band breakdown for England or Scotland."""

from typing import Any

from ukcalc.calculators.bands import evaluate_bands, taper_personal_allowance
from ukcalc.calculators.tax_data import DEFAULT_TAX_YEAR, TAX_YEARS


def calculate_income_tax(
    annual_income: float,
    region: str = "england",
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Calculate UK income tax with per-band breakdown.

    The personal allowance is tapered by £1 for every £2 of income above
    £100,000.

    Args:
        annual_income: Gross annual income (must be >= 0).
        region: "england" (rest of UK) or "scotland".
        tax_year: Tax year key, e.g. "2025-26".

    Returns:
        Dict with total_tax, personal_allowance, effective_rate, breakdown, tax_year.
    """
    if tax_year not in TAX_YEARS:
        return {"error": f"Unknown tax year: {tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"}

    if annual_income < 0:
        return {"error": "Annual income must be non-negative."}

    data = TAX_YEARS[tax_year]
    if region not in data.income_tax:
        valid = ", ".join(sorted(data.income_tax))
        return {"error": f"Invalid region: {region}. Must be one of: {valid}"}

    personal_allowance = taper_personal_allowance(
        annual_income, data.personal_allowance, data.taper_threshold
    )
    taxable_income = max(0.0, annual_income - personal_allowance)
    result = evaluate_bands(
        taxable_income + personal_allowance,
        data.income_tax[region],
        allowance_offset=personal_allowance,
    )

    effective_rate = (result.total / annual_income * 100) if annual_income > 0 else 0.0

    return {
        "annual_income": annual_income,
        "region": region,
        "personal_allowance": personal_allowance,
        "taxable_income": taxable_income,
        "total_tax": result.total,
        "effective_rate": round(effective_rate, 2),
        "breakdown": [entry.model_dump() for entry in result.breakdown],
        "tax_year": tax_year,
    }
