"""Dividend tax calculator."""

from typing import Any

from ukcalc.calculators.bands import evaluate_bands, taper_personal_allowance
from ukcalc.calculators.tax_data import DEFAULT_TAX_YEAR, TAX_YEARS


def calculate_dividend_tax(
    dividends: float,
    other_income: float = 0.0,
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Calculate tax on dividends stacked on top of other income.

    The personal allowance is tapered on total income (other income plus
    dividends), independently of any salary calculation. The dividend
    allowance comes off the dividend pot; what remains is charged at the
    dividend rates in the bands left after other income (and whatever
    allowance it does not use).

    Args:
        dividends: Gross dividends received in the year (must be >= 0).
        other_income: Salary and other non-dividend income (must be >= 0).
        tax_year: Tax year key, e.g. "2025-26".

    Returns:
        Dict with dividend_tax, taxable_dividends, personal_allowance, breakdown.
    """
    if tax_year not in TAX_YEARS:
        return {"error": f"Unknown tax year: {tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"}

    if dividends < 0 or other_income < 0:
        return {"error": "Dividends and other income must be non-negative."}

    data = TAX_YEARS[tax_year]
    personal_allowance = taper_personal_allowance(
        other_income + dividends, data.personal_allowance, data.taper_threshold
    )
    taxable_dividends = max(0.0, dividends - data.dividend.allowance)

    # Dividends sit on top of other income; any allowance it leaves unused shelters them first.
    result = evaluate_bands(
        other_income + taxable_dividends,
        data.dividend.brackets,
        allowance_offset=max(other_income, personal_allowance),
    )

    return {
        "dividends": dividends,
        "other_income": other_income,
        "personal_allowance": personal_allowance,
        "dividend_allowance": data.dividend.allowance,
        "taxable_dividends": taxable_dividends,
        "dividend_tax": result.total,
        "net_dividends": dividends - result.total,
        "breakdown": [entry.model_dump() for entry in result.breakdown],
        "tax_year": tax_year,
    }
