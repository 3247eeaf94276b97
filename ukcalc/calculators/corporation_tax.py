"""Corporation tax calculator with marginal relief."""

from typing import Any

from ukcalc.calculators.tax_data import DEFAULT_TAX_YEAR, TAX_YEARS


def calculate_corporation_tax(
    profit: float,
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Calculate corporation tax on a year's taxable profit.

    Profits up to the lower threshold pay the small profits rate, profits
    above the upper threshold pay the main rate on everything, and profits in
    between pay the main rate less marginal relief of
    (upper threshold - profit) x 3/200.

    Args:
        profit: Taxable profit for the accounting year (must be >= 0).
        tax_year: Tax year key, e.g. "2025-26".

    Returns:
        Dict with tax_due, marginal_relief, effective_rate, rate_band.
    """
    if tax_year not in TAX_YEARS:
        return {"error": f"Unknown tax year: {tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"}

    if profit < 0:
        return {"error": "Profit must be non-negative."}

    ct = TAX_YEARS[tax_year].corporation_tax
    marginal_relief = 0.0

    if profit <= ct.lower_threshold:
        rate_band = "small_profits"
        tax_due = profit * ct.small_profits_rate
    elif profit > ct.upper_threshold:
        rate_band = "main"
        tax_due = profit * ct.main_rate
    else:
        rate_band = "marginal_relief"
        marginal_relief = (ct.upper_threshold - profit) * ct.marginal_relief_fraction
        tax_due = profit * ct.main_rate - marginal_relief

    tax_due = max(0.0, tax_due)
    effective_rate = (tax_due / profit * 100) if profit > 0 else 0.0

    return {
        "profit": profit,
        "tax_due": tax_due,
        "marginal_relief": marginal_relief,
        "profit_after_tax": profit - tax_due,
        "effective_rate": round(effective_rate, 2),
        "rate_band": rate_band,
        "tax_year": tax_year,
    }
