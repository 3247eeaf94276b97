"""Statutory Maternity Pay calculator."""

from typing import Any

from ukcalc.calculators.tax_data import DEFAULT_TAX_YEAR, TAX_YEARS


def calculate_maternity_pay(
    average_weekly_earnings: float,
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Calculate SMP over the 39-week entitlement.

    The first 6 weeks pay 90% of average weekly earnings with no cap; the
    remaining 33 weeks pay the lower of 90% of earnings and the flat rate.

    Args:
        average_weekly_earnings: Average gross weekly earnings (must be >= 0).
        tax_year: Tax year key, e.g. "2025-26".

    Returns:
        Dict with weekly and total figures for both tiers and total_smp.
    """
    if tax_year not in TAX_YEARS:
        return {"error": f"Unknown tax year: {tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"}

    if average_weekly_earnings < 0:
        return {"error": "Average weekly earnings must be non-negative."}

    smp = TAX_YEARS[tax_year].maternity_pay
    higher_weekly = average_weekly_earnings * smp.higher_rate
    flat_weekly = min(higher_weekly, smp.flat_rate)

    higher_total = higher_weekly * smp.higher_rate_weeks
    flat_total = flat_weekly * smp.flat_rate_weeks

    return {
        "average_weekly_earnings": average_weekly_earnings,
        "first_period_weeks": smp.higher_rate_weeks,
        "first_period_weekly": higher_weekly,
        "first_period_total": higher_total,
        "second_period_weeks": smp.flat_rate_weeks,
        "second_period_weekly": flat_weekly,
        "second_period_total": flat_total,
        "flat_rate": smp.flat_rate,
        "total_smp": higher_total + flat_total,
        "tax_year": tax_year,
    }
