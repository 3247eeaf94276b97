"""IR35 comparison of a deemed employee (inside) with a limited company director (outside)."""

import logging
from typing import Any

from ukcalc.calculators.corporation_tax import calculate_corporation_tax
from ukcalc.calculators.deductions import calculate_deductions
from ukcalc.calculators.dividend_tax import calculate_dividend_tax
from ukcalc.calculators.models import DeductionOptions
from ukcalc.calculators.national_insurance import calculate_employer_ni
from ukcalc.calculators.tax_data import DEFAULT_TAX_YEAR, TAX_YEARS

logger = logging.getLogger(__name__)


def compare_ir35(
    day_rate: float,
    days_per_week: float = 5,
    weeks_per_year: float = 48,
    business_expenses: float = 0.0,
    pension_percent: float = 0.0,
    region: str = "england",
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Compare annual take-home inside and outside IR35.

    Inside: the fee-payer's employer NI comes off contract revenue and the
    remainder is taxed as salary (pension relieved before tax).

    Outside: the company pays a director's salary equal to the personal
    allowance, makes the pension contribution on the revenue above that,
    pays corporation tax on the profit and distributes the rest as
    dividends.

    Args:
        day_rate: Contract day rate (must be >= 0).
        days_per_week: Days billed per week.
        weeks_per_year: Weeks billed per year.
        business_expenses: Allowable company expenses (outside only).
        pension_percent: Pension contribution as a percentage.
        region: "england" or "scotland" for the salary bands.
        tax_year: Tax year key, e.g. "2025-26".

    Returns:
        Dict with "inside" and "outside" breakdowns and the difference.
    """
    if tax_year not in TAX_YEARS:
        return {"error": f"Unknown tax year: {tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"}

    inputs = (day_rate, days_per_week, weeks_per_year, business_expenses, pension_percent)
    if any(value < 0 for value in inputs):
        return {"error": "Contract inputs must be non-negative."}

    data = TAX_YEARS[tax_year]
    if region not in data.income_tax:
        return {"error": f"Invalid region: {region}. Must be one of: {', '.join(sorted(data.income_tax))}"}

    revenue = day_rate * days_per_week * weeks_per_year

    # --- Inside IR35 ---
    employer_ni = calculate_employer_ni(revenue, tax_year)["employer_ni"]
    gross_inside = revenue - employer_ni
    options = DeductionOptions(
        region=region, pension_type="percent", pension_value=pension_percent
    )
    salary = calculate_deductions(gross_inside, options, data, use_advanced=True)

    # --- Outside IR35 ---
    director_salary = min(data.personal_allowance, revenue)
    pension_outside = (revenue - director_salary) * pension_percent / 100
    profit = max(0.0, revenue - business_expenses - director_salary - pension_outside)
    corporation_tax = calculate_corporation_tax(profit, tax_year)["tax_due"]
    dividends = profit - corporation_tax
    dividend = calculate_dividend_tax(dividends, director_salary, tax_year)
    take_home_outside = director_salary + dividends - dividend["dividend_tax"]

    logger.debug("IR35 on revenue %.2f: inside %.2f, outside %.2f",
                 revenue, salary.net_annual, take_home_outside)

    return {
        "revenue": revenue,
        "inside": {
            "employer_ni": employer_ni,
            "gross_salary": gross_inside,
            "income_tax": salary.tax.total,
            "employee_ni": salary.national_insurance.total,
            "pension": salary.pension,
            "take_home": salary.net_annual,
        },
        "outside": {
            "director_salary": director_salary,
            "business_expenses": business_expenses,
            "pension": pension_outside,
            "company_profit": profit,
            "corporation_tax": corporation_tax,
            "dividends": dividends,
            "dividend_tax": dividend["dividend_tax"],
            "take_home": take_home_outside,
        },
        "difference": take_home_outside - salary.net_annual,
        "tax_year": tax_year,
    }
