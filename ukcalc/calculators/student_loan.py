"""Student loan repayment calculator."""

from typing import Any

from ukcalc.calculators.tax_data import DEFAULT_TAX_YEAR, TAX_YEARS


def calculate_student_loan_repayment(
    annual_income: float,
    plan: str = "plan2",
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Calculate annual student loan repayment for one plan.

    Repayment is charged at the plan rate (9%, or 6% for postgraduate loans)
    on income above the plan's annual threshold.

    Args:
        annual_income: Gross annual income (must be >= 0).
        plan: plan1, plan2, plan4, plan5 or postgraduate.
        tax_year: Tax year key, e.g. "2025-26".

    Returns:
        Dict with annual_repayment, monthly_repayment, repayment_rate, threshold.
    """
    if tax_year not in TAX_YEARS:
        return {"error": f"Unknown tax year: {tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"}

    if annual_income < 0:
        return {"error": "Annual income must be non-negative."}

    plans = TAX_YEARS[tax_year].student_loans
    if plan not in plans:
        return {"error": f"Invalid student loan plan: {plan}. Must be one of: {', '.join(sorted(plans))}"}

    sl = plans[plan]
    income_above_threshold = max(0.0, annual_income - sl.threshold)
    repayment = income_above_threshold * sl.rate

    return {
        "annual_income": annual_income,
        "plan": plan,
        "annual_repayment": repayment,
        "monthly_repayment": repayment / 12,
        "repayment_rate": sl.rate,
        "annual_threshold": sl.threshold,
        "income_above_threshold": income_above_threshold,
        "tax_year": tax_year,
    }
