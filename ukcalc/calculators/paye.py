"""PAYE take-home calculator: gross-to-net or net-to-gross, per pay period."""

from typing import Any

from ukcalc.calculators.deductions import calculate_deductions
from ukcalc.calculators.models import DeductionOptions, InvalidInputError
from ukcalc.calculators.solver import calculate_gross_from_net
from ukcalc.calculators.tax_data import DEFAULT_TAX_YEAR, TAX_YEARS

PAY_PERIODS: dict[str, int] = {
    "annual": 1,
    "monthly": 12,
    "weekly": 52,
    "daily": 260,
}

DIRECTIONS = ("gross_to_net", "net_to_gross")


def calculate_paye(
    amount: float,
    direction: str = "gross_to_net",
    pay_period: str = "annual",
    options: DeductionOptions | None = None,
    use_advanced: bool = False,
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Calculate take-home pay from a salary, or the salary behind a take-home.

    The amount is annualised by the pay period first. Net-to-gross solves
    for the gross salary and then runs the normal deductions on it, so both
    directions return the same shape.

    Args:
        amount: Gross or net pay for one pay period (must be >= 0).
        direction: "gross_to_net" or "net_to_gross".
        pay_period: One of annual, monthly, weekly, daily.
        options: Salary options; defaults to none.
        use_advanced: Whether the advanced options apply.
        tax_year: Tax year key, e.g. "2025-26".

    Returns:
        Dict with the deduction result, per-period rows and solver status.
    """
    if tax_year not in TAX_YEARS:
        return {"error": f"Unknown tax year: {tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"}

    if pay_period not in PAY_PERIODS:
        valid = ", ".join(PAY_PERIODS)
        return {"error": f"Invalid pay period: {pay_period}. Must be one of: {valid}"}

    if direction not in DIRECTIONS:
        return {"error": f"Invalid direction: {direction}. Must be one of: {', '.join(DIRECTIONS)}"}

    if amount < 0:
        return {"error": "Amount must be non-negative."}

    data = TAX_YEARS[tax_year]
    options = options or DeductionOptions()
    annual_amount = amount * PAY_PERIODS[pay_period]

    solver: dict[str, Any] | None = None
    try:
        if direction == "gross_to_net":
            gross = annual_amount
        else:
            solved = calculate_gross_from_net(annual_amount, options, data, use_advanced)
            solver = solved.model_dump()
            gross = solved.gross
        deductions = calculate_deductions(gross, options, data, use_advanced)
    except InvalidInputError as exc:
        return {"error": str(exc)}

    rows = {
        "gross": deductions.gross_annual,
        "income_tax": deductions.tax.total,
        "national_insurance": deductions.national_insurance.total,
        "student_loan": deductions.student_loan,
        "pension": deductions.pension,
        "total_deductions": deductions.total_deductions,
        "take_home": deductions.net_annual,
    }
    per_period = {
        period: {name: value / periods for name, value in rows.items()}
        for period, periods in PAY_PERIODS.items()
    }

    return {
        "amount": amount,
        "direction": direction,
        "pay_period": pay_period,
        "tax_year": tax_year,
        "tax_year_name": data.name,
        "result": deductions.model_dump(),
        "per_period": per_period,
        "solver": solver,
    }
