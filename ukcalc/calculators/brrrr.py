"""BRRRR (Buy, Rehab, Rent, Refinance, Repeat) deal analysis.

Compares selling the refurbished property (a flip) with refinancing it and
keeping it as a rental.
"""

from typing import Any

from ukcalc.calculators.mortgage import monthly_payment

ALL_CAPITAL_RETURNED = "All Capital Returned"
SEVENTY_PERCENT_RULE = 0.7


def analyse_brrrr(
    purchase_price: float,
    closing_costs: float,
    rehab_costs: float,
    after_repair_value: float,
    selling_costs: float = 0.0,
    include_rental: bool = True,
    monthly_rent: float = 0.0,
    monthly_expenses: float = 0.0,
    refinance_ltv: float = 75.0,
    refinance_rate: float = 5.0,
    refinance_term_years: int = 25,
    refinance_closing_costs: float = 0.0,
) -> dict[str, Any]:
    """Analyse a deal as a flip and, optionally, as a refinanced rental.

    ``cash_on_cash_roi`` in the rental section is a percentage, or the
    string "All Capital Returned" when the refinance pulls out everything
    that went in (no money left in the deal). Callers must check the type.

    Args:
        purchase_price: Price paid (must be > 0).
        closing_costs: Purchase fees and taxes.
        rehab_costs: Refurbishment spend.
        after_repair_value: Valuation after works (must be > 0).
        selling_costs: Agent and legal fees on a sale.
        include_rental: Whether to run the refinance/rental analysis.
        monthly_rent: Expected rent.
        monthly_expenses: Running costs excluding the mortgage.
        refinance_ltv: Refinance loan-to-value as a percentage of ARV.
        refinance_rate: Refinance annual interest rate as a percentage.
        refinance_term_years: Refinance term in years.
        refinance_closing_costs: Fees on the refinance.

    Returns:
        Dict with flip metrics and a "brrrr" section (None without rental).
    """
    if purchase_price <= 0 or after_repair_value <= 0:
        return {"error": "Purchase price and after repair value must be positive."}

    costs = (closing_costs, rehab_costs, selling_costs, monthly_rent, monthly_expenses,
             refinance_ltv, refinance_rate, refinance_term_years, refinance_closing_costs)
    if any(value < 0 for value in costs):
        return {"error": "Costs, rent, rates and terms must be non-negative."}

    total_project_cost = purchase_price + closing_costs + rehab_costs
    net_sale_proceeds = after_repair_value - selling_costs
    flip_profit = net_sale_proceeds - total_project_cost
    max_price_by_rule = after_repair_value * SEVENTY_PERCENT_RULE - rehab_costs

    result: dict[str, Any] = {
        "total_project_cost": total_project_cost,
        "net_sale_proceeds": net_sale_proceeds,
        "flip_profit": flip_profit,
        "flip_roi": flip_profit / total_project_cost * 100,
        "seventy_percent_rule_max_price": max_price_by_rule,
        "is_deal_good_by_70_rule": purchase_price <= max_price_by_rule,
        "brrrr": None,
    }

    if not include_rental:
        return result

    new_loan_amount = after_repair_value * refinance_ltv / 100
    cash_out = new_loan_amount - total_project_cost - refinance_closing_costs
    money_left_in_deal = max(0.0, total_project_cost - new_loan_amount + refinance_closing_costs)
    new_monthly_mortgage = monthly_payment(new_loan_amount, refinance_rate, refinance_term_years)
    monthly_cash_flow = monthly_rent - monthly_expenses - new_monthly_mortgage
    annual_cash_flow = monthly_cash_flow * 12

    cash_on_cash_roi: float | str
    if money_left_in_deal <= 0:
        cash_on_cash_roi = ALL_CAPITAL_RETURNED
    else:
        cash_on_cash_roi = annual_cash_flow / money_left_in_deal * 100

    result["brrrr"] = {
        "new_loan_amount": new_loan_amount,
        "cash_out": cash_out,
        "money_left_in_deal": money_left_in_deal,
        "new_monthly_mortgage": new_monthly_mortgage,
        "monthly_cash_flow": monthly_cash_flow,
        "annual_cash_flow": annual_cash_flow,
        "cash_on_cash_roi": cash_on_cash_roi,
    }
    return result
