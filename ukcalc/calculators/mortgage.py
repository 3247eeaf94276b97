"""Mortgage and annuity repayment maths."""

import logging
from collections.abc import Iterator
from typing import Any

from ukcalc.calculators.models import InvalidInputError
from ukcalc.calculators.stamp_duty import calculate_stamp_duty
from ukcalc.calculators.tax_data import DEFAULT_TAX_YEAR

logger = logging.getLogger(__name__)

REPAYMENT_TYPES = ("repayment", "interest_only")


def monthly_payment(
    principal: float,
    annual_rate: float,
    term_years: float,
    repayment_type: str = "repayment",
) -> float:
    """Monthly payment on a loan.

    Repayment loans use the annuity formula P*r*(1+r)^n / ((1+r)^n - 1),
    falling back to P/n at a 0% rate. Interest-only loans pay P*r and leave
    the principal due at the end of the term.

    Args:
        principal: Amount borrowed.
        annual_rate: Annual interest rate as a percentage, e.g. 4.5.
        term_years: Term in years.
        repayment_type: "repayment" or "interest_only".
    """
    if principal < 0 or annual_rate < 0 or term_years < 0:
        raise InvalidInputError("Principal, rate and term must be non-negative.")
    if repayment_type not in REPAYMENT_TYPES:
        raise InvalidInputError(
            f"Invalid repayment type: {repayment_type}. Must be one of: {', '.join(REPAYMENT_TYPES)}"
        )

    r = annual_rate / 100 / 12
    n = round(term_years * 12)

    if repayment_type == "interest_only":
        return principal * r
    if n == 0:
        return 0.0
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return principal * (r * growth) / (growth - 1)


def amortization_schedule(
    principal: float,
    annual_rate: float,
    term_years: int,
) -> Iterator[dict[str, Any]]:
    """Yield one row per year of a repayment loan: interest, principal, balance."""
    payment = monthly_payment(principal, annual_rate, term_years)
    r = annual_rate / 100 / 12
    balance = principal

    for year in range(1, term_years + 1):
        interest_paid = principal_paid = 0.0
        for _ in range(12):
            interest = balance * r
            repaid = min(payment - interest, balance)
            balance -= repaid
            interest_paid += interest
            principal_paid += repaid
        yield {
            "year": year,
            "interest_paid": interest_paid,
            "principal_paid": principal_paid,
            "closing_balance": max(0.0, balance),
        }


def calculate_mortgage(
    property_value: float,
    deposit: float,
    annual_rate: float,
    term_years: int,
    repayment_type: str = "repayment",
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Summarise a mortgage: payment, total cost, loan-to-value and stamp duty.

    Args:
        property_value: Purchase price.
        deposit: Cash deposit (must not exceed the price).
        annual_rate: Annual interest rate as a percentage.
        term_years: Term in years (must be > 0).
        repayment_type: "repayment" or "interest_only".
        tax_year: Tax year for the stamp duty slabs.

    Returns:
        Dict with loan_amount, monthly_payment, total_interest, total_payable,
        loan_to_value, balloon_payment and stamp_duty.
    """
    if property_value <= 0 or term_years <= 0:
        return {"error": "Property value and term must be positive."}
    if deposit < 0 or deposit > property_value:
        return {"error": "Deposit must be between 0 and the property value."}
    if annual_rate < 0:
        return {"error": "Interest rate must be non-negative."}
    if repayment_type not in REPAYMENT_TYPES:
        return {"error": f"Invalid repayment type: {repayment_type}. Must be one of: {', '.join(REPAYMENT_TYPES)}"}

    stamp_duty = calculate_stamp_duty(property_value, tax_year=tax_year)
    if "error" in stamp_duty:
        return stamp_duty

    loan_amount = property_value - deposit
    payment = monthly_payment(loan_amount, annual_rate, term_years, repayment_type)
    num_payments = term_years * 12

    if repayment_type == "repayment":
        total_payable = payment * num_payments
        total_interest = total_payable - loan_amount
        balloon_payment = 0.0
    else:
        total_interest = payment * num_payments
        total_payable = total_interest + loan_amount
        balloon_payment = loan_amount

    logger.debug("Mortgage %.2f over %d years at %.2f%%: %.2f/month",
                 loan_amount, term_years, annual_rate, payment)

    return {
        "property_value": property_value,
        "deposit": deposit,
        "loan_amount": loan_amount,
        "repayment_type": repayment_type,
        "monthly_payment": payment,
        "total_interest": total_interest,
        "total_payable": total_payable,
        "balloon_payment": balloon_payment,
        "loan_to_value": loan_amount / property_value * 100,
        "deposit_percentage": deposit / property_value * 100,
        "stamp_duty": stamp_duty["total_tax"],
        "tax_year": tax_year,
    }
