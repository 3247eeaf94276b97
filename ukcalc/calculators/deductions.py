"""Gross-to-net salary deductions: income tax, NI, pension, student loan."""

import logging
import re

from ukcalc.calculators.bands import evaluate_bands, taper_personal_allowance
from ukcalc.calculators.models import DeductionOptions, DeductionResult, InvalidInputError
from ukcalc.calculators.tax_data import TaxYearData

logger = logging.getLogger(__name__)

_TAX_CODE_RE = re.compile(r"^(\d+)L$")

SEIS_RELIEF_RATE = 0.5
EIS_RELIEF_RATE = 0.3


def resolve_personal_allowance(
    gross_annual: float,
    options: DeductionOptions,
    tax_year_data: TaxYearData,
    use_advanced: bool = False,
) -> float:
    """Allowance from the tax code (or the default), plus extras, then tapered."""
    allowance = tax_year_data.personal_allowance
    if use_advanced:
        match = _TAX_CODE_RE.match((options.tax_code or "").strip().upper())
        if match:
            allowance = int(match.group(1)) * 10.0
        allowance += options.other_allowances
    return taper_personal_allowance(gross_annual, allowance, tax_year_data.taper_threshold)


def pension_contribution(gross_annual: float, options: DeductionOptions) -> float:
    """Annual employee pension: a percentage of gross or a fixed monthly sum."""
    if options.pension_value <= 0:
        return 0.0
    if options.pension_type == "percent":
        return gross_annual * options.pension_value / 100
    return options.pension_value * 12


def calculate_deductions(
    gross_annual: float,
    options: DeductionOptions,
    tax_year_data: TaxYearData,
    use_advanced: bool = False,
) -> DeductionResult:
    """Run the full gross-to-net calculation for one annual salary.

    Basic mode uses the default allowance and English bands only. Advanced
    mode honours every field of ``options``: tax code, other allowances,
    region, pension (relieved before tax), SEIS/EIS relief and student loan.

    ``net_annual`` is not floored at zero: a large enough fixed pension can
    make it negative.

    Raises:
        InvalidInputError: Negative gross or an unknown student loan plan.
    """
    if gross_annual < 0:
        raise InvalidInputError(f"Gross income must be non-negative, got {gross_annual}.")

    personal_allowance = resolve_personal_allowance(
        gross_annual, options, tax_year_data, use_advanced
    )
    pension = pension_contribution(gross_annual, options) if use_advanced else 0.0
    taxable_income = max(0.0, gross_annual - personal_allowance - pension)

    region = options.region if use_advanced else "england"
    tax = evaluate_bands(
        taxable_income + personal_allowance,
        tax_year_data.income_tax[region],
        allowance_offset=personal_allowance,
    )

    seis_relief = eis_relief = 0.0
    if use_advanced:
        seis_relief = options.seis_investment * SEIS_RELIEF_RATE
        eis_relief = options.eis_investment * EIS_RELIEF_RATE
        if seis_relief or eis_relief:
            # Relief can only wipe out the liability, never make it negative.
            tax = tax.model_copy(
                update={"total": max(0.0, tax.total - seis_relief - eis_relief)}
            )

    national_insurance = evaluate_bands(gross_annual, tax_year_data.national_insurance)

    student_loan = 0.0
    if use_advanced and options.student_loan_plan != "none":
        plan = tax_year_data.student_loans.get(options.student_loan_plan)
        if plan is None:
            valid = ", ".join(sorted(tax_year_data.student_loans))
            raise InvalidInputError(
                f"Unknown student loan plan: {options.student_loan_plan}. Must be one of: {valid}"
            )
        student_loan = max(0.0, gross_annual - plan.threshold) * plan.rate

    total_deductions = tax.total + national_insurance.total + student_loan + pension
    logger.debug(
        "Deductions on %.2f: tax=%.2f ni=%.2f sl=%.2f pension=%.2f",
        gross_annual, tax.total, national_insurance.total, student_loan, pension,
    )

    return DeductionResult(
        gross_annual=gross_annual,
        personal_allowance=personal_allowance,
        taxable_income=taxable_income,
        tax=tax,
        national_insurance=national_insurance,
        student_loan=student_loan,
        pension=pension,
        seis_relief=seis_relief,
        eis_relief=eis_relief,
        total_deductions=total_deductions,
        net_annual=gross_annual - total_deductions,
    )
