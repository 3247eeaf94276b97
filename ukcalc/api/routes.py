"""API routes for the UK tax and deduction engine."""

import logging
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationInfo, field_validator

from ukcalc.calculators.brrrr import analyse_brrrr
from ukcalc.calculators.corporation_tax import calculate_corporation_tax
from ukcalc.calculators.deductions import calculate_deductions
from ukcalc.calculators.dividend_tax import calculate_dividend_tax
from ukcalc.calculators.income_tax import calculate_income_tax
from ukcalc.calculators.ir35 import compare_ir35
from ukcalc.calculators.maternity_pay import calculate_maternity_pay
from ukcalc.calculators.models import (
    DeductionOptions,
    DeductionResult,
    GrossFromNetResult,
)
from ukcalc.calculators.mortgage import amortization_schedule, calculate_mortgage
from ukcalc.calculators.national_insurance import (
    calculate_employer_ni,
    calculate_national_insurance,
)
from ukcalc.calculators.numbers import coerce_amount
from ukcalc.calculators.paye import calculate_paye
from ukcalc.calculators.solver import calculate_gross_from_net
from ukcalc.calculators.stamp_duty import calculate_stamp_duty
from ukcalc.calculators.tax_data import (
    DEFAULT_TAX_YEAR,
    TAX_YEARS,
    describe_tax_year,
    get_tax_year,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class CalculatorRequest(BaseModel):
    """Base request: float fields accept raw form input, tax year must exist."""

    tax_year: str = DEFAULT_TAX_YEAR

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any, info: ValidationInfo) -> Any:
        if cls.model_fields[info.field_name].annotation is float:
            return coerce_amount(value)
        return value

    @field_validator("tax_year")
    @classmethod
    def _known_tax_year(cls, value: str) -> str:
        if value not in TAX_YEARS:
            raise ValueError(f"Unknown tax year: {value}. Available: {', '.join(sorted(TAX_YEARS))}")
        return value


class DeductionsRequest(CalculatorRequest):
    """Request body for /deductions."""

    gross_annual: float
    options: DeductionOptions = DeductionOptions()
    use_advanced: bool = False


class GrossFromNetRequest(CalculatorRequest):
    """Request body for /gross-from-net."""

    target_net: float
    options: DeductionOptions = DeductionOptions()
    use_advanced: bool = False


class TakeHomeRequest(CalculatorRequest):
    """Request body for /take-home."""

    amount: float
    direction: Literal["gross_to_net", "net_to_gross"] = "gross_to_net"
    pay_period: Literal["annual", "monthly", "weekly", "daily"] = "annual"
    options: DeductionOptions = DeductionOptions()
    use_advanced: bool = False


class IncomeTaxRequest(CalculatorRequest):
    """Request body for /income-tax."""

    annual_income: float
    region: Literal["england", "scotland"] = "england"


class NationalInsuranceRequest(CalculatorRequest):
    """Request body for /national-insurance."""

    annual_income: float


class DividendTaxRequest(CalculatorRequest):
    """Request body for /dividend-tax."""

    dividends: float
    other_income: float = 0.0


class CorporationTaxRequest(CalculatorRequest):
    """Request body for /corporation-tax."""

    profit: float


class StampDutyRequest(CalculatorRequest):
    """Request body for /stamp-duty."""

    property_price: float
    buyer_type: Literal["standard", "first_time_buyer", "additional_property"] = "standard"


class MaternityPayRequest(CalculatorRequest):
    """Request body for /maternity-pay."""

    average_weekly_earnings: float


class MortgageRequest(CalculatorRequest):
    """Request body for /mortgage."""

    property_value: float
    deposit: float = 0.0
    annual_rate: float
    term_years: int
    repayment_type: Literal["repayment", "interest_only"] = "repayment"
    include_schedule: bool = False


class IR35Request(CalculatorRequest):
    """Request body for /ir35."""

    day_rate: float
    days_per_week: float = 5.0
    weeks_per_year: float = 48.0
    business_expenses: float = 0.0
    pension_percent: float = 0.0
    region: Literal["england", "scotland"] = "england"


class BRRRRRequest(CalculatorRequest):
    """Request body for /brrrr."""

    purchase_price: float
    closing_costs: float = 0.0
    rehab_costs: float = 0.0
    after_repair_value: float
    selling_costs: float = 0.0
    include_rental: bool = True
    monthly_rent: float = 0.0
    monthly_expenses: float = 0.0
    refinance_ltv: float = 75.0
    refinance_rate: float = 5.0
    refinance_term_years: int = 25
    refinance_closing_costs: float = 0.0


def _respond(result: dict[str, Any]) -> dict[str, Any] | JSONResponse:
    """Pass a calculator result through, turning {"error": ...} into a 422."""
    if "error" in result:
        logger.info("Rejected calculation: %s", result["error"])
        return JSONResponse({"error": result["error"]}, status_code=422)
    return result


@router.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "tax_years": sorted(TAX_YEARS), "default_tax_year": DEFAULT_TAX_YEAR}


@router.get("/tax-years")
async def tax_years() -> dict[str, Any]:
    """List the available tax years."""
    return {
        "default": DEFAULT_TAX_YEAR,
        "tax_years": [{"key": key, "name": data.name} for key, data in sorted(TAX_YEARS.items())],
    }


@router.get("/tax-years/{tax_year}")
async def tax_year_detail(tax_year: str) -> dict[str, Any]:
    """Return every table for one tax year."""
    return describe_tax_year(tax_year)


@router.post("/deductions", response_model=DeductionResult)
async def deductions(body: DeductionsRequest) -> DeductionResult:
    """Gross-to-net deductions for an annual salary."""
    return calculate_deductions(
        body.gross_annual, body.options, get_tax_year(body.tax_year), body.use_advanced
    )


@router.post("/gross-from-net", response_model=GrossFromNetResult)
async def gross_from_net(body: GrossFromNetRequest) -> GrossFromNetResult:
    """Solve for the gross salary that produces a take-home figure."""
    return calculate_gross_from_net(
        body.target_net, body.options, get_tax_year(body.tax_year), body.use_advanced
    )


@router.post("/take-home", response_model=None)
async def take_home(body: TakeHomeRequest) -> dict[str, Any] | JSONResponse:
    """Per-period take-home in either direction."""
    return _respond(
        calculate_paye(
            body.amount,
            direction=body.direction,
            pay_period=body.pay_period,
            options=body.options,
            use_advanced=body.use_advanced,
            tax_year=body.tax_year,
        )
    )


@router.post("/income-tax", response_model=None)
async def income_tax(body: IncomeTaxRequest) -> dict[str, Any] | JSONResponse:
    """Income tax with band breakdown."""
    return _respond(calculate_income_tax(body.annual_income, body.region, body.tax_year))


@router.post("/national-insurance", response_model=None)
async def national_insurance(body: NationalInsuranceRequest) -> dict[str, Any] | JSONResponse:
    """Employee NI with band breakdown, plus the employer's NI on the same salary."""
    employee = calculate_national_insurance(body.annual_income, body.tax_year)
    if "error" in employee:
        return _respond(employee)
    employer = calculate_employer_ni(body.annual_income, body.tax_year)
    return _respond({**employee, "employer_ni": employer["employer_ni"]})


@router.post("/dividend-tax", response_model=None)
async def dividend_tax(body: DividendTaxRequest) -> dict[str, Any] | JSONResponse:
    """Dividend tax stacked on other income."""
    return _respond(calculate_dividend_tax(body.dividends, body.other_income, body.tax_year))


@router.post("/corporation-tax", response_model=None)
async def corporation_tax(body: CorporationTaxRequest) -> dict[str, Any] | JSONResponse:
    """Corporation tax with marginal relief."""
    return _respond(calculate_corporation_tax(body.profit, body.tax_year))


@router.post("/stamp-duty", response_model=None)
async def stamp_duty(body: StampDutyRequest) -> dict[str, Any] | JSONResponse:
    """Stamp Duty Land Tax."""
    return _respond(calculate_stamp_duty(body.property_price, body.buyer_type, body.tax_year))


@router.post("/maternity-pay", response_model=None)
async def maternity_pay(body: MaternityPayRequest) -> dict[str, Any] | JSONResponse:
    """Statutory Maternity Pay."""
    return _respond(calculate_maternity_pay(body.average_weekly_earnings, body.tax_year))


@router.post("/mortgage", response_model=None)
async def mortgage(body: MortgageRequest) -> dict[str, Any] | JSONResponse:
    """Mortgage payment summary, optionally with a yearly amortisation schedule."""
    result = calculate_mortgage(
        body.property_value,
        body.deposit,
        body.annual_rate,
        body.term_years,
        body.repayment_type,
        body.tax_year,
    )
    if "error" not in result and body.include_schedule and body.repayment_type == "repayment":
        result["schedule"] = list(
            amortization_schedule(result["loan_amount"], body.annual_rate, body.term_years)
        )
    return _respond(result)


@router.post("/ir35", response_model=None)
async def ir35(body: IR35Request) -> dict[str, Any] | JSONResponse:
    """Inside vs. outside IR35 take-home comparison."""
    return _respond(
        compare_ir35(
            body.day_rate,
            body.days_per_week,
            body.weeks_per_year,
            body.business_expenses,
            body.pension_percent,
            body.region,
            body.tax_year,
        )
    )


@router.post("/brrrr", response_model=None)
async def brrrr(body: BRRRRRequest) -> dict[str, Any] | JSONResponse:
    """Flip vs. refinance-and-rent analysis."""
    return _respond(analyse_brrrr(**body.model_dump(exclude={"tax_year"})))
