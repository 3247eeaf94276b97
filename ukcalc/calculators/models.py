"""Pydantic models for engine inputs and results."""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from ukcalc.calculators.numbers import coerce_amount


class InvalidInputError(ValueError):
    """Raised when a calculation receives a negative amount or an unknown option."""


class BracketBreakdownEntry(BaseModel):
    """One taxed band of a band evaluation."""

    model_config = {"frozen": True}

    name: str
    rate: float
    taxable_amount: float
    amount: float
    bracket_min: float
    bracket_max: float | None  # None = no upper limit


class BandResult(BaseModel):
    """Total charge plus the non-zero bands that produced it."""

    model_config = {"frozen": True}

    total: float
    breakdown: list[BracketBreakdownEntry]


class DeductionOptions(BaseModel):
    """User-selected salary options. Only honoured in advanced mode."""

    model_config = {"frozen": True}

    region: Literal["england", "scotland"] = "england"
    tax_code: str | None = None
    other_allowances: float = Field(default=0.0, ge=0)
    pension_type: Literal["percent", "fixed"] = "percent"
    pension_value: float = Field(default=0.0, ge=0)  # percent of gross, or £ per month
    student_loan_plan: str = "none"
    seis_investment: float = Field(default=0.0, ge=0)
    eis_investment: float = Field(default=0.0, ge=0)

    @field_validator(
        "other_allowances", "pension_value", "seis_investment", "eis_investment", mode="before"
    )
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)


class DeductionResult(BaseModel):
    """Gross-to-net breakdown for one annual salary."""

    model_config = {"frozen": True}

    gross_annual: float
    personal_allowance: float
    taxable_income: float
    tax: BandResult
    national_insurance: BandResult
    student_loan: float
    pension: float
    seis_relief: float
    eis_relief: float
    total_deductions: float
    net_annual: float


class GrossFromNetResult(BaseModel):
    """Outcome of the net-to-gross search.

    ``converged`` is False when the iteration budget ran out (or the target
    could not be bracketed); ``gross`` is then the best guess found.
    """

    model_config = {"frozen": True}

    gross: float
    converged: bool
    iterations: int
    net_achieved: float
