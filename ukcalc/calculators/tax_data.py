"""UK tax-year constants: bracket tables, thresholds and statutory rates.

Loaded once from config/tax_years.yaml into immutable NamedTuples. A year is
selected by key ("2025-26") and never mutated; calculators receive the whole
TaxYearData so one table feeds every consumer.
"""

import logging
import math
from types import MappingProxyType
from typing import Any, NamedTuple

from config import load_yaml_config
from config.settings import settings

logger = logging.getLogger(__name__)


class TaxBracket(NamedTuple):
    """A single progressive band."""

    lower: float  # inclusive
    upper: float  # math.inf = no cap
    rate: float
    name: str


class EmployerNI(NamedTuple):
    """Secondary (employer) Class 1 National Insurance."""

    rate: float
    threshold: float


class DividendRules(NamedTuple):
    """Dividend allowance and dividend-rate bands."""

    allowance: float
    brackets: tuple[TaxBracket, ...]


class CorporationTaxRates(NamedTuple):
    """Small profits rate, main rate and the marginal relief window."""

    small_profits_rate: float
    main_rate: float
    lower_threshold: float
    upper_threshold: float
    marginal_relief_fraction: float


class StudentLoanPlan(NamedTuple):
    """Student loan repayment parameters for one plan."""

    threshold: float
    rate: float


class MaternityPayRates(NamedTuple):
    """Statutory Maternity Pay tiers."""

    higher_rate: float
    higher_rate_weeks: int
    flat_rate: float
    flat_rate_weeks: int


class StampDutyRates(NamedTuple):
    """SDLT slabs for residential purchases in England and Northern Ireland."""

    standard: tuple[TaxBracket, ...]
    first_time_buyer: tuple[TaxBracket, ...]
    first_time_buyer_max_price: float
    additional_property_surcharge: float


class TaxYearData(NamedTuple):
    """All tax parameters for a single UK tax year."""

    name: str
    personal_allowance: float
    taper_threshold: float
    default_tax_code: str
    income_tax: MappingProxyType  # region -> tuple[TaxBracket, ...]
    national_insurance: tuple[TaxBracket, ...]
    employer_ni: EmployerNI
    dividend: DividendRules
    corporation_tax: CorporationTaxRates
    student_loans: MappingProxyType  # plan -> StudentLoanPlan
    maternity_pay: MaternityPayRates
    stamp_duty: StampDutyRates


class UnknownTaxYearError(KeyError):
    """Raised when a tax year key has no entry in TAX_YEARS."""

    def __init__(self, tax_year: str) -> None:
        self.tax_year = tax_year
        super().__init__(tax_year)

    def __str__(self) -> str:
        return f"Unknown tax year: {self.tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"


def _parse_brackets(
    rows: list[dict[str, Any]], where: str, open_top: bool = True
) -> tuple[TaxBracket, ...]:
    """Build a bracket table and check it is contiguous, optionally with an open top band."""
    brackets = tuple(
        TaxBracket(
            lower=float(row["lower"]),
            upper=float(row["upper"]),
            rate=float(row["rate"]),
            name=str(row["name"]),
        )
        for row in rows
    )
    if not brackets:
        raise ValueError(f"{where}: empty bracket table")
    if brackets[0].lower != 0:
        raise ValueError(f"{where}: first bracket must start at 0")
    for previous, current in zip(brackets, brackets[1:]):
        if current.lower != previous.upper:
            raise ValueError(
                f"{where}: '{current.name}' starts at {current.lower}, "
                f"expected {previous.upper}"
            )
    if open_top and not math.isinf(brackets[-1].upper):
        raise ValueError(f"{where}: top bracket must be unbounded")
    return brackets


def _parse_year(key: str, raw: dict[str, Any]) -> TaxYearData:
    sdlt = raw["stamp_duty"]
    return TaxYearData(
        name=raw["name"],
        personal_allowance=float(raw["personal_allowance"]),
        taper_threshold=float(raw["taper_threshold"]),
        default_tax_code=raw["default_tax_code"],
        income_tax=MappingProxyType({
            region: _parse_brackets(rows, f"{key}.income_tax.{region}")
            for region, rows in raw["income_tax"].items()
        }),
        national_insurance=_parse_brackets(raw["national_insurance"], f"{key}.national_insurance"),
        employer_ni=EmployerNI(**raw["employer_ni"]),
        dividend=DividendRules(
            allowance=float(raw["dividend"]["allowance"]),
            brackets=_parse_brackets(raw["dividend"]["brackets"], f"{key}.dividend"),
        ),
        corporation_tax=CorporationTaxRates(**raw["corporation_tax"]),
        student_loans=MappingProxyType({
            plan: StudentLoanPlan(float(p["threshold"]), float(p["rate"]))
            for plan, p in raw["student_loans"].items()
        }),
        maternity_pay=MaternityPayRates(**raw["maternity_pay"]),
        stamp_duty=StampDutyRates(
            standard=_parse_brackets(sdlt["standard"], f"{key}.stamp_duty.standard"),
            first_time_buyer=_parse_brackets(
                sdlt["first_time_buyer"], f"{key}.stamp_duty.first_time_buyer", open_top=False
            ),
            first_time_buyer_max_price=float(sdlt["first_time_buyer_max_price"]),
            additional_property_surcharge=float(sdlt["additional_property_surcharge"]),
        ),
    )


def load_tax_years(filename: str = settings.tax_years_file) -> dict[str, TaxYearData]:
    """Load and validate every tax year in a config/ YAML file."""
    raw_years = load_yaml_config(filename)["tax_years"]
    years = {key: _parse_year(key, raw) for key, raw in raw_years.items()}
    logger.info("Loaded %d tax years from %s: %s", len(years), filename, ", ".join(sorted(years)))
    return years


TAX_YEARS: dict[str, TaxYearData] = load_tax_years()

DEFAULT_TAX_YEAR = settings.default_tax_year


def get_tax_year(tax_year: str = DEFAULT_TAX_YEAR) -> TaxYearData:
    """Return the data for a tax year key, e.g. "2025-26"."""
    try:
        return TAX_YEARS[tax_year]
    except KeyError:
        raise UnknownTaxYearError(tax_year) from None


def _bracket_rows(brackets: tuple[TaxBracket, ...]) -> list[dict[str, Any]]:
    return [
        {
            "name": b.name,
            "lower": b.lower,
            "upper": None if math.isinf(b.upper) else b.upper,
            "rate": b.rate,
        }
        for b in brackets
    ]


def describe_tax_year(tax_year: str) -> dict[str, Any]:
    """Return a JSON-safe view of one tax year's tables (None = no upper limit)."""
    data = get_tax_year(tax_year)
    return {
        "tax_year": tax_year,
        "name": data.name,
        "personal_allowance": data.personal_allowance,
        "taper_threshold": data.taper_threshold,
        "default_tax_code": data.default_tax_code,
        "income_tax": {region: _bracket_rows(b) for region, b in data.income_tax.items()},
        "national_insurance": _bracket_rows(data.national_insurance),
        "employer_ni": data.employer_ni._asdict(),
        "dividend": {
            "allowance": data.dividend.allowance,
            "brackets": _bracket_rows(data.dividend.brackets),
        },
        "corporation_tax": data.corporation_tax._asdict(),
        "student_loans": {plan: p._asdict() for plan, p in data.student_loans.items()},
        "maternity_pay": data.maternity_pay._asdict(),
        "stamp_duty": {
            "standard": _bracket_rows(data.stamp_duty.standard),
            "first_time_buyer": _bracket_rows(data.stamp_duty.first_time_buyer),
            "first_time_buyer_max_price": data.stamp_duty.first_time_buyer_max_price,
            "additional_property_surcharge": data.stamp_duty.additional_property_surcharge,
        },
    }
