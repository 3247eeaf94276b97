"""CLI script for a take-home pay breakdown.

Usage:
    # Annual gross to net, default tax year
    python scripts/take_home.py 60000

    # Monthly net to gross
    python scripts/take_home.py 3000 --net --period monthly

    # Scottish taxpayer, 5% pension, Plan 2 student loan
    python scripts/take_home.py 45000 --region scotland --pension-percent 5 --student-loan plan2

    # Verbose logging (solver iterations)
    python scripts/take_home.py 45000 --net -v
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import settings
from ukcalc.calculators.models import DeductionOptions
from ukcalc.calculators.numbers import coerce_amount
from ukcalc.calculators.paye import PAY_PERIODS, calculate_paye

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="UK take-home pay calculator")
    parser.add_argument("amount", help="Pay for one period, e.g. 60000 or '£3,000'")
    parser.add_argument("--net", action="store_true", help="Treat the amount as take-home and solve for gross")
    parser.add_argument("--period", choices=list(PAY_PERIODS), default="annual", help="Pay period of the amount")
    parser.add_argument("--tax-year", default=settings.default_tax_year, help="Tax year, e.g. 2025-26")
    parser.add_argument("--region", choices=["england", "scotland"], default="england")
    parser.add_argument("--tax-code", help="Tax code such as 1257L")
    parser.add_argument("--pension-percent", type=float, default=0.0, help="Pension as %% of gross")
    parser.add_argument("--student-loan", default="none", help="plan1, plan2, plan4, plan5 or postgraduate")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    log_level = logging.DEBUG if args.verbose else settings.log_level
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    options = DeductionOptions(
        region=args.region,
        tax_code=args.tax_code,
        pension_type="percent",
        pension_value=args.pension_percent,
        student_loan_plan=args.student_loan,
    )
    use_advanced = (
        args.region != "england"
        or args.tax_code is not None
        or args.pension_percent > 0
        or args.student_loan != "none"
    )

    result = calculate_paye(
        coerce_amount(args.amount),
        direction="net_to_gross" if args.net else "gross_to_net",
        pay_period=args.period,
        options=options,
        use_advanced=use_advanced,
        tax_year=args.tax_year,
    )
    if "error" in result:
        logger.error(result["error"])
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
