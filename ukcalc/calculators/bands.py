"""Band evaluation and personal allowance tapering.

One evaluator serves every progressive schedule in the engine: income tax
(England and Scotland), employee National Insurance, dividend tax and stamp
duty differ only by bracket table and allowance offset.
"""

import math
from collections.abc import Sequence

from ukcalc.calculators.models import BandResult, BracketBreakdownEntry, InvalidInputError
from ukcalc.calculators.tax_data import TaxBracket

TAPER_THRESHOLD = 100_000.0


def evaluate_bands(
    amount: float,
    brackets: Sequence[TaxBracket],
    allowance_offset: float = 0.0,
) -> BandResult:
    """Charge an amount against a progressive bracket table.

    Zero-rate brackets are never charged; the allowance is carried by
    ``allowance_offset`` instead. Each band is charged from the higher of its
    own lower bound and the offset, so an allowance below the zero-rate
    ceiling (tapered, or a low tax code) does not widen the first band. NI
    and stamp duty pass no offset and rely on the table's own free band.

    Args:
        amount: Amount to charge (must be >= 0).
        brackets: Contiguous, ascending table; the last band may be unbounded.
        allowance_offset: Income already covered by the allowance.

    Returns:
        BandResult with the total charge and one row per band actually used.
    """
    if amount < 0:
        raise InvalidInputError(f"Amount must be non-negative, got {amount}.")
    if allowance_offset < 0:
        raise InvalidInputError(f"Allowance must be non-negative, got {allowance_offset}.")

    breakdown: list[BracketBreakdownEntry] = []
    total = 0.0

    for bracket in brackets:
        if bracket.rate == 0:
            continue

        lower = max(bracket.lower, allowance_offset)
        taxable = max(0.0, min(amount, bracket.upper) - lower)
        if taxable <= 0:
            continue

        charge = taxable * bracket.rate
        total += charge
        breakdown.append(
            BracketBreakdownEntry(
                name=bracket.name,
                rate=bracket.rate,
                taxable_amount=taxable,
                amount=charge,
                bracket_min=bracket.lower,
                bracket_max=None if math.isinf(bracket.upper) else bracket.upper,
            )
        )

    return BandResult(total=total, breakdown=breakdown)


def taper_personal_allowance(
    gross_income: float,
    base_allowance: float,
    taper_threshold: float = TAPER_THRESHOLD,
) -> float:
    """Reduce the allowance by £1 for every £2 of income above the threshold."""
    if gross_income <= taper_threshold:
        return base_allowance
    return max(0.0, base_allowance - (gross_income - taper_threshold) / 2)
