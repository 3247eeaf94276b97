"""Net-to-gross inversion by bisection.

The gross-to-net function is piecewise linear and non-decreasing but has no
convenient closed-form inverse once tapering, pension and student loan
interact, so the gross figure is found numerically.
"""

import logging

from ukcalc.calculators.deductions import calculate_deductions
from ukcalc.calculators.models import DeductionOptions, GrossFromNetResult, InvalidInputError
from ukcalc.calculators.tax_data import TaxYearData

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 50
TOLERANCE = 0.01
_MAX_BOUND_EXPANSIONS = 30


def calculate_gross_from_net(
    target_net: float,
    options: DeductionOptions,
    tax_year_data: TaxYearData,
    use_advanced: bool = False,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE,
) -> GrossFromNetResult:
    """Find the gross annual income whose take-home is ``target_net``.

    Starts from low = target, high = 2.5 x target (at least 1), guess =
    1.5 x target. If the high bound does not reach the target (a large fixed
    pension, or marginal deductions above 60%), it is doubled until it
    does. Each round evaluates the guess and halves the interval.

    Args:
        target_net: Desired annual take-home (must be >= 0).
        options: Salary options passed through to calculate_deductions.
        tax_year_data: Tax year tables.
        use_advanced: Whether advanced options apply.
        max_iterations: Evaluation budget for the bisection.
        tolerance: Accept a guess whose net is within this many pounds.

    Returns:
        GrossFromNetResult; ``converged`` is False if the budget ran out.
    """
    if target_net < 0:
        raise InvalidInputError(f"Target net income must be non-negative, got {target_net}.")

    def net_at(gross: float) -> float:
        return calculate_deductions(gross, options, tax_year_data, use_advanced).net_annual

    low = target_net
    # A zero target still needs a positive bound to double from.
    high = max(target_net * 2.5, 1.0)
    guess = target_net * 1.5

    expansions = 0
    net_high = net_at(high)
    while net_high < target_net and expansions < _MAX_BOUND_EXPANSIONS:
        low = high
        high *= 2
        net_high = net_at(high)
        expansions += 1
    if expansions:
        logger.warning(
            "Expanded high bound %d times to %.2f for target net %.2f",
            expansions, high, target_net,
        )
        if net_high < target_net:
            return GrossFromNetResult(
                gross=high, converged=False, iterations=0, net_achieved=net_high
            )
        guess = (low + high) / 2

    for iteration in range(1, max_iterations + 1):
        net_guess = net_at(guess)
        difference = net_guess - target_net
        if abs(difference) < tolerance:
            logger.debug("Converged on gross %.2f after %d iterations", guess, iteration)
            return GrossFromNetResult(
                gross=guess, converged=True, iterations=iteration, net_achieved=net_guess
            )
        if difference < 0:
            low = guess
        else:
            high = guess
        guess = (low + high) / 2

    net_guess = net_at(guess)
    logger.warning(
        "No convergence for target net %.2f after %d iterations; best guess %.2f (net %.2f)",
        target_net, max_iterations, guess, net_guess,
    )
    return GrossFromNetResult(
        gross=guess, converged=False, iterations=max_iterations, net_achieved=net_guess
    )
