"""Coercion of raw form input into numbers."""

import math
import re
from typing import Any

_STRIP_RE = re.compile(r"[,\s£]")


def coerce_amount(value: Any) -> float:
    """Turn raw user input into a float, defaulting to 0.0.

    Empty, missing, non-numeric and non-finite input all become 0.0. Strings
    may carry a pound sign, thousands separators and whitespace
    ("£1,250.50"). Negative numbers pass through unchanged so the
    calculators can reject them.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0
    try:
        number = float(_STRIP_RE.sub("", str(value)))
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0
