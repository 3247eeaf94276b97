"""Stamp Duty Land Tax calculator (residential, England and Northern Ireland)."""

from typing import Any

from ukcalc.calculators.bands import evaluate_bands
from ukcalc.calculators.tax_data import DEFAULT_TAX_YEAR, TAX_YEARS

BUYER_TYPES = ("standard", "first_time_buyer", "additional_property")


def calculate_stamp_duty(
    property_price: float,
    buyer_type: str = "standard",
    tax_year: str = DEFAULT_TAX_YEAR,
) -> dict[str, Any]:
    """Calculate SDLT by summing the slabs the price reaches.

    First-time buyers get the relief slabs up to the relief price cap and
    standard rates above it. Additional properties pay a surcharge on the
    whole price on top of standard rates.

    Args:
        property_price: Purchase price (must be >= 0).
        buyer_type: One of standard, first_time_buyer, additional_property.
        tax_year: Tax year key, e.g. "2025-26".

    Returns:
        Dict with total_tax, effective_rate, breakdown, relief_applied.
    """
    if tax_year not in TAX_YEARS:
        return {"error": f"Unknown tax year: {tax_year}. Available: {', '.join(sorted(TAX_YEARS))}"}

    if buyer_type not in BUYER_TYPES:
        return {"error": f"Invalid buyer type: {buyer_type}. Must be one of: {', '.join(BUYER_TYPES)}"}

    if property_price < 0:
        return {"error": "Property price must be non-negative."}

    sdlt = TAX_YEARS[tax_year].stamp_duty
    relief_applied = (
        buyer_type == "first_time_buyer" and property_price <= sdlt.first_time_buyer_max_price
    )
    slabs = sdlt.first_time_buyer if relief_applied else sdlt.standard

    result = evaluate_bands(property_price, slabs)
    breakdown = [entry.model_dump() for entry in result.breakdown]
    total_tax = result.total

    if buyer_type == "additional_property":
        surcharge = property_price * sdlt.additional_property_surcharge
        total_tax += surcharge
        breakdown.append({
            "name": "Additional Property Surcharge",
            "rate": sdlt.additional_property_surcharge,
            "taxable_amount": property_price,
            "amount": surcharge,
            "bracket_min": 0.0,
            "bracket_max": None,
        })

    effective_rate = (total_tax / property_price * 100) if property_price > 0 else 0.0

    return {
        "property_price": property_price,
        "buyer_type": buyer_type,
        "total_tax": total_tax,
        "effective_rate": round(effective_rate, 2),
        "relief_applied": relief_applied,
        "breakdown": breakdown,
        "tax_year": tax_year,
    }
