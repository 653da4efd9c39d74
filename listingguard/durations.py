"""Duration helpers for listing subprojects, using Pint for unit conversion."""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from pint import UnitRegistry
from pint.errors import DimensionalityError, UndefinedUnitError

# Initialize Pint unit registry
ureg = UnitRegistry()

DEFAULT_DURATION_UNIT = "days"


def duration_in_hours(duration: Any) -> Optional[float]:
    """Convert a ``{"value", "unit"}`` duration to hours.

    Args:
        duration: Mapping such as ``{"value": 2, "unit": "days"}``. Any time
            unit the registry understands is accepted.

    Returns:
        Duration in hours, or None when the value or unit is missing or
        cannot be interpreted as a time.

    Examples:
        duration_in_hours({"value": 2, "unit": "days"}) -> 48.0
        duration_in_hours({"value": 90, "unit": "minutes"}) -> 1.5
    """
    if not isinstance(duration, Mapping):
        return None

    value = duration.get("value")
    unit = duration.get("unit")
    if value is None or not unit:
        return None

    try:
        quantity = ureg.Quantity(float(value), str(unit))
        return float(quantity.to(ureg.hour).magnitude)
    except (UndefinedUnitError, DimensionalityError, ValueError, TypeError):
        return None


def normalize_preparation_duration(listing: Any) -> Any:
    """Fill in missing preparation-duration units on every subproject.

    The unit falls back to the subproject's execution-duration unit, then to
    days. Subprojects without a preparation value are left alone. Returns a
    new mapping; the input is not mutated.
    """
    if not isinstance(listing, Mapping):
        return listing

    subprojects = listing.get("subprojects")
    if not isinstance(subprojects, list):
        return listing

    normalized = []
    for subproject in subprojects:
        if not isinstance(subproject, Mapping):
            normalized.append(subproject)
            continue

        preparation = subproject.get("preparationDuration")
        preparation_value = preparation.get("value") if isinstance(preparation, Mapping) else None
        if preparation_value is None:
            normalized.append(subproject)
            continue

        execution = subproject.get("executionDuration")
        preparation_unit = (
            preparation.get("unit")
            or (execution.get("unit") if isinstance(execution, Mapping) else None)
            or DEFAULT_DURATION_UNIT
        )

        updated: Dict[str, Any] = dict(subproject)
        updated["preparationDuration"] = {
            "value": preparation_value,
            "unit": preparation_unit,
        }
        normalized.append(updated)

    result = dict(listing)
    result["subprojects"] = normalized
    return result
