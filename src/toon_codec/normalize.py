"""Value model predicates and normalization of host values.

Everything the encoder walks has first been passed through
:func:`normalize_value`, so the predicates below only ever see
``None``, ``bool``, ``int``, ``float``, ``str``, ``list`` and ``dict``.
"""

import dataclasses
import math
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Protocol, runtime_checkable

from .types import JsonArray, JsonValue


@runtime_checkable
class Serializable(Protocol):
    """Capability implemented by host types that know their TOON value."""

    def to_value(self) -> Any:
        ...


def normalize_value(value: Any) -> JsonValue:
    """Convert a Python value into the TOON value model.

    Args:
        value: Any Python value

    Returns:
        Equivalent value built only from dict, list and scalars
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value == 0.0 and math.copysign(1.0, value) == -1.0:
            return 0
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Serializable):
        return normalize_value(value.to_value())
    # Pydantic v2 models
    if hasattr(value, "model_dump") and callable(value.model_dump):
        return normalize_value(value.model_dump())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return normalize_value(dataclasses.asdict(value))
    if isinstance(value, Mapping):
        return {str(k): normalize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_value(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return [normalize_value(item) for item in sorted(value, key=repr)]
    return str(value)


def is_scalar(value: Any) -> bool:
    """Check if value is a scalar (null, bool, int, float or string)."""
    return value is None or isinstance(value, (str, int, float, bool))


# Alias kept for the encoder's JSON-flavoured vocabulary
is_json_primitive = is_scalar


def is_json_array(value: Any) -> bool:
    """Check if value is an array."""
    return isinstance(value, list)


def is_json_object(value: Any) -> bool:
    """Check if value is an object."""
    return isinstance(value, dict)


def is_array_of_primitives(value: JsonArray) -> bool:
    """Check if array contains only scalar values."""
    return all(is_scalar(item) for item in value)


def rows_share_header(rows: JsonArray) -> bool:
    """Check if ``rows`` can be written as a table.

    True when every element is an object, all objects carry the same key
    set as the first one and every field holds a scalar. Key order may
    differ between rows; the table header follows the first row.
    """
    if not rows:
        return False
    if not all(is_json_object(row) for row in rows):
        return False
    first_keys = set(rows[0].keys())
    for row in rows:
        if set(row.keys()) != first_keys:
            return False
        if not all(is_scalar(v) for v in row.values()):
            return False
    return True


def table_header(rows: JsonArray) -> List[str]:
    """Return the ordered field list of a table (the first row's key order)."""
    return list(rows[0].keys())
