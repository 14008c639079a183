"""JSON parse/stringify that never rounds numbers.

Python's json module decodes integer literals to ``int`` and encodes ``int``
exactly, so money amounts and versions above 2**53 survive a round trip.
Decimals are written as plain JSON numbers when a float carries them
exactly; a Decimal that a float would round is rejected.
"""

import json
from decimal import Decimal
from typing import Any


def _default(value: Any) -> Any:
    if isinstance(value, Decimal):
        # int-valued decimals stay integers on the wire
        if value == value.to_integral_value():
            return int(value)
        as_float = float(value)
        if Decimal(repr(as_float)) != value:
            raise ValueError(
                f"Decimal {value} cannot be written as a JSON number without rounding; "
                "send it as a string"
            )
        return as_float
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def parse(text: str | bytes) -> Any:
    """Parse JSON text.

    Raises:
        ValueError: On malformed input
    """
    return json.loads(text)


def stringify(value: Any) -> str:
    """Serialize ``value`` to compact JSON.

    Raises:
        ValueError: A Decimal would lose digits as a JSON number
        TypeError: A value has no JSON form
    """
    return json.dumps(value, separators=(",", ":"), default=_default, ensure_ascii=False)
