"""
Tagged field values.

Entries carry raw attribute snapshots (strings, numbers, booleans, lists or
nothing at all). Before any distance or key computation the raw value is
wrapped in a FieldValue so that downstream code dispatches on an explicit
ValueKind instead of inspecting Python types.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Optional, Tuple, FrozenSet
import math


class ValueKind(Enum):
    """Closed set of value shapes an entry field can hold."""
    UNKNOWN = 'unknown'
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    STRING = 'string'
    LIST = 'list'


def stringify(raw: Any) -> str:
    """Render a scalar the way group keys and categories display it."""
    if isinstance(raw, bool):
        return 'true' if raw else 'false'
    if isinstance(raw, float) and math.isfinite(raw) and raw.is_integer():
        return str(int(raw))
    return str(raw)


@dataclass(frozen=True)
class FieldValue:
    """A single attribute value tagged with its kind.

    Attributes:
        kind: Shape of the value
        payload: bool, float, str, tuple of str, or None for UNKNOWN
    """
    kind: ValueKind
    payload: Any = None

    @classmethod
    def from_raw(cls, raw: Any) -> 'FieldValue':
        """Wrap a raw attribute value.

        None and NaN become UNKNOWN. List elements are coerced to strings.
        """
        if raw is None:
            return UNKNOWN
        if isinstance(raw, FieldValue):
            return raw
        if isinstance(raw, bool):
            return cls(ValueKind.BOOLEAN, raw)
        if isinstance(raw, (int, float)):
            value = float(raw)
            if math.isnan(value):
                return UNKNOWN
            return cls(ValueKind.NUMBER, value)
        if isinstance(raw, str):
            return cls(ValueKind.STRING, raw)
        if isinstance(raw, (list, tuple, set, frozenset)):
            items = sorted(raw, key=stringify) if isinstance(raw, (set, frozenset)) else raw
            return cls(ValueKind.LIST, tuple(stringify(v) for v in items))
        # numpy scalars and other number-likes
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return cls(ValueKind.STRING, str(raw))
        if math.isnan(value):
            return UNKNOWN
        return cls(ValueKind.NUMBER, value)

    @property
    def is_unknown(self) -> bool:
        return self.kind is ValueKind.UNKNOWN

    @property
    def is_blank(self) -> bool:
        """Unknown, or an empty string."""
        return self.is_unknown or (self.kind is ValueKind.STRING and self.payload == '')

    def as_text(self) -> Optional[str]:
        if self.is_unknown:
            return None
        if self.kind is ValueKind.LIST:
            return ','.join(self.payload)
        return stringify(self.payload)

    def as_number(self) -> Optional[float]:
        """Numeric reading of the value, or None if it has none."""
        if self.kind is ValueKind.NUMBER:
            return self.payload
        if self.kind is ValueKind.STRING:
            try:
                value = float(self.payload.strip())
            except ValueError:
                return None
            return value if math.isfinite(value) else None
        return None

    def as_items(self) -> Tuple[str, ...]:
        """Elements for set-valued comparison. Scalars become one element."""
        if self.is_unknown:
            return ()
        if self.kind is ValueKind.LIST:
            return self.payload
        return (stringify(self.payload),)

    def as_set(self) -> FrozenSet[str]:
        return frozenset(self.as_items())

    def __repr__(self) -> str:
        if self.is_unknown:
            return "FieldValue(Unknown)"
        return f"FieldValue({self.kind.value}={self.payload!r})"


UNKNOWN = FieldValue(ValueKind.UNKNOWN, None)

UNKNOWN_LABEL = 'Unknown'


def category_label(raw: Any) -> str:
    """Label used for grouping keys; blank values collapse to 'Unknown'."""
    value = FieldValue.from_raw(raw)
    if value.is_blank:
        return UNKNOWN_LABEL
    return value.as_text()
