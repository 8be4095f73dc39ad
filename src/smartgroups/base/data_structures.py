"""
Core data structures for the grouping engine.

This module holds the inputs (entries, field metadata, criteria, variety
penalties), the derived per-invocation ranges, and the outputs (group
results and quality metrics) shared by every algorithm.
"""

from typing import Optional, List, Tuple, Dict, Any, Mapping, Iterable, Sequence, ClassVar, Union
from dataclasses import dataclass, field
from enum import Enum
import torch
from torch import Tensor

from .values import FieldValue, UNKNOWN


class FieldType(Enum):
    """Declared type of an entry field; selects the distance rule."""
    SELECT = 'select'
    MULTISELECT = 'multiselect'
    CHECKBOX = 'checkbox'
    NUMBER = 'number'
    TEXT = 'text'
    RANKED_CATEGORY = 'ranked-category'
    RANKED_STAT = 'ranked-stat'

    @classmethod
    def _missing_(cls, value):
        aliases = {
            'ranking_level': cls.RANKED_CATEGORY,
            'ranking_stat': cls.RANKED_STAT,
            'ranked_category': cls.RANKED_CATEGORY,
            'ranked_stat': cls.RANKED_STAT,
        }
        if isinstance(value, str) and value.lower() in aliases:
            return aliases[value.lower()]
        raise ValueError(f"Unknown field type: {value!r}")

    @property
    def is_numeric(self) -> bool:
        return self in (FieldType.NUMBER, FieldType.RANKED_STAT)


@dataclass(frozen=True)
class WeightedField:
    """A field selected for grouping together with its importance in [0, 1]."""
    field_id: str
    weight: float = 1.0


def as_weighted_field(item: Any) -> WeightedField:
    if isinstance(item, WeightedField):
        return item
    if isinstance(item, FieldMeta):
        return WeightedField(item.field_id, item.weight)
    if isinstance(item, Mapping):
        field_id = item.get('field_id', item.get('fieldId', item.get('sourceId')))
        return WeightedField(str(field_id), float(item.get('weight', 1.0)))
    if isinstance(item, (tuple, list)):
        return WeightedField(str(item[0]), float(item[1]))
    return WeightedField(str(item), 1.0)


@dataclass(frozen=True)
class FieldMeta:
    """Typed field definition used by the distance model.

    Attributes:
        field_id: Key into Entry.data
        type: FieldType driving the per-field distance
        weight: Importance in [0, 1]; zero-weight fields are ignored
        options: Declared choices for select-like fields (informational)
        ordinal_map: Category label -> ordinal position, for ranked categories
    """
    field_id: str
    type: FieldType
    weight: float = 1.0
    options: Optional[Tuple[str, ...]] = None
    ordinal_map: Optional[Mapping[str, float]] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.type, FieldType):
            object.__setattr__(self, 'type', FieldType(self.type))
        if self.options is not None and not isinstance(self.options, tuple):
            object.__setattr__(self, 'options', tuple(self.options))


@dataclass(frozen=True)
class Entry:
    """One person's attribute snapshot. Never mutated by the engine."""
    id: str
    data: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def value(self, field_id: str) -> FieldValue:
        """Tagged value of a field; absent keys read as Unknown."""
        if field_id not in self.data:
            return UNKNOWN
        return FieldValue.from_raw(self.data[field_id])


EntryLike = Union[Entry, Mapping[str, Any]]


def coerce_entries(entries: Iterable[EntryLike]) -> List[Entry]:
    """Accept Entry objects or plain dicts with 'id'/'userId' and 'data'."""
    result = []
    for item in entries:
        if isinstance(item, Entry):
            result.append(item)
        elif isinstance(item, Mapping):
            entry_id = item.get('id', item.get('userId'))
            if entry_id is None:
                raise ValueError("Entry mapping needs an 'id' key")
            result.append(Entry(str(entry_id), dict(item.get('data', {}))))
        else:
            raise TypeError(f"Cannot convert {type(item)} to Entry")
    return result


# ---------------------------------------------------------------------------
# Criteria
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SplitCriteria:
    """Exact-match split by one or two attributes."""
    field_ids: Tuple[str, ...]
    mode: ClassVar[str] = 'split'

    def __post_init__(self):
        ids = (self.field_ids,) if isinstance(self.field_ids, str) else tuple(self.field_ids)
        object.__setattr__(self, 'field_ids', ids)


@dataclass(frozen=True)
class ClusterCriteria:
    """Distance clustering over weighted fields.

    Use SimilarityCriteria or DiversityCriteria; the subclass fixes the
    objective.
    """
    fields: Tuple[WeightedField, ...]
    group_count: int
    variety_weight: float = 0.0
    mode: ClassVar[str] = 'similarity'

    def __post_init__(self):
        object.__setattr__(self, 'fields', tuple(as_weighted_field(f) for f in self.fields))

    @property
    def objective(self) -> str:
        return self.mode


class SimilarityCriteria(ClusterCriteria):
    mode: ClassVar[str] = 'similarity'


class DiversityCriteria(ClusterCriteria):
    mode: ClassVar[str] = 'diversity'


@dataclass(frozen=True)
class BalancedCriteria:
    """Team formation balancing numeric fields, optionally stratified."""
    balance_fields: Tuple[WeightedField, ...]
    team_count: int
    partition_fields: Tuple[str, ...] = ()
    variety_weight: float = 0.0
    mode: ClassVar[str] = 'balanced'

    def __post_init__(self):
        object.__setattr__(self, 'balance_fields',
                           tuple(as_weighted_field(f) for f in self.balance_fields))
        object.__setattr__(self, 'partition_fields', tuple(self.partition_fields or ()))


Criteria = Union[SplitCriteria, ClusterCriteria, BalancedCriteria]


# ---------------------------------------------------------------------------
# Derived ranges
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NumericRange:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class OrdinalScale:
    """Ordinal positions for a ranked category field."""
    order: Mapping[str, float] = field(compare=False)
    min: float = 0.0
    max: float = 0.0

    @classmethod
    def from_map(cls, order: Mapping[str, float]) -> 'OrdinalScale':
        values = [float(v) for v in order.values()]
        if not values:
            return cls(dict(order), 0.0, 0.0)
        return cls(dict(order), min(values), max(values))

    @property
    def span(self) -> float:
        return self.max - self.min

    def position(self, label: Optional[str]) -> Optional[float]:
        if label is None or label not in self.order:
            return None
        return float(self.order[label])


@dataclass(frozen=True)
class FieldRanges:
    """Read-only ranges derived once per invocation from the full entry set."""
    numeric: Mapping[str, NumericRange] = field(default_factory=dict)
    ordinal: Mapping[str, OrdinalScale] = field(default_factory=dict)

    def numeric_for(self, field_id: str) -> Optional[NumericRange]:
        return self.numeric.get(field_id)

    def ordinal_for(self, field_id: str) -> Optional[OrdinalScale]:
        return self.ordinal.get(field_id)


# ---------------------------------------------------------------------------
# Variety penalties
# ---------------------------------------------------------------------------

class PenaltyMatrix:
    """Symmetric pair -> penalty map built from co-grouping history.

    Unknown pairs have penalty 0. Penalties are non-negative; a pair grouped
    together in every lookback run has penalty 1.
    """

    def __init__(self, penalties: Optional[Mapping[Any, float]] = None):
        self._penalties: Dict[Tuple[str, str], float] = {}
        for key, value in (penalties or {}).items():
            a, b = self._split_key(key)
            self.set(a, b, value)

    @staticmethod
    def pair_key(a: str, b: str) -> str:
        """Canonical 'low:high' string key for a pair of ids."""
        a, b = str(a), str(b)
        return f"{a}:{b}" if a < b else f"{b}:{a}"

    @staticmethod
    def _ordered(a: str, b: str) -> Tuple[str, str]:
        a, b = str(a), str(b)
        return (a, b) if a < b else (b, a)

    @classmethod
    def _split_key(cls, key: Any) -> Tuple[str, str]:
        if isinstance(key, str):
            a, sep, b = key.partition(':')
            if not sep:
                raise ValueError(f"Pair key must look like 'a:b', got {key!r}")
            return a, b
        a, b = key
        return str(a), str(b)

    @classmethod
    def from_cooccurrences(cls, counts: Mapping[Any, int],
                           max_lookback: int = 10) -> 'PenaltyMatrix':
        """penalty = min(count / max_lookback, 1) per pair."""
        matrix = cls()
        for key, count in counts.items():
            a, b = cls._split_key(key)
            matrix.set(a, b, min(count / max_lookback, 1.0))
        return matrix

    def set(self, a: str, b: str, penalty: float) -> None:
        if str(a) == str(b):
            return
        self._penalties[self._ordered(a, b)] = max(0.0, float(penalty))

    def get(self, a: str, b: str) -> float:
        return self._penalties.get(self._ordered(a, b), 0.0)

    def items(self):
        return self._penalties.items()

    def __len__(self) -> int:
        return len(self._penalties)

    @property
    def is_empty(self) -> bool:
        return len(self._penalties) == 0

    def to_tensor(self, ids: Sequence[str], dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None) -> Tensor:
        """Dense (n, n) penalty matrix aligned with ids."""
        n = len(ids)
        matrix = torch.zeros(n, n, dtype=dtype, device=device)
        index: Dict[str, List[int]] = {}
        for i, entry_id in enumerate(ids):
            index.setdefault(str(entry_id), []).append(i)
        for (a, b), penalty in self._penalties.items():
            if penalty == 0 or a not in index or b not in index:
                continue
            for i in index[a]:
                for j in index[b]:
                    matrix[i, j] = penalty
                    matrix[j, i] = penalty
        return matrix

    def __repr__(self) -> str:
        return f"PenaltyMatrix(n_pairs={len(self)})"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GroupResult:
    """A named group and its ordered member ids."""
    group_name: str
    member_ids: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, 'member_ids', tuple(self.member_ids))

    def __len__(self) -> int:
        return len(self.member_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {'groupName': self.group_name, 'memberIds': list(self.member_ids)}


@dataclass(frozen=True)
class GroupBalance:
    group_name: str
    field_averages: Dict[str, float]


@dataclass(frozen=True)
class BalanceMetrics:
    """Balance quality of a team split."""
    per_group: Tuple[GroupBalance, ...]
    balance_percent: int
    per_field_gap: Dict[str, float]
    mode: ClassVar[str] = 'balanced'


@dataclass(frozen=True)
class GroupCohesion:
    group_name: str
    avg_intra_distance: float


@dataclass(frozen=True)
class ClusterMetrics:
    """Similarity / diversity quality of a clustering."""
    mode: str
    per_group: Tuple[GroupCohesion, ...]
    quality_percent: int


Metrics = Union[BalanceMetrics, ClusterMetrics]
