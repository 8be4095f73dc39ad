"""Base classes, interfaces and data structures for the grouping engine."""

from .interfaces import (
    FieldDistance,
    InitializationStrategy,
    AssignmentStrategy,
    ConvergenceCriterion,
    GroupingObjective
)

from .values import (
    ValueKind,
    FieldValue,
    UNKNOWN,
    UNKNOWN_LABEL,
    category_label,
    stringify
)

from .data_structures import (
    FieldType,
    FieldMeta,
    WeightedField,
    Entry,
    coerce_entries,
    SplitCriteria,
    ClusterCriteria,
    SimilarityCriteria,
    DiversityCriteria,
    BalancedCriteria,
    NumericRange,
    OrdinalScale,
    FieldRanges,
    PenaltyMatrix,
    GroupResult,
    GroupBalance,
    BalanceMetrics,
    GroupCohesion,
    ClusterMetrics
)

from .clustering_base import BaseGroupingAlgorithm

__all__ = [
    # Interfaces
    'FieldDistance',
    'InitializationStrategy',
    'AssignmentStrategy',
    'ConvergenceCriterion',
    'GroupingObjective',

    # Values
    'ValueKind',
    'FieldValue',
    'UNKNOWN',
    'UNKNOWN_LABEL',
    'category_label',
    'stringify',

    # Inputs
    'FieldType',
    'FieldMeta',
    'WeightedField',
    'Entry',
    'coerce_entries',
    'SplitCriteria',
    'ClusterCriteria',
    'SimilarityCriteria',
    'DiversityCriteria',
    'BalancedCriteria',
    'PenaltyMatrix',

    # Derived ranges
    'NumericRange',
    'OrdinalScale',
    'FieldRanges',

    # Results
    'GroupResult',
    'GroupBalance',
    'BalanceMetrics',
    'GroupCohesion',
    'ClusterMetrics',

    # Base algorithm
    'BaseGroupingAlgorithm'
]
