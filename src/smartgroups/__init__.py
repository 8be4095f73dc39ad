"""
SmartGroups: deterministic grouping of people into groups and teams.

This package partitions a set of entries according to declared criteria:
- Exact-match split by one or two attributes
- Similarity clustering (alike entries together)
- Diversity clustering (alike entries spread across groups)
- Balanced team formation on weighted numeric fields

Example usage:
    >>> from smartgroups import SimilarityCriteria, generate_groups, score_groups
    >>>
    >>> entries = [
    ...     {'id': 'u1', 'data': {'score': 10}},
    ...     {'id': 'u2', 'data': {'score': 90}},
    ...     {'id': 'u3', 'data': {'score': 10}},
    ...     {'id': 'u4', 'data': {'score': 90}},
    ... ]
    >>> criteria = SimilarityCriteria(fields=[('score', 1.0)], group_count=2)
    >>> groups = generate_groups(entries, criteria)
    >>> [g.member_ids for g in groups]
    [('u1', 'u3'), ('u2', 'u4')]
    >>> score_groups(groups, entries, criteria).quality_percent
    100
"""

__version__ = '0.1.0'

# Import main algorithms
from .algorithms.split import split_by_attributes, split_by_attribute
from .algorithms.clustering import DistanceClustering, cluster_by_distance
from .algorithms.balanced import BalancedTeams, multi_balanced_teams
from .algorithms.builder import generate_groups, score_groups

# Distance model
from .distances import (
    field_distance,
    gower_distance,
    build_distance_matrix,
    compute_numeric_ranges,
    jaccard
)

# Metrics and caller-side helpers
from .utils import (
    compute_balance_metrics,
    compute_cluster_metrics,
    infer_field_meta,
    build_field_meta,
    generate_pairs,
    count_cooccurrences,
    build_penalty_matrix,
    validate_criteria,
    check_member_limit,
    prepare_entries
)

# Convenience imports
from .base import (
    FieldType,
    FieldMeta,
    WeightedField,
    Entry,
    FieldValue,
    ValueKind,
    SplitCriteria,
    SimilarityCriteria,
    DiversityCriteria,
    BalancedCriteria,
    FieldRanges,
    PenaltyMatrix,
    GroupResult,
    BalanceMetrics,
    ClusterMetrics
)
from .config import GroupingConfig, DEFAULT_CONFIG

__all__ = [
    # Algorithms
    'split_by_attributes',
    'split_by_attribute',
    'DistanceClustering',
    'cluster_by_distance',
    'BalancedTeams',
    'multi_balanced_teams',

    # Dispatch
    'generate_groups',
    'score_groups',

    # Distance model
    'field_distance',
    'gower_distance',
    'build_distance_matrix',
    'compute_numeric_ranges',
    'jaccard',

    # Metrics and helpers
    'compute_balance_metrics',
    'compute_cluster_metrics',
    'infer_field_meta',
    'build_field_meta',
    'generate_pairs',
    'count_cooccurrences',
    'build_penalty_matrix',
    'validate_criteria',
    'check_member_limit',
    'prepare_entries',

    # Core data structures
    'FieldType',
    'FieldMeta',
    'WeightedField',
    'Entry',
    'FieldValue',
    'ValueKind',
    'SplitCriteria',
    'SimilarityCriteria',
    'DiversityCriteria',
    'BalancedCriteria',
    'FieldRanges',
    'PenaltyMatrix',
    'GroupResult',
    'BalanceMetrics',
    'ClusterMetrics',

    # Configuration
    'GroupingConfig',
    'DEFAULT_CONFIG',

    # Version
    '__version__'
]
