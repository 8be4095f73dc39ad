"""Utility functions for the grouping engine."""

from .convergence import NoImprovement

from .inference import (
    map_field_type,
    infer_field_type,
    infer_field_meta,
    build_field_meta
)

from .history import (
    generate_pairs,
    count_cooccurrences,
    build_penalty_matrix
)

from .metrics import (
    round_half_up,
    compute_balance_metrics,
    compute_cluster_metrics
)

from .validation import (
    validate_criteria,
    check_member_limit,
    prepare_entries,
    MIN_GROUP_COUNT,
    MAX_GROUP_COUNT,
    MAX_CLUSTER_FIELDS,
    MAX_SPLIT_FIELDS
)

__all__ = [
    # Convergence
    'NoImprovement',

    # Field metadata
    'map_field_type',
    'infer_field_type',
    'infer_field_meta',
    'build_field_meta',

    # Variety history
    'generate_pairs',
    'count_cooccurrences',
    'build_penalty_matrix',

    # Metrics
    'round_half_up',
    'compute_balance_metrics',
    'compute_cluster_metrics',

    # Validation
    'validate_criteria',
    'check_member_limit',
    'prepare_entries',
    'MIN_GROUP_COUNT',
    'MAX_GROUP_COUNT',
    'MAX_CLUSTER_FIELDS',
    'MAX_SPLIT_FIELDS'
]
