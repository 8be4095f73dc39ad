"""Distance model: per-field rules, Gower distance and derived ranges."""

from .gower import (
    jaccard,
    field_distance,
    gower_distance,
    build_distance_matrix,
    FIELD_DISTANCES,
    CategoricalDistance,
    ExactMatchDistance,
    JaccardDistance,
    NumericDistance,
    OrdinalDistance
)
from .ranges import compute_numeric_ranges, observed_range

__all__ = [
    # Distances
    'jaccard',
    'field_distance',
    'gower_distance',
    'build_distance_matrix',
    'FIELD_DISTANCES',

    # Per-type rules
    'CategoricalDistance',
    'ExactMatchDistance',
    'JaccardDistance',
    'NumericDistance',
    'OrdinalDistance',

    # Ranges
    'compute_numeric_ranges',
    'observed_range'
]
