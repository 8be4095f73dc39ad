"""Grouping algorithm implementations."""

from .split import split_by_attributes, split_by_attribute
from .clustering import DistanceClustering, cluster_by_distance, apply_variety_penalty
from .projection import cluster_by_score_projection, projection_score, hash_to_unit
from .balanced import BalancedTeams, multi_balanced_teams, composite_scores
from .builder import generate_groups, score_groups

__all__ = [
    'split_by_attributes',
    'split_by_attribute',
    'DistanceClustering',
    'cluster_by_distance',
    'apply_variety_penalty',
    'cluster_by_score_projection',
    'projection_score',
    'hash_to_unit',
    'BalancedTeams',
    'multi_balanced_teams',
    'composite_scores',
    'generate_groups',
    'score_groups'
]
