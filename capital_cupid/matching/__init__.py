"""Profile-to-grant matcher."""

from .engine import calculate_match_score, match_grants
from .weights import DEFAULT_WEIGHTS, MatchWeights, load_weights, save_weights

__all__ = [
    "calculate_match_score",
    "match_grants",
    "DEFAULT_WEIGHTS",
    "MatchWeights",
    "load_weights",
    "save_weights",
]
