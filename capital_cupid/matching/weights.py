"""Match scoring weight configuration.

Defaults reproduce the reference scoring formula exactly; alternative
weights can be loaded from JSON or YAML for experimentation.
"""

from typing import Optional
from pydantic import BaseModel, field_validator

from ..storage.structured import read_structured, write_structured


class MatchWeights(BaseModel):
    """Weights and thresholds for tag-overlap match scoring."""

    base: float = 0.5
    industry_bonus: float = 0.3
    need_bonus: float = 0.1
    max_score: float = 1.0
    min_score: float = 0.3  # exclusive: scores at or below are dropped
    version: str = "1.0"

    @field_validator('base', 'industry_bonus', 'need_bonus', 'max_score', 'min_score')
    @classmethod
    def weight_range(cls, v: float) -> float:
        """Ensure weights are between 0 and 1."""
        if not 0 <= v <= 1:
            raise ValueError(f"Weight must be between 0 and 1, got {v}")
        return v

    def model_post_init(self, __context) -> None:
        if self.min_score >= self.max_score:
            raise ValueError(
                f"min_score ({self.min_score}) must be below max_score ({self.max_score})"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return self.model_dump()


DEFAULT_WEIGHTS = MatchWeights()


def load_weights(filepath: Optional[str] = None) -> MatchWeights:
    """Load match weights from file or return defaults.

    Supports JSON and YAML formats.

    Raises:
        FileNotFoundError: If filepath provided but doesn't exist
        ValueError: If weights are invalid
    """

    if not filepath:
        return DEFAULT_WEIGHTS

    return MatchWeights(**read_structured(filepath, label="Weights"))


def save_weights(weights: MatchWeights, filepath: str) -> None:
    """Save match weights to file (extension determines format)."""

    write_structured(weights.to_dict(), filepath)
