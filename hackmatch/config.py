"""Scoring weights, thresholds and search bounds.

Everything the scorer and team builders treat as a tunable constant lives
here and is passed in explicitly. ``load_config_from_env`` reads overrides
from ``HACKMATCH_*`` environment variables.
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, ValidationError, model_validator

from hackmatch.match_models import DEFAULT_AVAILABILITY

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Weight sets
# ---------------------------------------------------------------------------
class ScoreWeights(BaseModel):
    """Weights of the four (five) match-score components."""

    skills: float = Field(..., ge=0.0, le=1.0)
    experience: float = Field(..., ge=0.0, le=1.0)
    preferences: float = Field(..., ge=0.0, le=1.0)
    communication: float = Field(..., ge=0.0, le=1.0)
    availability: float = Field(default=0.0, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_total(self) -> ScoreWeights:
        total = self.skills + self.experience + self.preferences + self.communication + self.availability
        if total > 1.0 + 1e-9:
            raise ValueError(f"Score weights must sum to at most 1.0, got {total:.2f}")
        return self


class DiversityWeights(BaseModel):
    """Weights of the diversity-score sub-metrics."""

    skills: float = Field(default=0.40, ge=0.0, le=1.0)
    experience_levels: float = Field(default=0.25, ge=0.0, le=1.0)
    education: float = Field(default=0.15, ge=0.0, le=1.0)
    languages: float = Field(default=0.10, ge=0.0, le=1.0)
    age: float = Field(default=0.10, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_weights_sum(self) -> DiversityWeights:
        total = self.skills + self.experience_levels + self.education + self.languages + self.age
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Diversity weights must sum to 1.0, got {total:.2f}")
        return self


# Candidate ranking (target vs. each candidate)
RANKING_WEIGHTS = ScoreWeights(skills=0.30, experience=0.25, preferences=0.15, communication=0.10)
# One-on-one match breakdown; skills weigh more between two people
INDIVIDUAL_WEIGHTS = ScoreWeights(skills=0.40, experience=0.25, preferences=0.20, communication=0.15)
# Whole-team score
TEAM_WEIGHTS = ScoreWeights(skills=0.30, experience=0.25, preferences=0.15, communication=0.10)


# ---------------------------------------------------------------------------
# Full config
# ---------------------------------------------------------------------------
class MatchmakingConfig(BaseModel):
    """All tunables of one matchmaking engine instance."""

    ranking_weights: ScoreWeights = Field(default_factory=lambda: RANKING_WEIGHTS.model_copy())
    individual_weights: ScoreWeights = Field(default_factory=lambda: INDIVIDUAL_WEIGHTS.model_copy())
    team_weights: ScoreWeights = Field(default_factory=lambda: TEAM_WEIGHTS.model_copy())
    diversity_weights: DiversityWeights = Field(default_factory=DiversityWeights)

    diversity_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    recommendation_min_score: float = Field(default=0.6, ge=0.0, le=1.0)
    default_availability: float = Field(default=DEFAULT_AVAILABILITY, ge=0.0, le=1.0)

    max_combinations: int = Field(default=100, ge=1)
    max_recommendations: int = Field(default=20, ge=1)
    max_workers: int = Field(default=4, ge=1, le=64)


_ENV_FIELDS: dict[str, str] = {
    "HACKMATCH_MAX_COMBINATIONS": "max_combinations",
    "HACKMATCH_MAX_RECOMMENDATIONS": "max_recommendations",
    "HACKMATCH_MAX_WORKERS": "max_workers",
    "HACKMATCH_DIVERSITY_THRESHOLD": "diversity_threshold",
    "HACKMATCH_RECOMMENDATION_MIN_SCORE": "recommendation_min_score",
    "HACKMATCH_DEFAULT_AVAILABILITY": "default_availability",
}


def load_config_from_env() -> MatchmakingConfig:
    """Build a config from defaults plus ``HACKMATCH_*`` overrides.

    Raises:
        ValueError: If an override is not a valid value for its field.
    """
    overrides: dict[str, str] = {}
    for env_name, field_name in _ENV_FIELDS.items():
        raw = os.getenv(env_name, "").strip()
        if raw:
            overrides[field_name] = raw

    try:
        config = MatchmakingConfig(**overrides)
    except ValidationError as e:
        raise ValueError(f"Invalid matchmaking configuration: {e}") from e

    if overrides:
        logger.info("Matchmaking config overrides: %s", ", ".join(sorted(overrides)))
    return config
