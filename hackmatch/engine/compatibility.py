"""Compatibility scoring between two participants and within a team.

Every function here is pure. Weights come from the caller.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
import itertools

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from hackmatch.config import ScoreWeights
from hackmatch.match_models import DEFAULT_AVAILABILITY, MatchScore
from hackmatch.profile_models import ParticipantProfile


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class RankedCandidate(BaseModel):
    """A candidate with its compatibility against the target."""

    model_config = ConfigDict(frozen=True)

    profile: ParticipantProfile
    score: float = Field(ge=0.0, le=1.0)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_COMPATIBLE_STYLES: dict[str, frozenset[str]] = {
    "direct": frozenset({"direct", "analytical"}),
    "collaborative": frozenset({"collaborative", "supportive"}),
    "supportive": frozenset({"supportive", "collaborative"}),
    "analytical": frozenset({"analytical", "direct"}),
}

STYLE_PARTIAL_CREDIT = 0.3
TEAM_SIZE_PARTIAL_CREDIT = 0.5
PAIR_NO_SHARED_LANGUAGE = 0.3
TEAM_NO_SHARED_LANGUAGE = 0.7
EXPECTED_SKILLS_PER_MEMBER = 5
SHARED_SKILL_BONUS = 0.1


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


# ---------------------------------------------------------------------------
# Pairwise metrics
# ---------------------------------------------------------------------------
def skills_compatibility(a: ParticipantProfile, b: ParticipantProfile) -> float:
    """Jaccard similarity of the two lower-cased skill sets (0 if both empty)."""
    skills_a = a.skill_set()
    skills_b = b.skill_set()
    union = skills_a | skills_b
    if not union:
        return 0.0
    return len(skills_a & skills_b) / len(union)


def style_compatibility(style_a: str, style_b: str) -> float:
    """1.0 for compatible communication styles, partial credit otherwise."""
    if style_b in _COMPATIBLE_STYLES.get(style_a, frozenset()):
        return 1.0
    return STYLE_PARTIAL_CREDIT


def preferences_alignment(a: ParticipantProfile, b: ParticipantProfile) -> float:
    """Mean of team-size agreement and communication-style compatibility."""
    sizes = (a.preferences.team_size, b.preferences.team_size)
    if "any" in sizes or sizes[0] == sizes[1]:
        size_score = 1.0
    else:
        size_score = TEAM_SIZE_PARTIAL_CREDIT

    style_score = style_compatibility(
        a.preferences.communication_style,
        b.preferences.communication_style,
    )
    return (size_score + style_score) / 2


def communication_fit(a: ParticipantProfile, b: ParticipantProfile) -> float:
    if a.language_set() & b.language_set():
        return 1.0
    return PAIR_NO_SHARED_LANGUAGE


# ---------------------------------------------------------------------------
# Team metrics
# ---------------------------------------------------------------------------
def experience_balance(profiles: Sequence[ParticipantProfile]) -> float:
    """``max(0, 1 - variance/2)`` over member experience scores.

    Population variance. An empty team scores 0.0, a single member 1.0.
    """
    if not profiles:
        return 0.0
    scores = np.array([p.experience_score() for p in profiles], dtype=float)
    variance = float(np.var(scores))
    return _clamp01(1.0 - variance / 2)


def team_size_fits(preference: str, size: int) -> bool:
    """Whether a team-size preference accepts an actual team of *size*."""
    if preference == "small":
        return size <= 3
    if preference == "medium":
        return 3 <= size <= 5
    if preference == "large":
        return size >= 5
    return True


def team_skills_compatibility(profiles: Sequence[ParticipantProfile]) -> float:
    """Unique-skill diversity plus a bonus per skill held by several members."""
    if not profiles:
        return 0.0
    coverage: Counter[str] = Counter()
    for p in profiles:
        coverage.update(p.skill_set())

    diversity = len(coverage) / (len(profiles) * EXPECTED_SKILLS_PER_MEMBER)
    shared_bonus = SHARED_SKILL_BONUS * sum(1 for count in coverage.values() if count > 1)
    return min(diversity + shared_bonus, 1.0)


def team_preferences_alignment(profiles: Sequence[ParticipantProfile]) -> float:
    """Mean of team-size fit share and mean pairwise style compatibility."""
    if not profiles:
        return 0.0
    size = len(profiles)
    fits = sum(1 for p in profiles if team_size_fits(p.preferences.team_size, size))
    size_score = fits / size

    pair_scores = [
        style_compatibility(a.preferences.communication_style, b.preferences.communication_style)
        for a, b in itertools.combinations(profiles, 2)
    ]
    style_score = sum(pair_scores) / len(pair_scores) if pair_scores else 1.0
    return (size_score + style_score) / 2


def team_communication_fit(profiles: Sequence[ParticipantProfile]) -> float:
    """1.0 when one language is shared by every member."""
    if not profiles:
        return 0.0
    common = set.intersection(*(p.language_set() for p in profiles))
    return 1.0 if common else TEAM_NO_SHARED_LANGUAGE


# ---------------------------------------------------------------------------
# Composite scores
# ---------------------------------------------------------------------------
def weighted_overall(
    weights: ScoreWeights,
    *,
    skills: float,
    experience: float,
    preferences: float,
    communication: float,
    availability: float = DEFAULT_AVAILABILITY,
) -> float:
    total = (
        skills * weights.skills
        + experience * weights.experience
        + preferences * weights.preferences
        + communication * weights.communication
        + availability * weights.availability
    )
    return _clamp01(total)


def pairwise_compatibility(
    a: ParticipantProfile,
    b: ParticipantProfile,
    weights: ScoreWeights,
) -> float:
    """Return the weighted compatibility (0-1) of two participants."""
    return weighted_overall(
        weights,
        skills=skills_compatibility(a, b),
        experience=experience_balance([a, b]),
        preferences=preferences_alignment(a, b),
        communication=communication_fit(a, b),
    )


def individual_match_score(
    a: ParticipantProfile,
    b: ParticipantProfile,
    weights: ScoreWeights,
    availability: float = DEFAULT_AVAILABILITY,
) -> MatchScore:
    """Full score breakdown for a one-on-one match."""
    skills = skills_compatibility(a, b)
    experience = experience_balance([a, b])
    preferences = preferences_alignment(a, b)
    communication = communication_fit(a, b)
    return MatchScore(
        overall=weighted_overall(
            weights,
            skills=skills,
            experience=experience,
            preferences=preferences,
            communication=communication,
            availability=availability,
        ),
        skills_compatibility=skills,
        experience_balance=experience,
        preferences_alignment=preferences,
        communication_fit=communication,
        availability_match=availability,
    )


def team_match_score(
    profiles: Sequence[ParticipantProfile],
    weights: ScoreWeights,
    availability: float = DEFAULT_AVAILABILITY,
) -> MatchScore:
    """Full score breakdown for a whole team."""
    skills = team_skills_compatibility(profiles)
    experience = experience_balance(profiles)
    preferences = team_preferences_alignment(profiles)
    communication = team_communication_fit(profiles)
    return MatchScore(
        overall=weighted_overall(
            weights,
            skills=skills,
            experience=experience,
            preferences=preferences,
            communication=communication,
            availability=availability,
        ),
        skills_compatibility=skills,
        experience_balance=experience,
        preferences_alignment=preferences,
        communication_fit=communication,
        availability_match=availability,
    )


# ---------------------------------------------------------------------------
# Batch helpers
# ---------------------------------------------------------------------------
def rank_candidates(
    target: ParticipantProfile,
    candidates: Sequence[ParticipantProfile],
    weights: ScoreWeights,
    min_score: float = 0.0,
) -> list[RankedCandidate]:
    """Score every candidate against *target*, drop those below *min_score*.

    Sorted by score descending; ties keep pool order.
    """
    ranked = [
        RankedCandidate(profile=c, score=pairwise_compatibility(target, c, weights))
        for c in candidates
        if c.email != target.email
    ]
    kept = [r for r in ranked if r.score >= min_score]
    return sorted(kept, key=lambda r: r.score, reverse=True)
