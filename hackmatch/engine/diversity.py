"""Diverse team construction with demographic segmentation.

Profiles are split into minors and adults, which are never mixed. Adult
women who opted into (or did not opt out of) female-only teams are grouped
first. Each batch is ordered so that consecutive profiles differ in
expertise and skills, then cut into fixed-size windows; a window becomes a
team only if its diversity score clears the threshold.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from pydantic import BaseModel, ConfigDict, Field

from hackmatch.config import DiversityWeights
from hackmatch.match_models import TeamType
from hackmatch.profile_models import EXPERTISE_RANK, ParticipantProfile

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class DiversityBreakdown(BaseModel):
    """Diversity sub-metrics of one team, each ∈ [0, 1]."""

    skills: float = Field(ge=0.0, le=1.0, default=0.0)
    experience_levels: float = Field(ge=0.0, le=1.0, default=0.0)
    education: float = Field(ge=0.0, le=1.0, default=0.0)
    languages: float = Field(ge=0.0, le=1.0, default=0.0)
    age: float = Field(ge=0.0, le=1.0, default=0.0)
    composite: float = Field(ge=0.0, le=1.0, default=0.0)


class DiverseTeam(BaseModel):
    """A team cut from one demographic batch."""

    model_config = ConfigDict(frozen=True)

    team_type: TeamType
    members: list[ParticipantProfile] = Field(min_length=2)
    diversity: DiversityBreakdown


# ---------------------------------------------------------------------------
# Diversity score
# ---------------------------------------------------------------------------
SKILLS_PER_MEMBER = 3
AGE_RANGE_TOLERANCE = 10
AGE_RANGE_DECAY = 20


def age_compatibility(ages: Sequence[int]) -> float:
    """1.0 for an age range up to 10 years, decaying linearly to 0 at 30."""
    if not ages:
        return 0.0
    spread = max(ages) - min(ages)
    if spread <= AGE_RANGE_TOLERANCE:
        return 1.0
    return max(0.0, 1.0 - (spread - AGE_RANGE_TOLERANCE) / AGE_RANGE_DECAY)


def calculate_diversity(
    members: Sequence[ParticipantProfile],
    weights: DiversityWeights | None = None,
) -> DiversityBreakdown:
    """Calculate the weighted diversity composite for *members*."""
    if not members:
        return DiversityBreakdown()
    weights = weights or DiversityWeights()
    n = len(members)

    all_skills: set[str] = set()
    all_languages: set[str] = set()
    for m in members:
        all_skills |= m.skill_set()
        all_languages |= m.language_set()

    skills = min(len(all_skills) / (n * SKILLS_PER_MEMBER), 1.0)
    levels = len({m.expertise_level for m in members}) / len(EXPERTISE_RANK)
    education = min(len({m.education.strip().lower() for m in members}) / n, 1.0)
    languages = min(len(all_languages) / n, 1.0)
    age = age_compatibility([m.age for m in members])

    composite = (
        skills * weights.skills
        + levels * weights.experience_levels
        + education * weights.education
        + languages * weights.languages
        + age * weights.age
    )

    return DiversityBreakdown(
        skills=skills,
        experience_levels=levels,
        education=education,
        languages=languages,
        age=age,
        composite=min(composite, 1.0),
    )


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------
def diversity_signature(profile: ParticipantProfile) -> str:
    """Group key: expertise level plus the first three listed skills."""
    head = ",".join(s.strip().lower() for s in profile.skills[:3])
    return f"{profile.expertise_level}-{head}"


def sort_for_diversity(profiles: Sequence[ParticipantProfile]) -> list[ParticipantProfile]:
    """Round-robin across signature groups (groups in first-seen order)."""
    groups: dict[str, list[ParticipantProfile]] = {}
    for p in profiles:
        groups.setdefault(diversity_signature(p), []).append(p)

    result: list[ParticipantProfile] = []
    longest = max((len(g) for g in groups.values()), default=0)
    for i in range(longest):
        result.extend(g[i] for g in groups.values() if i < len(g))
    return result


# ---------------------------------------------------------------------------
# Team formation
# ---------------------------------------------------------------------------
def partition_by_age(
    profiles: Sequence[ParticipantProfile],
) -> tuple[list[ParticipantProfile], list[ParticipantProfile]]:
    """Split into ``(minors, adults)``."""
    minors = [p for p in profiles if p.is_minor]
    adults = [p for p in profiles if not p.is_minor]
    return minors, adults


def wants_female_team(profile: ParticipantProfile) -> bool:
    return profile.gender == "feminine" and profile.prefer_female_team is not False


def form_teams(
    profiles: Sequence[ParticipantProfile],
    team_size: int,
    team_type: TeamType,
    weights: DiversityWeights | None = None,
    threshold: float = 0.6,
) -> list[DiverseTeam]:
    """Cut diversity-sorted *profiles* into windows of *team_size*.

    Windows whose composite diversity is below *threshold* are dropped.
    """
    if team_size < 2 or len(profiles) < team_size:
        return []

    ordered = sort_for_diversity(profiles)
    teams: list[DiverseTeam] = []
    for start in range(0, len(ordered) - team_size + 1, team_size):
        members = ordered[start:start + team_size]
        diversity = calculate_diversity(members, weights)
        if diversity.composite < threshold:
            logger.debug(
                "Dropped %s window at %d: diversity %.3f < %.2f",
                team_type, start, diversity.composite, threshold,
            )
            continue
        teams.append(DiverseTeam(team_type=team_type, members=members, diversity=diversity))
    return teams


def build_diverse_teams(
    profiles: Sequence[ParticipantProfile],
    team_size: int,
    weights: DiversityWeights | None = None,
    threshold: float = 0.6,
) -> list[DiverseTeam]:
    """Form female-only, then mixed-adult, then minors-only teams.

    1. Partition into minors and adults.
    2. From adults, pool women who did not opt out of female-only teams;
       if the pool can fill a team, form female-only teams and take their
       members out of further consideration.
    3. Form mixed-adults teams from the remaining adults.
    4. Form minors-only teams from the minors.
    """
    minors, adults = partition_by_age(profiles)
    teams: list[DiverseTeam] = []

    female_pool = [p for p in adults if wants_female_team(p)]
    if len(female_pool) >= team_size:
        teams.extend(form_teams(female_pool, team_size, "female-only", weights, threshold))

    placed = {m.email for t in teams for m in t.members}
    remaining_adults = [p for p in adults if p.email not in placed]
    teams.extend(form_teams(remaining_adults, team_size, "mixed-adults", weights, threshold))

    if len(minors) >= team_size:
        teams.extend(form_teams(minors, team_size, "minors-only", weights, threshold))

    return teams
