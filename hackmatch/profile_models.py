"""Participant profile definitions for hackathon matchmaking.

Profiles are immutable snapshots supplied by the profile-management side of
the platform. Records coming from the profile store use camelCase keys, so
every model accepts both camelCase and snake_case field names.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
ExpertiseLevel = Literal["beginner", "intermediate", "advanced", "expert"]
TeamSizePreference = Literal["small", "medium", "large", "any"]
CommunicationStyle = Literal["direct", "collaborative", "supportive", "analytical"]
WorkStyle = Literal["leader", "contributor", "specialist", "facilitator"]
Gender = Literal["masculine", "feminine", "non-binary", "prefer-not-to-say"]

EXPERTISE_RANK: dict[str, int] = {
    "beginner": 1,
    "intermediate": 2,
    "advanced": 3,
    "expert": 4,
}

MAX_EXPERIENCE_SCORE = 5.0
ADULT_AGE = 18

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(value: str) -> str:
    """Lower-case and trim *value*, raising ``ValueError`` if malformed."""
    cleaned = value.strip().lower()
    if not _EMAIL_RE.match(cleaned):
        raise ValueError(f"Invalid email format: {value}")
    return cleaned


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class _ProfileModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class WorkExperience(_ProfileModel):
    """One past position."""

    company: str = ""
    position: str = ""
    sector: str = Field(..., min_length=1)
    years_of_experience: float = Field(default=0.0, ge=0, le=50)
    technologies: list[str] = Field(default_factory=list)


class Project(_ProfileModel):
    """A project listed on the profile."""

    name: str = Field(..., min_length=1)
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    role: str = ""


class Preferences(_ProfileModel):
    """Team-formation preferences."""

    team_size: TeamSizePreference = "any"
    communication_style: CommunicationStyle = "collaborative"
    work_style: WorkStyle = "contributor"
    interests: list[str] = Field(default_factory=list)


class ParticipantProfile(_ProfileModel):
    """A hackathon participant as seen by the matchmaking engine."""

    email: str
    full_name: str = Field(..., min_length=1, max_length=120)
    skills: list[str] = Field(default_factory=list)
    expertise_level: ExpertiseLevel
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: str = ""
    age: int = Field(..., ge=0, le=120)
    gender: Gender | None = None
    prefer_female_team: bool | None = None
    projects: list[Project] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)
    languages: list[str] = Field(default_factory=list)
    challenges_of_interest: list[str] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @property
    def expertise_rank(self) -> int:
        return EXPERTISE_RANK[self.expertise_level]

    @property
    def is_minor(self) -> bool:
        return self.age < ADULT_AGE

    def skill_set(self) -> set[str]:
        """Lower-cased skills."""
        return {s.strip().lower() for s in self.skills if s.strip()}

    def language_set(self) -> set[str]:
        """Lower-cased spoken languages."""
        return {lang.strip().lower() for lang in self.languages if lang.strip()}

    def experience_score(self) -> float:
        """Expertise ordinal + years/10 + projects/5, capped at 5."""
        years = sum(exp.years_of_experience for exp in self.work_experience)
        score = self.expertise_rank + years / 10 + len(self.projects) / 5
        return min(score, MAX_EXPERIENCE_SCORE)

    def has_email(self, email: str) -> bool:
        return self.email == email.strip().lower()


def get_profile(profiles: list[ParticipantProfile], email: str) -> ParticipantProfile | None:
    """Look up a profile by email (case-insensitive)."""
    return next((p for p in profiles if p.has_email(email)), None)
