"""Team match value objects and matchmaking options.

A ``TeamMatch`` is immutable. Status changes go through
:meth:`TeamMatch.with_status`, which validates the transition and returns
a new value.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from hackmatch.errors import InvalidMatchStateError
from hackmatch.profile_models import normalize_email


MatchStatus = Literal["suggested", "accepted", "rejected", "expired"]
TeamType = Literal["female-only", "mixed-adults", "minors-only"]

HIGH_QUALITY_THRESHOLD = 0.75
VIABLE_THRESHOLD = 0.6
VIABLE_AVAILABILITY = 0.5
DEFAULT_AVAILABILITY = 0.8

# suggested is the only non-terminal status
_TRANSITIONS: dict[str, frozenset[str]] = {
    "suggested": frozenset({"accepted", "rejected", "expired"}),
    "accepted": frozenset(),
    "rejected": frozenset(),
    "expired": frozenset(),
}


class _MatchModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ---------------------------------------------------------------------------
# Score / reasoning
# ---------------------------------------------------------------------------
class MatchScore(_MatchModel):
    """Score breakdown; every component lies in [0, 1]."""

    overall: float = Field(ge=0.0, le=1.0)
    skills_compatibility: float = Field(ge=0.0, le=1.0)
    experience_balance: float = Field(ge=0.0, le=1.0)
    preferences_alignment: float = Field(ge=0.0, le=1.0)
    communication_fit: float = Field(ge=0.0, le=1.0)
    availability_match: float = Field(default=DEFAULT_AVAILABILITY, ge=0.0, le=1.0)


class MatchReasoning(_MatchModel):
    """Human-readable explanation of a match."""

    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Team match
# ---------------------------------------------------------------------------
def _new_match_id() -> str:
    return f"match_{uuid.uuid4().hex}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TeamMatch(_MatchModel):
    """A suggested team and everything needed to present it."""

    id: str = Field(default_factory=_new_match_id, min_length=1)
    participant_emails: list[str] = Field(..., min_length=2)
    match_score: MatchScore
    reasoning: MatchReasoning = Field(default_factory=MatchReasoning)
    recommended_roles: dict[str, str] = Field(default_factory=dict)
    challenge_category: str | None = None
    team_type: TeamType | None = None
    status: MatchStatus = "suggested"
    created_at: datetime = Field(default_factory=_utcnow)

    @field_validator("participant_emails")
    @classmethod
    def validate_participants(cls, v: list[str]) -> list[str]:
        emails = [normalize_email(e) for e in v]
        if len(emails) != len(set(emails)):
            raise ValueError("participant_emails must not contain duplicates")
        return emails

    @property
    def team_size(self) -> int:
        return len(self.participant_emails)

    def is_high_quality(self) -> bool:
        return self.match_score.overall >= HIGH_QUALITY_THRESHOLD

    def is_viable(self) -> bool:
        return (
            self.match_score.overall >= VIABLE_THRESHOLD
            and self.match_score.availability_match >= VIABLE_AVAILABILITY
        )

    def has_participant(self, email: str) -> bool:
        return email.strip().lower() in self.participant_emails

    def with_status(self, status: str) -> TeamMatch:
        """Return a copy with *status*, enforcing the status state machine.

        Re-applying the current status is a no-op. Terminal statuses
        (accepted, rejected, expired) reject any other change.
        """
        if status not in _TRANSITIONS:
            raise InvalidMatchStateError(f"Unknown match status '{status}'")
        if status == self.status:
            return self
        if status not in _TRANSITIONS[self.status]:
            raise InvalidMatchStateError(
                f"Cannot change match '{self.id}' from '{self.status}' to '{status}'"
            )
        return self.model_copy(update={"status": status})

    def to_json(self) -> dict[str, Any]:
        """Flat camelCase record with a derived ``metadata`` block."""
        record = self.model_dump(mode="json", by_alias=True)
        record["metadata"] = {
            "teamSize": self.team_size,
            "isHighQuality": self.is_high_quality(),
            "isViable": self.is_viable(),
        }
        return record

    @classmethod
    def from_json(cls, record: dict[str, Any]) -> TeamMatch:
        data = {k: v for k, v in record.items() if k != "metadata"}
        return cls.model_validate(data)


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------
class MatchmakingOptions(BaseModel):
    """Per-request options for match search."""

    team_size: int = Field(default=4, ge=2, le=6)
    # no upper bound: a threshold above 1.0 just yields no matches
    min_match_score: float = Field(default=0.6, ge=0.0)
    max_results: int = Field(default=10, ge=1)
    challenge_categories: list[str] = Field(default_factory=list)
