"""Matchmaking service: runs the engine and persists its results."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
import logging
from typing import Any

from hackmatch.errors import MatchNotFoundError, ParticipantNotInMatchError
from hackmatch.match_models import HIGH_QUALITY_THRESHOLD, MatchmakingOptions, TeamMatch
from hackmatch.match_repository import TeamMatchRepository
from hackmatch.matchmaker import Matchmaker
from hackmatch.profile_models import ParticipantProfile


logger = logging.getLogger(__name__)

ProfileSource = Callable[[], Sequence[ParticipantProfile]]


class MatchmakingService:
    """Glue between a profile source, the matchmaker and the match store."""

    def __init__(
        self,
        matchmaker: Matchmaker,
        repository: TeamMatchRepository,
        profile_source: ProfileSource,
    ) -> None:
        self.matchmaker = matchmaker
        self.repository = repository
        self._profile_source = profile_source

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def find_matches(self, email: str, options: MatchmakingOptions | None = None) -> list[TeamMatch]:
        """Find and store matches for the participant with *email*."""
        try:
            matches = self.matchmaker.find_matches(email, list(self._profile_source()), options)
            self._save_all(matches)
        except Exception:
            logger.exception("Error finding matches for %s", email)
            raise
        logger.info("Matches found and saved for %s: %d", email, len(matches))
        return matches

    def generate_team_recommendations(self, team_size: int = 4) -> list[TeamMatch]:
        try:
            recommendations = self.matchmaker.generate_team_recommendations(
                list(self._profile_source()), team_size,
            )
            self._save_all(recommendations)
        except Exception:
            logger.exception("Error generating team recommendations (team_size=%d)", team_size)
            raise
        logger.info("Team recommendations saved: %d", len(recommendations))
        return recommendations

    def find_diverse_teams(self, options: MatchmakingOptions | None = None) -> list[TeamMatch]:
        try:
            teams = self.matchmaker.find_diverse_teams(list(self._profile_source()), options)
            self._save_all(teams)
        except Exception:
            logger.exception("Error finding diverse teams")
            raise
        logger.info("Diverse teams saved: %d", len(teams))
        return teams

    # ------------------------------------------------------------------
    # Status changes
    # ------------------------------------------------------------------
    def accept_match(self, match_id: str, participant_email: str) -> TeamMatch:
        """Mark a match accepted on behalf of one of its participants."""
        return self._change_status(match_id, participant_email, "accepted")

    def reject_match(self, match_id: str, participant_email: str) -> TeamMatch:
        """Mark a match rejected on behalf of one of its participants."""
        return self._change_status(match_id, participant_email, "rejected")

    def _change_status(self, match_id: str, participant_email: str, status: str) -> TeamMatch:
        try:
            match = self.repository.find_by_id(match_id)
            if match is None:
                raise MatchNotFoundError(match_id)
            if not match.has_participant(participant_email):
                raise ParticipantNotInMatchError(match_id, participant_email)
            updated = self.repository.update_status(match_id, status)
        except Exception:
            logger.exception("Error setting match %s to %s for %s", match_id, status, participant_email)
            raise
        logger.info("Match %s %s by %s", match_id, status, participant_email)
        return updated

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_matches_for_participant(self, email: str) -> list[TeamMatch]:
        return self.repository.find_by_participant(email)

    def get_high_quality_matches(self, min_score: float = HIGH_QUALITY_THRESHOLD) -> list[TeamMatch]:
        return self.repository.find_high_quality_matches(min_score)

    def get_match_by_id(self, match_id: str) -> TeamMatch | None:
        match = self.repository.find_by_id(match_id)
        if match is None:
            logger.warning("Match not found: %s", match_id)
        return match

    def export_matchmaking_data(self) -> dict[str, Any]:
        """Profiles and match records, with ``success`` for accepted matches."""
        profiles = list(self._profile_source())
        matches = self.repository.find_all()
        return {
            "profiles": [p.model_dump(mode="json", by_alias=True) for p in profiles],
            "matches": [{**m.to_json(), "success": m.status == "accepted"} for m in matches],
            "metadata": {
                "totalProfiles": len(profiles),
                "totalMatches": len(matches),
                "exportedAt": datetime.now(timezone.utc).isoformat(),
            },
        }

    def _save_all(self, matches: Sequence[TeamMatch]) -> None:
        for match in matches:
            self.repository.save(match)
