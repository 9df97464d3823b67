"""Matchmaking engine facade.

Turns a read-only profile pool into ranked ``TeamMatch`` values. Nothing
here performs I/O; persisting results is the caller's job (see
``hackmatch.matchmaking_service``).
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from hackmatch.config import MatchmakingConfig
from hackmatch.engine.combinations import evaluate_combinations, generate_combinations
from hackmatch.engine.compatibility import (
    experience_balance,
    individual_match_score,
    rank_candidates,
    team_communication_fit,
    team_match_score,
    team_preferences_alignment,
    team_skills_compatibility,
)
from hackmatch.engine.diversity import DiverseTeam, build_diverse_teams
from hackmatch.engine.reasoning import assign_roles, generate_reasoning
from hackmatch.match_models import MatchmakingOptions, MatchScore, TeamMatch, TeamType
from hackmatch.profile_models import ParticipantProfile, get_profile

logger = logging.getLogger(__name__)


def unique_profiles(profiles: Sequence[ParticipantProfile]) -> list[ParticipantProfile]:
    """Drop repeated emails, keeping the first profile for each."""
    seen: set[str] = set()
    result: list[ParticipantProfile] = []
    for p in profiles:
        if p.email in seen:
            logger.warning("Duplicate profile ignored: %s", p.email)
            continue
        seen.add(p.email)
        result.append(p)
    return result


class Matchmaker:
    """Scores participants and assembles candidate teams."""

    def __init__(self, config: MatchmakingConfig | None = None) -> None:
        self.config = config or MatchmakingConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def find_matches(
        self,
        target_email: str,
        profiles: Sequence[ParticipantProfile],
        options: MatchmakingOptions | None = None,
    ) -> list[TeamMatch]:
        """Best teams of ``options.team_size`` that include the target.

        Returns an empty list when the target is not in *profiles*.
        """
        options = options or MatchmakingOptions()
        pool = unique_profiles(profiles)
        logger.info(
            "Finding matches for %s among %d profiles (team_size=%d, min_score=%.2f)",
            target_email, len(pool), options.team_size, options.min_match_score,
        )

        target = get_profile(pool, target_email)
        if target is None:
            logger.warning("Target profile not found: %s", target_email)
            return []

        ranked = rank_candidates(
            target,
            [p for p in pool if p.email != target.email],
            self.config.ranking_weights,
            options.min_match_score,
        )
        logger.debug("%d candidates passed the %.2f threshold", len(ranked), options.min_match_score)

        combos = generate_combinations(
            [r.profile for r in ranked],
            options.team_size - 1,
            self.config.max_combinations,
        )
        teams = [(target, *combo) for combo in combos]
        scores = evaluate_combinations(teams, self._score_team, self.config.max_workers)

        category = options.challenge_categories[0] if options.challenge_categories else None
        matches = [
            self._build_match(team, score, challenge_category=category)
            for team, score in zip(teams, scores)
            if score.overall >= options.min_match_score
        ]
        matches.sort(key=lambda m: m.match_score.overall, reverse=True)
        matches = matches[:options.max_results]

        logger.info("Generated %d matches for %s", len(matches), target.email)
        return matches

    def generate_team_recommendations(
        self,
        profiles: Sequence[ParticipantProfile],
        team_size: int = 4,
    ) -> list[TeamMatch]:
        """Pool-wide team suggestions, best first."""
        if team_size < 2:
            raise ValueError("team_size must be at least 2")
        pool = unique_profiles(profiles)
        logger.info("Generating team recommendations from %d profiles (team_size=%d)", len(pool), team_size)

        teams = generate_combinations(pool, team_size, self.config.max_combinations)
        scores = evaluate_combinations(teams, self._score_team, self.config.max_workers)

        recommendations = [
            self._build_match(team, score)
            for team, score in zip(teams, scores)
            if score.overall >= self.config.recommendation_min_score
        ]
        recommendations.sort(key=lambda m: m.match_score.overall, reverse=True)
        recommendations = recommendations[:self.config.max_recommendations]

        logger.info("Generated %d team recommendations", len(recommendations))
        return recommendations

    def find_diverse_teams(
        self,
        profiles: Sequence[ParticipantProfile],
        options: MatchmakingOptions | None = None,
    ) -> list[TeamMatch]:
        """Demographically segmented teams scored by diversity."""
        options = options or MatchmakingOptions()
        pool = unique_profiles(profiles)
        logger.info("Finding diverse teams among %d profiles (team_size=%d)", len(pool), options.team_size)

        formed = build_diverse_teams(
            pool,
            options.team_size,
            self.config.diversity_weights,
            self.config.diversity_threshold,
        )
        category = options.challenge_categories[0] if options.challenge_categories else None
        matches = [self._diverse_match(team, category) for team in formed]

        logger.info("Diverse teams generated: %d", len(matches))
        return matches

    def calculate_individual_match(
        self,
        a: ParticipantProfile,
        b: ParticipantProfile,
    ) -> MatchScore:
        """One-on-one score breakdown of two participants."""
        return individual_match_score(
            a, b, self.config.individual_weights, self.config.default_availability,
        )

    def calculate_match_score(
        self,
        participant: ParticipantProfile,
        candidates: Sequence[ParticipantProfile],
    ) -> float:
        """Overall team score of *participant* together with *candidates*."""
        return self._score_team([participant, *candidates]).overall

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _score_team(self, team: Sequence[ParticipantProfile]) -> MatchScore:
        return team_match_score(team, self.config.team_weights, self.config.default_availability)

    def _build_match(
        self,
        team: Sequence[ParticipantProfile],
        score: MatchScore,
        challenge_category: str | None = None,
        team_type: TeamType | None = None,
    ) -> TeamMatch:
        return TeamMatch(
            participant_emails=[p.email for p in team],
            match_score=score,
            reasoning=generate_reasoning(team, team_type),
            recommended_roles=assign_roles(team),
            challenge_category=challenge_category,
            team_type=team_type,
        )

    def _diverse_match(self, team: DiverseTeam, challenge_category: str | None) -> TeamMatch:
        members = team.members
        score = MatchScore(
            overall=team.diversity.composite,
            skills_compatibility=team_skills_compatibility(members),
            experience_balance=experience_balance(members),
            preferences_alignment=team_preferences_alignment(members),
            communication_fit=team_communication_fit(members),
            availability_match=self.config.default_availability,
        )
        return self._build_match(members, score, challenge_category, team.team_type)
