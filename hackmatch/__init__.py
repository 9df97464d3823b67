"""Hackathon team matchmaking engine."""

from .config import MatchmakingConfig, load_config_from_env
from .match_models import MatchmakingOptions, MatchReasoning, MatchScore, TeamMatch
from .matchmaker import Matchmaker
from .profile_models import ParticipantProfile

__all__ = [
    "MatchReasoning",
    "MatchScore",
    "Matchmaker",
    "MatchmakingConfig",
    "MatchmakingOptions",
    "ParticipantProfile",
    "TeamMatch",
    "load_config_from_env",
]
