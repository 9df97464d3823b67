"""
Example: Matchmaking a small hackathon pool

This example builds a handful of participant profiles, finds teams for one
participant, accepts the best one and prints the stored records.

Limits can be tuned through environment variables or a .env file, e.g.:
   HACKMATCH_MAX_COMBINATIONS=50
   HACKMATCH_MAX_WORKERS=2
"""

import json
import logging

from dotenv import load_dotenv

from hackmatch import MatchmakingOptions, Matchmaker, ParticipantProfile, load_config_from_env
from hackmatch.match_repository import TeamMatchRepository
from hackmatch.matchmaking_service import MatchmakingService

load_dotenv()


profiles = [
    ParticipantProfile(
        email="ana@example.com",
        full_name="Ana Souza",
        skills=["Python", "Django", "PostgreSQL"],
        expertise_level="advanced",
        age=29,
        languages=["English", "Portuguese"],
        preferences={"team_size": "medium", "work_style": "leader"},
    ),
    ParticipantProfile(
        email="ben@example.com",
        full_name="Ben Clarke",
        skills=["React", "TypeScript", "Python"],
        expertise_level="intermediate",
        age=24,
        languages=["English"],
    ),
    ParticipantProfile(
        email="chen@example.com",
        full_name="Chen Wei",
        skills=["Machine Learning", "Python", "SQL"],
        expertise_level="expert",
        age=35,
        languages=["English", "Mandarin"],
        preferences={"communication_style": "analytical"},
    ),
    ParticipantProfile(
        email="dina@example.com",
        full_name="Dina Haddad",
        skills=["Figma", "UX Research", "React"],
        expertise_level="beginner",
        age=21,
        languages=["English", "Arabic"],
        preferences={"communication_style": "supportive"},
    ),
]

service = MatchmakingService(
    Matchmaker(load_config_from_env()),
    TeamMatchRepository(),
    lambda: profiles,
)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    matches = service.find_matches("ana@example.com", MatchmakingOptions(team_size=3, min_match_score=0.5))
    for match in matches:
        print(f"{match.match_score.overall:.2f}  {', '.join(match.participant_emails)}")
        for email, role in match.recommended_roles.items():
            print(f"      {email}: {role}")

    if matches:
        service.accept_match(matches[0].id, "ana@example.com")

    print("\n" + "=" * 50)
    print("Export:")
    print("=" * 50)
    print(json.dumps(service.export_matchmaking_data()["matches"], indent=2))
