"""Tests for hackmatch/matchmaking_service.py."""

import logging

import pytest

from hackmatch.errors import InvalidMatchStateError, MatchNotFoundError, ParticipantNotInMatchError
from hackmatch.match_models import MatchmakingOptions
from hackmatch.match_repository import TeamMatchRepository
from hackmatch.matchmaker import Matchmaker
from hackmatch.matchmaking_service import MatchmakingService
from hackmatch.profile_models import ParticipantProfile


def _p(email: str) -> ParticipantProfile:
    return ParticipantProfile(
        email=email,
        full_name=email.split("@")[0],
        skills=["Python", "SQL", "React"],
        expertise_level="intermediate",
        age=27,
        languages=["English"],
    )


@pytest.fixture
def profiles():
    return [_p("ana@x.io"), _p("bo@x.io"), _p("cy@x.io"), _p("di@x.io")]


@pytest.fixture
def service(profiles):
    return MatchmakingService(Matchmaker(), TeamMatchRepository(), lambda: profiles)


@pytest.fixture
def match(service):
    return service.find_matches("ana@x.io", MatchmakingOptions(team_size=2))[0]


class TestGeneration:
    def test_find_matches_saved(self, service):
        matches = service.find_matches("ana@x.io", MatchmakingOptions(team_size=2))
        assert len(matches) == 3
        assert {m.id for m in service.repository.find_all()} == {m.id for m in matches}

    def test_unknown_participant(self, service):
        assert service.find_matches("ghost@x.io") == []
        assert service.repository.find_all() == []

    def test_recommendations_saved(self, service):
        recs = service.generate_team_recommendations(team_size=3)
        assert len(recs) == 4
        assert len(service.repository.find_all()) == 4

    def test_participant_lookup(self, service, match):
        assert service.get_matches_for_participant("ANA@x.io")[0].id == match.id
        assert service.get_match_by_id(match.id) == match
        assert service.get_match_by_id("match_missing") is None


class TestStatusChanges:
    def test_accept(self, service, match):
        member = match.participant_emails[1]
        accepted = service.accept_match(match.id, member)
        assert accepted.status == "accepted"
        assert service.get_match_by_id(match.id).status == "accepted"

    def test_accept_twice(self, service, match):
        service.accept_match(match.id, "ana@x.io")
        assert service.accept_match(match.id, "ana@x.io").status == "accepted"

    def test_reject_after_accept(self, service, match):
        service.accept_match(match.id, "ana@x.io")
        with pytest.raises(InvalidMatchStateError):
            service.reject_match(match.id, "ana@x.io")

    def test_reject(self, service, match):
        assert service.reject_match(match.id, "ana@x.io").status == "rejected"

    def test_non_participant(self, service, match):
        outsider = next(e for e in ["bo@x.io", "cy@x.io", "di@x.io"] if e not in match.participant_emails)
        with pytest.raises(ParticipantNotInMatchError):
            service.accept_match(match.id, outsider)
        assert service.get_match_by_id(match.id).status == "suggested"

    def test_unknown_match(self, service):
        with pytest.raises(MatchNotFoundError):
            service.reject_match("match_missing", "ana@x.io")


class TestFailures:
    def _broken_source(self):
        raise RuntimeError("profile store offline")

    def test_profile_source_error_logged_and_raised(self, caplog):
        service = MatchmakingService(Matchmaker(), TeamMatchRepository(), self._broken_source)
        with caplog.at_level(logging.ERROR, logger="hackmatch.matchmaking_service"):
            with pytest.raises(RuntimeError, match="offline"):
                service.find_matches("ana@x.io")
            with pytest.raises(RuntimeError):
                service.generate_team_recommendations()
            with pytest.raises(RuntimeError):
                service.find_diverse_teams()
        assert len(caplog.records) == 3
        assert all(r.exc_info for r in caplog.records)

    def test_repository_write_error_logged_and_raised(self, profiles, tmp_path, caplog):
        repository = TeamMatchRepository(path=str(tmp_path / "missing_dir" / "matches.json"))
        service = MatchmakingService(Matchmaker(), repository, lambda: profiles)
        with caplog.at_level(logging.ERROR, logger="hackmatch.matchmaking_service"):
            with pytest.raises(ValueError, match="Failed to save team matches"):
                service.find_matches("ana@x.io", MatchmakingOptions(team_size=2))
        assert "ana@x.io" in caplog.text
        assert repository.find_all() == []


class TestExport:
    def test_export(self, service, match):
        service.accept_match(match.id, "ana@x.io")
        data = service.export_matchmaking_data()

        assert data["metadata"]["totalProfiles"] == 4
        assert data["metadata"]["totalMatches"] == 3
        assert "exportedAt" in data["metadata"]
        assert data["profiles"][0]["fullName"] == "ana"

        success = {m["id"]: m["success"] for m in data["matches"]}
        assert success[match.id] is True
        assert sum(success.values()) == 1
