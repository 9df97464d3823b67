"""Tests for match and profile models."""

from pydantic import ValidationError
import pytest

from hackmatch.errors import InvalidMatchStateError
from hackmatch.match_models import MatchmakingOptions, MatchScore, TeamMatch
from hackmatch.profile_models import ParticipantProfile, get_profile


def _score(overall: float = 0.8, availability: float = 0.8) -> MatchScore:
    return MatchScore(
        overall=overall,
        skills_compatibility=0.5,
        experience_balance=0.9,
        preferences_alignment=1.0,
        communication_fit=1.0,
        availability_match=availability,
    )


def _match(**kwargs) -> TeamMatch:
    data = {"participant_emails": ["Ana@Example.com", "bo@example.com"], "match_score": _score()}
    data.update(kwargs)
    return TeamMatch(**data)


class TestParticipantProfile:
    def test_email_normalised(self):
        p = ParticipantProfile(email="  Ana@Example.COM ", full_name="Ana", expertise_level="expert", age=30)
        assert p.email == "ana@example.com"
        assert p.has_email("ANA@example.com")

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            ParticipantProfile(email="not-an-email", full_name="X", expertise_level="expert", age=30)

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            ParticipantProfile(email="a@x.io", full_name="X", expertise_level="guru", age=30)

    def test_camel_case_record(self):
        p = ParticipantProfile.model_validate({
            "email": "a@x.io",
            "fullName": "Ana",
            "expertiseLevel": "advanced",
            "age": 17,
            "preferFemaleTeam": True,
            "workExperience": [{"sector": "health", "yearsOfExperience": 5}],
            "preferences": {"teamSize": "small", "communicationStyle": "direct", "workStyle": "leader"},
        })
        assert p.preferences.work_style == "leader"
        assert p.prefer_female_team is True
        assert p.is_minor
        assert p.experience_score() == pytest.approx(3.5)

    def test_profiles_are_immutable(self):
        p = ParticipantProfile(email="a@x.io", full_name="Ana", expertise_level="expert", age=30)
        with pytest.raises(ValidationError):
            p.age = 31

    def test_get_profile_case_insensitive(self):
        p = ParticipantProfile(email="a@x.io", full_name="Ana", expertise_level="expert", age=30)
        assert get_profile([p], "A@X.IO") is p
        assert get_profile([p], "b@x.io") is None


class TestMatchScore:
    def test_component_out_of_range(self):
        with pytest.raises(ValidationError):
            _score(overall=1.2)

    def test_availability_defaults_to_neutral(self):
        score = MatchScore(
            overall=0.5,
            skills_compatibility=0.5,
            experience_balance=0.5,
            preferences_alignment=0.5,
            communication_fit=0.5,
        )
        assert score.availability_match == 0.8


class TestTeamMatch:
    def test_defaults(self):
        m = _match()
        assert m.id.startswith("match_")
        assert m.status == "suggested"
        assert m.participant_emails == ["ana@example.com", "bo@example.com"]
        assert m.team_size == 2
        assert m.created_at.tzinfo is not None

    def test_ids_are_unique(self):
        assert _match().id != _match().id

    def test_needs_two_participants(self):
        with pytest.raises(ValidationError):
            _match(participant_emails=["a@x.io"])

    def test_duplicate_participants_rejected(self):
        with pytest.raises(ValidationError):
            _match(participant_emails=["a@x.io", "A@x.io"])

    def test_quality_flags(self):
        assert _match(match_score=_score(0.8)).is_high_quality()
        assert not _match(match_score=_score(0.7)).is_high_quality()
        assert _match(match_score=_score(0.6)).is_viable()
        assert not _match(match_score=_score(0.9, availability=0.4)).is_viable()

    def test_has_participant(self):
        assert _match().has_participant("ANA@example.com")
        assert not _match().has_participant("zed@example.com")

    def test_to_json_shape(self):
        record = _match(recommended_roles={"ana@example.com": "Team Lead"}).to_json()
        assert record["participantEmails"] == ["ana@example.com", "bo@example.com"]
        assert record["matchScore"]["skillsCompatibility"] == 0.5
        assert record["matchScore"]["availabilityMatch"] == 0.8
        assert record["reasoning"] == {"strengths": [], "concerns": [], "suggestions": []}
        assert record["recommendedRoles"] == {"ana@example.com": "Team Lead"}
        assert record["status"] == "suggested"
        assert isinstance(record["createdAt"], str)
        assert record["metadata"] == {"teamSize": 2, "isHighQuality": True, "isViable": True}

    def test_from_json_restores_match(self):
        original = _match(challenge_category="climate").with_status("accepted")
        restored = TeamMatch.from_json(original.to_json())
        assert restored == original


class TestStatusTransitions:
    def test_accept(self):
        m = _match()
        accepted = m.with_status("accepted")
        assert accepted.status == "accepted"
        assert m.status == "suggested"
        assert accepted.id == m.id

    def test_accept_twice_is_idempotent(self):
        accepted = _match().with_status("accepted")
        assert accepted.with_status("accepted") is accepted

    def test_terminal_states_reject_changes(self):
        rejected = _match().with_status("rejected")
        with pytest.raises(InvalidMatchStateError):
            rejected.with_status("accepted")
        with pytest.raises(InvalidMatchStateError):
            _match().with_status("expired").with_status("suggested")

    def test_unknown_status(self):
        with pytest.raises(InvalidMatchStateError):
            _match().with_status("archived")

    def test_status_cannot_be_assigned(self):
        with pytest.raises(ValidationError):
            _match().status = "accepted"


class TestMatchmakingOptions:
    def test_defaults(self):
        opts = MatchmakingOptions()
        assert (opts.team_size, opts.min_match_score, opts.max_results) == (4, 0.6, 10)

    def test_team_size_minimum(self):
        with pytest.raises(ValidationError):
            MatchmakingOptions(team_size=1)

    def test_team_size_maximum(self):
        assert MatchmakingOptions(team_size=6).team_size == 6
        with pytest.raises(ValidationError):
            MatchmakingOptions(team_size=7)

    def test_threshold_above_one_allowed(self):
        assert MatchmakingOptions(min_match_score=1.5).min_match_score == 1.5
