"""Tests for hackmatch/engine/reasoning.py."""

from hackmatch.engine.reasoning import (
    DEFAULT_ROLE,
    TEAM_LEAD,
    assign_roles,
    common_languages,
    generate_reasoning,
    skill_role,
)
from hackmatch.match_models import MatchReasoning
from hackmatch.profile_models import ParticipantProfile

KICKOFF = "Schedule an initial team meeting to align on project goals"
SKILLS_MATRIX = "Create a skills matrix to identify complementary expertise"
MENTORING = "Pair less experienced members with a mentor from the team"


def _p(
    email: str,
    skills: list[str] | None = None,
    level: str = "intermediate",
    work_style: str = "contributor",
    age: int = 25,
    languages: list[str] | None = None,
) -> ParticipantProfile:
    return ParticipantProfile(
        email=email,
        full_name=email.split("@")[0],
        skills=skills or [],
        expertise_level=level,
        age=age,
        languages=languages if languages is not None else ["English"],
        preferences={"work_style": work_style},
    )


class TestStrengths:
    def test_diverse_skills(self):
        team = [_p("a@x.io", ["Python", "SQL"]), _p("b@x.io", ["React", "Figma"])]
        reasoning = generate_reasoning(team)
        assert isinstance(reasoning, MatchReasoning)
        assert "Diverse skill set covering multiple areas" in reasoning.strengths

    def test_narrow_skills_no_diversity_strength(self):
        team = [_p("a@x.io", ["Python"]), _p("b@x.io", ["Python"])]
        assert not any("Diverse" in s for s in generate_reasoning(team).strengths)

    def test_experience_mix(self):
        team = [_p("a@x.io", level="beginner"), _p("b@x.io", level="advanced")]
        assert any("experience levels" in s for s in generate_reasoning(team).strengths)

    def test_common_languages_listed(self):
        team = [
            _p("a@x.io", languages=["English", "Portuguese"]),
            _p("b@x.io", languages=["portuguese", "english"]),
        ]
        assert common_languages(team) == ["English", "Portuguese"]
        assert "Common language(s): English, Portuguese" in generate_reasoning(team).strengths

    def test_team_type_strength(self):
        team = [_p("a@x.io"), _p("b@x.io")]
        assert any("All-female" in s for s in generate_reasoning(team, "female-only").strengths)


class TestConcerns:
    def test_wide_level_gap(self):
        team = [_p("a@x.io", ["Python"], level="beginner"), _p("b@x.io", ["Python"], level="expert")]
        concerns = generate_reasoning(team).concerns
        assert any("experience levels" in c for c in concerns)

    def test_no_overlapping_skills(self):
        team = [_p("a@x.io", ["Python"]), _p("b@x.io", ["Figma"])]
        assert "No overlapping skills may require clear role definition" in generate_reasoning(team).concerns

    def test_large_age_gap(self):
        team = [_p("a@x.io", ["Python"], age=19), _p("b@x.io", ["Python"], age=40)]
        assert any("age gap" in c for c in generate_reasoning(team).concerns)

    def test_no_concerns_for_aligned_team(self):
        team = [_p("a@x.io", ["Python"]), _p("b@x.io", ["Python"])]
        assert generate_reasoning(team).concerns == []


class TestSuggestions:
    def test_always_kickoff_and_matrix(self):
        suggestions = generate_reasoning([_p("a@x.io", ["Go"]), _p("b@x.io", ["Go"])]).suggestions
        assert suggestions[:2] == [KICKOFF, SKILLS_MATRIX]

    def test_mentoring_when_gap_above_one(self):
        team = [_p("a@x.io", ["Go"], level="beginner"), _p("b@x.io", ["Go"], level="advanced")]
        assert MENTORING in generate_reasoning(team).suggestions

    def test_no_mentoring_for_adjacent_levels(self):
        team = [_p("a@x.io", ["Go"], level="beginner"), _p("b@x.io", ["Go"], level="intermediate")]
        assert MENTORING not in generate_reasoning(team).suggestions

    def test_concerns_add_communication_suggestions(self):
        team = [_p("a@x.io", ["Python"]), _p("b@x.io", ["Figma"])]
        assert "Establish clear communication channels" in generate_reasoning(team).suggestions

    def test_deterministic(self):
        team = [_p("a@x.io", ["Python"], level="expert"), _p("b@x.io", ["Figma"], level="beginner")]
        assert generate_reasoning(team) == generate_reasoning(team)


class TestRoles:
    def test_single_team_lead_is_most_experienced_leader(self):
        team = [
            _p("junior@x.io", ["React"], level="beginner", work_style="leader"),
            _p("senior@x.io", ["Python"], level="expert", work_style="leader"),
            _p("dev@x.io", ["Python"]),
        ]
        roles = assign_roles(team)
        assert roles["senior@x.io"] == TEAM_LEAD
        assert roles["junior@x.io"] == "Frontend Developer"
        assert list(roles.values()).count(TEAM_LEAD) == 1

    def test_expert_facilitator_can_lead(self):
        team = [_p("f@x.io", level="expert", work_style="facilitator"), _p("b@x.io")]
        assert assign_roles(team)["f@x.io"] == TEAM_LEAD

    def test_non_expert_facilitator_cannot_lead(self):
        team = [_p("f@x.io", level="advanced", work_style="facilitator"), _p("b@x.io")]
        assert TEAM_LEAD not in assign_roles(team).values()

    def test_skill_categories(self):
        assert skill_role(_p("a@x.io", ["React"])) == "Frontend Developer"
        assert skill_role(_p("a@x.io", ["Django"])) == "Backend Developer"
        assert skill_role(_p("a@x.io", ["Machine Learning"])) == "Data Specialist"
        assert skill_role(_p("a@x.io", ["UI/UX Design"])) == "Designer"
        assert skill_role(_p("a@x.io", ["Public Speaking"])) == DEFAULT_ROLE

    def test_every_member_gets_a_role(self):
        team = [_p("a@x.io"), _p("b@x.io", ["Figma"])]
        roles = assign_roles(team)
        assert roles == {"a@x.io": DEFAULT_ROLE, "b@x.io": "Designer"}
