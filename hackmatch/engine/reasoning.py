"""Narrative reasoning and role labels for a proposed team.

Deterministic and side-effect free: the same members always produce the
same strengths, concerns, suggestions and roles.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
import re

from hackmatch.match_models import MatchReasoning, TeamType
from hackmatch.profile_models import ParticipantProfile


WIDE_LEVEL_GAP = 3
MENTORING_LEVEL_GAP = 1
LARGE_AGE_GAP = 15

TEAM_LEAD = "Team Lead"
DEFAULT_ROLE = "Team Member"

# Checked in order; the first category with a matching skill wins.
ROLE_KEYWORDS: list[tuple[str, frozenset[str]]] = [
    ("Frontend Developer", frozenset({
        "frontend", "front-end", "react", "react.js", "vue", "vue.js", "angular",
        "svelte", "javascript", "typescript", "html", "css", "next.js", "tailwind",
    })),
    ("Backend Developer", frozenset({
        "backend", "back-end", "python", "java", "node", "node.js", "nodejs", "go",
        "golang", "django", "flask", "fastapi", "spring", "ruby", "php", "c#",
        ".net", "sql", "postgresql", "mysql", "mongodb", "api", "rest",
    })),
    ("Data Specialist", frozenset({
        "data", "data science", "data analysis", "machine learning", "ml", "ai",
        "pandas", "numpy", "tensorflow", "pytorch", "statistics", "r", "excel",
        "tableau", "power bi", "analytics",
    })),
    ("Designer", frozenset({
        "design", "designer", "ui", "ux", "ui/ux", "figma", "sketch", "photoshop",
        "illustrator", "prototyping",
    })),
]

_TOKEN_SPLIT = re.compile(r"[\s/,;|]+")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def common_languages(profiles: Sequence[ParticipantProfile]) -> list[str]:
    """Languages spoken by every member, spelled as the first member lists them."""
    if not profiles:
        return []
    shared = set.intersection(*(p.language_set() for p in profiles))
    seen: set[str] = set()
    result: list[str] = []
    for lang in profiles[0].languages:
        key = lang.strip().lower()
        if key in shared and key not in seen:
            seen.add(key)
            result.append(lang.strip())
    return result


def level_gap(profiles: Sequence[ParticipantProfile]) -> int:
    if not profiles:
        return 0
    ranks = [p.expertise_rank for p in profiles]
    return max(ranks) - min(ranks)


def has_shared_skill(profiles: Sequence[ParticipantProfile]) -> bool:
    """Whether any skill is held by at least two members."""
    counts: Counter[str] = Counter()
    for p in profiles:
        counts.update(p.skill_set())
    return any(c > 1 for c in counts.values())


# ---------------------------------------------------------------------------
# Reasoning
# ---------------------------------------------------------------------------
def generate_reasoning(
    profiles: Sequence[ParticipantProfile],
    team_type: TeamType | None = None,
) -> MatchReasoning:
    """Build strengths, concerns and suggestions for *profiles*."""
    strengths = _strengths(profiles, team_type)
    concerns = _concerns(profiles)
    suggestions = _suggestions(profiles, concerns, team_type)
    return MatchReasoning(strengths=strengths, concerns=concerns, suggestions=suggestions)


def _strengths(profiles: Sequence[ParticipantProfile], team_type: TeamType | None) -> list[str]:
    strengths: list[str] = []

    unique_skills = set().union(*(p.skill_set() for p in profiles)) if profiles else set()
    if len(unique_skills) >= 2 * len(profiles) > 0:
        strengths.append("Diverse skill set covering multiple areas")

    if len({p.expertise_level for p in profiles}) > 1:
        strengths.append("Good balance of experience levels for knowledge sharing")

    languages = common_languages(profiles)
    if languages:
        strengths.append(f"Common language(s): {', '.join(languages)}")

    if team_type == "female-only":
        strengths.append("All-female team promoting gender diversity and inclusion")
    elif team_type == "minors-only":
        strengths.append("Age-appropriate team for a collaborative learning environment")

    return strengths


def _concerns(profiles: Sequence[ParticipantProfile]) -> list[str]:
    concerns: list[str] = []
    if len(profiles) < 2:
        return concerns

    if level_gap(profiles) >= WIDE_LEVEL_GAP:
        concerns.append("Wide gap between experience levels may slow down shared decisions")

    if not has_shared_skill(profiles):
        concerns.append("No overlapping skills may require clear role definition")

    ages = [p.age for p in profiles]
    if max(ages) - min(ages) > LARGE_AGE_GAP:
        concerns.append("Large age gap may require additional coordination")

    return concerns


def _suggestions(
    profiles: Sequence[ParticipantProfile],
    concerns: list[str],
    team_type: TeamType | None,
) -> list[str]:
    suggestions = [
        "Schedule an initial team meeting to align on project goals",
        "Create a skills matrix to identify complementary expertise",
    ]

    if level_gap(profiles) > MENTORING_LEVEL_GAP:
        suggestions.append("Pair less experienced members with a mentor from the team")

    suggestions.append("Discuss availability and time commitment expectations early")

    if concerns:
        suggestions.append("Establish clear communication channels")
        suggestions.append("Plan regular check-ins to keep everyone aligned")

    if team_type == "female-only":
        suggestions.append("Consider mentorship opportunities within the team")
    elif team_type == "mixed-adults":
        suggestions.append("Balance workload based on experience levels")
    elif team_type == "minors-only":
        suggestions.append("Establish clear communication channels with mentors")

    return suggestions


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------
def _can_lead(profile: ParticipantProfile) -> bool:
    style = profile.preferences.work_style
    return style == "leader" or (style == "facilitator" and profile.expertise_level == "expert")


def skill_role(profile: ParticipantProfile) -> str:
    """Role from the first keyword category matching one of the skills."""
    skills = profile.skill_set()
    tokens = {t for s in skills for t in _TOKEN_SPLIT.split(s) if t}
    for role, keywords in ROLE_KEYWORDS:
        if skills & keywords or tokens & keywords:
            return role
    return DEFAULT_ROLE


def assign_roles(profiles: Sequence[ParticipantProfile]) -> dict[str, str]:
    """Map each member's email to a role label.

    The most experienced member able to lead becomes the only Team Lead;
    everyone else gets a skill-based role or the default.
    """
    leaders = [p for p in profiles if _can_lead(p)]
    # max() keeps the first of equally experienced members
    lead = max(leaders, key=lambda p: p.experience_score(), default=None)

    roles: dict[str, str] = {}
    for p in profiles:
        roles[p.email] = TEAM_LEAD if lead is not None and p.email == lead.email else skill_role(p)
    return roles
