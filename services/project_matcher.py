"""Project suggestion engine for ResearchMate.

Scores every applicable catalogue project by how many of its required skills
the resume covers, adds one research project per Scholar interest, and
returns the best few.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from services.errors import InputError
from services.project_catalogue import ProjectTemplate, resolve_templates
from services.schema import ProjectDescriptor, ProjectSuggestion, ResumeProfile, ScholarProfile

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 8
MIN_SCORE = 20
MAX_SCORE = 95
RESEARCH_SCORE = 90

_WHITESPACE_RE = re.compile(r"\s+")


def slugify(text: str) -> str:
    return _WHITESPACE_RE.sub("-", (text or "").strip().lower())


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _skill_overlap(required: Sequence[str], skills: Sequence[str]) -> List[str]:
    """Required skills that some user skill contains (case-insensitive)."""
    lowered = [skill.lower() for skill in skills if skill]
    return [req for req in required if any(req.lower() in skill for skill in lowered)]


def score_project(descriptor: ProjectDescriptor, skills: Sequence[str]) -> Tuple[int, List[str]]:
    """Return ``(match_score, overlap)`` for one project.

    The raw coverage percentage is clamped to [20, 95] and rounded half up, so
    no catalogue project ever reports zero or full confidence. A project with
    no required skills counts as 0% coverage and lands on the floor.
    """
    required = descriptor.required_skills
    overlap = _skill_overlap(required, skills)
    raw = (len(overlap) / len(required)) * 100 if required else 0.0
    clamped = min(MAX_SCORE, max(MIN_SCORE, raw))
    return _round_half_up(clamped), overlap


def research_suggestions(interests: Iterable[str]) -> List[ProjectSuggestion]:
    suggestions: List[ProjectSuggestion] = []
    for index, interest in enumerate(interests):
        slug = slugify(interest)
        suggestions.append(
            ProjectSuggestion(
                id=f"research-{slug}-{index}",
                title=f"{interest} Research Project",
                description=(
                    f"Develop a project specifically focused on {interest} "
                    "based on your research background and publications."
                ),
                category="Research",
                difficulty="Advanced",
                estimated_time="12-16 weeks",
                required_skills=(interest, "Research Methodology", "Academic Writing"),
                tags=("research", "academic", slug),
                match_score=RESEARCH_SCORE,
            )
        )
    return suggestions


def _template_suggestions(
    templates: Sequence[ProjectTemplate], skills: Sequence[str], interests: Sequence[str]
) -> List[ProjectSuggestion]:
    suggestions: List[ProjectSuggestion] = []
    for template in templates:
        if not template.applies(skills, interests):
            continue
        for descriptor in template.projects:
            score, overlap = score_project(descriptor, skills)
            suggestion_id = f"{slugify(descriptor.title)}-{len(suggestions)}"
            suggestions.append(
                ProjectSuggestion.from_descriptor(descriptor, suggestion_id=suggestion_id, match_score=score)
            )
            logger.debug(
                "%s/%s scored %d (overlap=%s)",
                template.key,
                descriptor.title,
                score,
                ", ".join(overlap) or "-",
            )
    return suggestions


def suggest_projects(
    resume: Optional[ResumeProfile] = None,
    scholar: Optional[ScholarProfile] = None,
    *,
    templates: Optional[Iterable[ProjectTemplate]] = None,
    limit: int = MAX_SUGGESTIONS,
) -> List[ProjectSuggestion]:
    """Return up to ``limit`` (never more than 8) suggestions, best first.

    Either profile may be missing, but not both: with nothing to score an
    ``InputError`` is raised. Equal scores keep catalogue order, with the
    research projects after every catalogue project.
    """
    if resume is None and scholar is None:
        raise InputError("No data provided for suggestions")

    skills: List[str] = list(resume.skills) if resume is not None else []
    interests: List[str] = list(scholar.research_interests) if scholar is not None else []

    suggestions = _template_suggestions(resolve_templates(templates), skills, interests)
    if interests:
        suggestions.extend(research_suggestions(interests))

    # list.sort is stable, so ties keep their emission order
    suggestions.sort(key=lambda item: item.match_score, reverse=True)
    ranked = suggestions[: max(0, min(limit, MAX_SUGGESTIONS))]
    logger.info(
        "Ranked %d suggestions (kept %d) from %d skills and %d interests",
        len(suggestions),
        len(ranked),
        len(skills),
        len(interests),
    )
    return ranked


__all__ = [
    "MAX_SUGGESTIONS",
    "MIN_SCORE",
    "MAX_SCORE",
    "RESEARCH_SCORE",
    "slugify",
    "score_project",
    "research_suggestions",
    "suggest_projects",
]
