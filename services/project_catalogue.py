"""Static project template catalogue for the suggestion engine.

Templates are plain records so tests (and an optional JSON override file)
can enumerate them without touching the scoring code. A template applies when
it is marked ``always``, when any resume skill is exactly one of ``skills_any``,
or when any research interest contains (case-insensitively) one of
``interests_containing``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from services.schema import ProjectDescriptor

logger = logging.getLogger(__name__)

TEMPLATES_FILE = os.getenv("RESEARCHMATE_TEMPLATES_FILE", "")

Predicate = Callable[[Sequence[str], Sequence[str]], bool]


PROJECT_TEMPLATES: List[Dict[str, Any]] = [
    {
        "key": "web-development",
        "skills_any": ["JavaScript", "React", "TypeScript", "Node.js"],
        "projects": [
            {
                "title": "E-Learning Platform",
                "description": "Build a comprehensive online learning platform with course management, video streaming, and progress tracking.",
                "category": "Web Development",
                "difficulty": "Intermediate",
                "estimatedTime": "8-12 weeks",
                "requiredSkills": ["React", "Node.js", "JavaScript", "SQL"],
                "tags": ["education", "full-stack", "responsive-design"],
            },
            {
                "title": "Real-time Collaboration Tool",
                "description": "Create a real-time collaborative workspace with document editing, chat, and video calls.",
                "category": "Web Development",
                "difficulty": "Advanced",
                "estimatedTime": "12-16 weeks",
                "requiredSkills": ["React", "Node.js", "WebSocket", "TypeScript"],
                "tags": ["real-time", "collaboration", "websockets"],
            },
        ],
    },
    {
        "key": "machine-learning",
        "skills_any": ["Python", "Machine Learning", "AI", "Data Science"],
        "interests_containing": ["machine learning", "ai"],
        "projects": [
            {
                "title": "Academic Paper Recommendation System",
                "description": "Develop an AI system that recommends relevant academic papers based on research interests and citation patterns.",
                "category": "Machine Learning",
                "difficulty": "Advanced",
                "estimatedTime": "10-14 weeks",
                "requiredSkills": ["Python", "Machine Learning", "NLP", "Data Science"],
                "tags": ["recommendation-system", "nlp", "academic-research"],
            },
            {
                "title": "Research Trend Analysis Tool",
                "description": "Create a tool that analyzes trends in academic research using publication data and citation networks.",
                "category": "Data Science",
                "difficulty": "Intermediate",
                "estimatedTime": "6-10 weeks",
                "requiredSkills": ["Python", "Data Science", "Machine Learning"],
                "tags": ["data-analysis", "visualization", "research-trends"],
            },
        ],
    },
    {
        "key": "cloud-devops",
        "skills_any": ["AWS", "Docker", "Git"],
        "projects": [
            {
                "title": "Automated Research Environment",
                "description": "Build a cloud-based platform for researchers with automated environment setup and collaboration tools.",
                "category": "Cloud Computing",
                "difficulty": "Advanced",
                "estimatedTime": "8-12 weeks",
                "requiredSkills": ["AWS", "Docker", "Git", "CI/CD"],
                "tags": ["cloud", "automation", "research-tools"],
            },
        ],
    },
    {
        "key": "database",
        "skills_any": ["SQL", "Database"],
        "projects": [
            {
                "title": "Academic Publication Database",
                "description": "Design and implement a comprehensive database system for managing academic publications and citations.",
                "category": "Database",
                "difficulty": "Intermediate",
                "estimatedTime": "6-8 weeks",
                "requiredSkills": ["SQL", "Database Design", "Data Modeling"],
                "tags": ["database", "academic", "data-management"],
            },
        ],
    },
    {
        "key": "general",
        "always": True,
        "projects": [
            {
                "title": "Personal Research Portfolio",
                "description": "Create a professional website showcasing your research work, publications, and academic achievements.",
                "category": "Web Development",
                "difficulty": "Beginner",
                "estimatedTime": "3-5 weeks",
                "requiredSkills": ["HTML", "CSS", "JavaScript"],
                "tags": ["portfolio", "personal-branding", "responsive"],
            },
            {
                "title": "Citation Network Visualizer",
                "description": "Build an interactive tool to visualize citation networks and research collaboration patterns.",
                "category": "Data Visualization",
                "difficulty": "Intermediate",
                "estimatedTime": "6-8 weeks",
                "requiredSkills": ["JavaScript", "D3.js", "Data Visualization"],
                "tags": ["visualization", "network-analysis", "citations"],
            },
            {
                "title": "Research Collaboration Platform",
                "description": "Develop a platform connecting researchers with similar interests for potential collaborations.",
                "category": "Web Development",
                "difficulty": "Advanced",
                "estimatedTime": "10-12 weeks",
                "requiredSkills": ["Full-stack Development", "Database", "API Development"],
                "tags": ["collaboration", "networking", "research"],
            },
        ],
    },
]


@dataclass(frozen=True)
class ProjectTemplate:
    key: str
    predicate: Predicate
    projects: Tuple[ProjectDescriptor, ...]
    always: bool = False

    def applies(self, skills: Sequence[str], interests: Sequence[str]) -> bool:
        return bool(self.predicate(skills, interests))


def _make_predicate(always: bool, skills_any: Iterable[str], interests_containing: Iterable[str]) -> Predicate:
    skill_names = frozenset(skill for skill in skills_any if skill)
    interest_terms = tuple(term.strip().lower() for term in interests_containing if term and term.strip())

    def predicate(skills: Sequence[str], interests: Sequence[str]) -> bool:
        if always:
            return True
        if any(skill in skill_names for skill in skills):
            return True
        return any(term in (interest or "").lower() for interest in interests for term in interest_terms)

    return predicate


def build_template(record: Mapping[str, Any]) -> ProjectTemplate:
    """Turn one catalogue record into a ProjectTemplate, validating its projects."""

    key = str(record.get("key") or "").strip()
    if not key:
        raise ValueError("Project template is missing a 'key'")
    projects = tuple(ProjectDescriptor.from_dict(item) for item in record.get("projects") or [])
    if not projects:
        raise ValueError(f"Project template {key!r} has no projects")
    for project in projects:
        if not project.title:
            raise ValueError(f"Project template {key!r} has a project without a title")

    always = bool(record.get("always", False))
    predicate = _make_predicate(
        always,
        record.get("skills_any") or [],
        record.get("interests_containing") or [],
    )
    return ProjectTemplate(key=key, predicate=predicate, projects=projects, always=always)


def build_catalogue(records: Iterable[Mapping[str, Any]]) -> Tuple[ProjectTemplate, ...]:
    templates = tuple(build_template(record) for record in records)
    if not any(template.always for template in templates):
        raise ValueError("Project catalogue needs at least one template marked 'always'")
    return templates


def load_templates(path: Union[str, Path]) -> Tuple[ProjectTemplate, ...]:
    """Load a catalogue from a JSON file holding a list of template records."""

    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of templates")
    templates = build_catalogue(item for item in data if isinstance(item, dict))
    logger.info("Loaded %d project templates from %s", len(templates), path)
    return templates


@lru_cache(maxsize=1)
def default_templates() -> Tuple[ProjectTemplate, ...]:
    if TEMPLATES_FILE:
        return load_templates(TEMPLATES_FILE)
    return build_catalogue(PROJECT_TEMPLATES)


def resolve_templates(templates: Optional[Iterable[ProjectTemplate]] = None) -> Tuple[ProjectTemplate, ...]:
    if templates is None:
        return default_templates()
    return tuple(templates)


__all__ = [
    "PROJECT_TEMPLATES",
    "ProjectTemplate",
    "build_template",
    "build_catalogue",
    "load_templates",
    "default_templates",
    "resolve_templates",
]
