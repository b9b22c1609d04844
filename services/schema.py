"""Record types shared by the parser, the scraper and the project matcher.

Every record is a frozen dataclass holding tuples, so a profile handed back
by ``nlp.parser.parse_resume`` or ``services.project_matcher.suggest_projects``
cannot be changed after the fact. ``to_dict`` emits the JSON field names used
by the web client (``researchInterests``, ``matchScore`` ...), ``from_dict``
accepts those names or their snake_case spelling.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

DIFFICULTIES = ("Beginner", "Intermediate", "Advanced")
UNKNOWN = "Unknown"
MAX_PUBLICATIONS = 10


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _coerce_count(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 0
    return max(count, 0)


def _text_tuple(values: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    if not values or isinstance(values, str):
        return ()
    items: List[str] = []
    for value in values:
        text = _coerce_text(value)
        if text:
            items.append(text)
    return tuple(items)


def _unique_tuple(values: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    unique: List[str] = []
    seen = set()
    for text in _text_tuple(values):
        lowered = text.lower()
        if lowered in seen:
            continue
        seen.add(lowered)
        unique.append(text)
    return tuple(unique)


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _mappings(values: Any) -> List[Mapping[str, Any]]:
    if not values or isinstance(values, (str, bytes)):
        return []
    return [value for value in values if isinstance(value, Mapping)]


# ---- Resume ----

@dataclass(frozen=True)
class EducationEntry:
    degree: str = ""
    institution: str = ""
    year: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"degree": self.degree, "institution": self.institution, "year": self.year}


@dataclass(frozen=True)
class ExperienceEntry:
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "company": self.company,
            "duration": self.duration,
            "description": self.description,
        }


@dataclass(frozen=True)
class ResumeProfile:
    """Structured view of a resume; empty strings/tuples mean "not found"."""

    name: str = ""
    email: str = ""
    phone: str = ""
    skills: Tuple[str, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "skills": list(self.skills),
            "education": [entry.to_dict() for entry in self.education],
            "experience": [entry.to_dict() for entry in self.experience],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResumeProfile":
        education = tuple(
            EducationEntry(
                degree=_coerce_text(item.get("degree")),
                institution=_coerce_text(item.get("institution")),
                year=_coerce_text(item.get("year")),
            )
            for item in _mappings(data.get("education"))
        )
        experience = tuple(
            ExperienceEntry(
                title=_coerce_text(item.get("title")),
                company=_coerce_text(item.get("company")),
                duration=_coerce_text(item.get("duration")),
                description=_coerce_text(item.get("description")),
            )
            for item in _mappings(data.get("experience"))
        )
        return cls(
            name=_coerce_text(data.get("name")),
            email=_coerce_text(data.get("email")),
            phone=_coerce_text(data.get("phone")),
            skills=_unique_tuple(data.get("skills")),
            education=education,
            experience=experience,
        )


# ---- Scholar ----

@dataclass(frozen=True)
class Publication:
    title: str
    authors: str = ""
    venue: str = ""
    year: str = ""
    citations: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "authors": self.authors,
            "venue": self.venue,
            "year": self.year,
            "citations": self.citations,
        }


@dataclass(frozen=True)
class ScholarProfile:
    name: str = UNKNOWN
    affiliation: str = UNKNOWN
    research_interests: Tuple[str, ...] = ()
    publications: Tuple[Publication, ...] = ()
    total_citations: int = 0
    h_index: int = 0
    i10_index: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "affiliation": self.affiliation,
            "researchInterests": list(self.research_interests),
            "publications": [pub.to_dict() for pub in self.publications],
            "totalCitations": self.total_citations,
            "hIndex": self.h_index,
            "i10Index": self.i10_index,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScholarProfile":
        return build_scholar_profile(
            name=_pick(data, "name"),
            affiliation=_pick(data, "affiliation"),
            research_interests=_pick(data, "researchInterests", "research_interests"),
            publications=_mappings(_pick(data, "publications")),
            total_citations=_pick(data, "totalCitations", "total_citations"),
            h_index=_pick(data, "hIndex", "h_index"),
            i10_index=_pick(data, "i10Index", "i10_index"),
        )


def build_publication(
    *,
    title: Any,
    authors: Any = "",
    venue: Any = "",
    year: Any = "",
    citations: Any = 0,
) -> Publication:
    return Publication(
        title=_coerce_text(title),
        authors=_coerce_text(authors),
        venue=_coerce_text(venue),
        year=_coerce_text(year),
        citations=_coerce_count(citations),
    )


def build_scholar_profile(
    *,
    name: Any = None,
    affiliation: Any = None,
    research_interests: Optional[Iterable[Any]] = None,
    publications: Optional[Iterable[Any]] = None,
    total_citations: Any = 0,
    h_index: Any = 0,
    i10_index: Any = 0,
) -> ScholarProfile:
    """Return a ScholarProfile with sentinels filled in and counts clamped."""

    pubs: List[Publication] = []
    for item in publications or []:
        if isinstance(item, Publication):
            pub = item
        elif isinstance(item, Mapping):
            pub = build_publication(
                title=item.get("title"),
                authors=item.get("authors"),
                venue=item.get("venue"),
                year=item.get("year"),
                citations=item.get("citations"),
            )
        else:
            continue
        if pub.title:
            pubs.append(pub)

    return ScholarProfile(
        name=_coerce_text(name) or UNKNOWN,
        affiliation=_coerce_text(affiliation) or UNKNOWN,
        research_interests=_text_tuple(research_interests),
        publications=tuple(pubs[:MAX_PUBLICATIONS]),
        total_citations=_coerce_count(total_citations),
        h_index=_coerce_count(h_index),
        i10_index=_coerce_count(i10_index),
    )


# ---- Projects ----

@dataclass(frozen=True)
class ProjectDescriptor:
    title: str
    description: str
    category: str
    difficulty: str
    estimated_time: str
    required_skills: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(
                f"Unknown difficulty {self.difficulty!r} for project {self.title!r}; "
                f"expected one of {', '.join(DIFFICULTIES)}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectDescriptor":
        return cls(
            title=_coerce_text(data.get("title")),
            description=_coerce_text(data.get("description")),
            category=_coerce_text(data.get("category")),
            difficulty=_coerce_text(data.get("difficulty")),
            estimated_time=_coerce_text(_pick(data, "estimatedTime", "estimated_time")),
            required_skills=_text_tuple(_pick(data, "requiredSkills", "required_skills")),
            tags=_text_tuple(data.get("tags")),
        )


@dataclass(frozen=True)
class ProjectSuggestion:
    id: str
    title: str
    description: str
    category: str
    difficulty: str
    estimated_time: str
    required_skills: Tuple[str, ...]
    tags: Tuple[str, ...]
    match_score: int

    @classmethod
    def from_descriptor(
        cls, descriptor: ProjectDescriptor, *, suggestion_id: str, match_score: int
    ) -> "ProjectSuggestion":
        return cls(
            id=suggestion_id,
            title=descriptor.title,
            description=descriptor.description,
            category=descriptor.category,
            difficulty=descriptor.difficulty,
            estimated_time=descriptor.estimated_time,
            required_skills=descriptor.required_skills,
            tags=descriptor.tags,
            match_score=match_score,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "difficulty": self.difficulty,
            "estimatedTime": self.estimated_time,
            "requiredSkills": list(self.required_skills),
            "tags": list(self.tags),
            "matchScore": self.match_score,
        }


__all__ = [
    "DIFFICULTIES",
    "UNKNOWN",
    "MAX_PUBLICATIONS",
    "EducationEntry",
    "ExperienceEntry",
    "ResumeProfile",
    "Publication",
    "ScholarProfile",
    "build_publication",
    "build_scholar_profile",
    "ProjectDescriptor",
    "ProjectSuggestion",
]
