# parser.py
# --- Structured resume parsing from extracted text lines ---

from enum import Enum
from typing import List, Optional, Sequence, Tuple

from nlp.extractors import extract_email, extract_phone, split_lines
from nlp.layout import LOOKAHEAD, PositionalLayout
from services.schema import EducationEntry, ExperienceEntry, ResumeProfile


# ---- Debug utilities ----

_DEBUG = False


def set_debug(enabled: bool) -> None:
    """Toggle step-by-step debug output for this module."""
    global _DEBUG
    _DEBUG = enabled


def _debug(step: str, detail: Optional[str] = None) -> None:
    """Emit a debug line when debugging is enabled."""
    if not _DEBUG:
        return
    if detail:
        print(f"[parser] {step}: {detail}")
    else:
        print(f"[parser] {step}")


# ---- Contact details ----

def extract_contact(lines: Sequence[str]) -> Tuple[str, str]:
    """Return ``(email, phone)`` taken from the first line each one appears on."""
    email = ""
    phone = ""
    for line in lines:
        if not email:
            email = extract_email(line) or ""
        if not phone:
            phone = extract_phone(line) or ""
        if email and phone:
            break
    _debug("extract_contact", f"email={email or '-'}, phone={phone or '-'}")
    return email, phone


# ---- Skills extraction ----

SKILL_KEYWORDS = [
    "JavaScript",
    "Python",
    "Java",
    "React",
    "Node.js",
    "Machine Learning",
    "Data Science",
    "AI",
    "TypeScript",
    "SQL",
    "AWS",
    "Docker",
    "Git",
]


def extract_skills(lines: Sequence[str], keywords: Optional[Sequence[str]] = None) -> List[str]:
    """Case-insensitive substring scan; a keyword is reported once, when first seen.

    Plain containment is deliberate and coarse: "JavaScript" also yields
    "Java", and "AI" fires inside ordinary words.
    """
    keywords = SKILL_KEYWORDS if keywords is None else keywords
    found: List[str] = []
    for line in lines:
        low = line.lower()
        for skill in keywords:
            if skill in found:
                continue
            if skill.lower() in low:
                found.append(skill)
    _debug("extract_skills", f"found {len(found)}: {', '.join(found) or '-'}")
    return found


# ---- Sectionizer (state machine) ----

class Section(Enum):
    NONE = "none"
    EDUCATION = "education"
    EXPERIENCE = "experience"


EDUCATION_MARKERS = ("education", "academic")
EXPERIENCE_MARKERS = ("experience", "work", "employment")

MIN_ENTRY_LENGTH = 10
MAX_ENTRIES = 5


def classify_marker(line: str) -> Optional[Section]:
    """Return the section a heading line switches to, or None for data lines."""
    low = line.lower()
    if any(marker in low for marker in EDUCATION_MARKERS):
        return Section.EDUCATION
    if any(marker in low for marker in EXPERIENCE_MARKERS):
        return Section.EXPERIENCE
    return None


def _consumable(following: Sequence[str]) -> int:
    # follow-on lines up to the next marker line may be skipped
    count = 0
    for line in following:
        if classify_marker(line) is not None:
            break
        count += 1
    return count


def extract_sections(
    lines: Sequence[str], layout=None
) -> Tuple[List[EducationEntry], List[ExperienceEntry]]:
    layout = layout or PositionalLayout()
    education: List[EducationEntry] = []
    experience: List[ExperienceEntry] = []
    state = Section.NONE

    index = 0
    while index < len(lines):
        line = lines[index]
        marker = classify_marker(line)
        if marker is not None:
            if marker is not state:
                _debug("section", f"{state.value} -> {marker.value} at line {index}")
            state = marker
            index += 1
            continue

        if state is Section.NONE or len(line) <= MIN_ENTRY_LENGTH:
            index += 1
            continue

        following = lines[index + 1:index + 1 + LOOKAHEAD]
        if state is Section.EDUCATION:
            entry, used = layout.read_education(line, following)
            education.append(entry)
        else:
            entry, used = layout.read_experience(line, following)
            experience.append(entry)
        index += 1 + min(used, _consumable(following))

    _debug("extract_sections", f"education={len(education)}, experience={len(experience)}")
    return education[:MAX_ENTRIES], experience[:MAX_ENTRIES]


# ---- Master parse ----

def parse_resume(lines: Sequence[str], layout=None) -> ResumeProfile:
    """Build a ResumeProfile from normalised lines. Never raises on odd input."""
    lines = list(lines or [])
    _debug("parse", f"start ({len(lines)} lines)")

    name = lines[0] if lines else ""
    email, phone = extract_contact(lines)
    skills = extract_skills(lines)
    education, experience = extract_sections(lines, layout=layout)

    _debug("parse", "complete")
    return ResumeProfile(
        name=name,
        email=email,
        phone=phone,
        skills=tuple(skills),
        education=tuple(education),
        experience=tuple(experience),
    )


def parse_resume_text(raw_text: str, layout=None) -> ResumeProfile:
    lines = split_lines(raw_text)
    _debug("lines", f"kept {len(lines)} lines")
    return parse_resume(lines, layout=layout)
