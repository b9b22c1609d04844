"""Position-based reading of education and experience entries.

The section driver in ``nlp.parser`` decides *where* an entry starts; a
layout object decides which fields the neighbouring lines fill. Any object
exposing ``read_education`` and ``read_experience`` with the signatures below
can be passed to ``parse_resume(lines, layout=...)``, so a document-layout
analyzer can later replace the positional guesswork here.

Both methods receive the entry's first line plus ``following``: the raw
``LOOKAHEAD`` lines after it, section headings included. They return the
entry and how many of ``following`` it used. The driver skips used lines,
but never past a section heading.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from nlp.extractors import extract_duration, extract_year
from services.schema import EducationEntry, ExperienceEntry

LOOKAHEAD = 2


class PositionalLayout:
    """Degree/title on the entry line, then institution/company, then description."""

    def read_education(self, line: str, following: Sequence[str]) -> Tuple[EducationEntry, int]:
        institution = following[0] if following else ""
        year = extract_year(line) or extract_year(institution) or ""
        entry = EducationEntry(degree=line, institution=institution, year=year)
        return entry, 1 if institution else 0

    def read_experience(self, line: str, following: Sequence[str]) -> Tuple[ExperienceEntry, int]:
        company = following[0] if len(following) > 0 else ""
        description = following[1] if len(following) > 1 else ""
        duration = (
            extract_duration(line)
            or extract_duration(company)
            or extract_duration(description)
            or ""
        )
        entry = ExperienceEntry(title=line, company=company, duration=duration, description=description)
        return entry, min(len(following), LOOKAHEAD)


__all__ = ["LOOKAHEAD", "PositionalLayout"]
