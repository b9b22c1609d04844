# extractors.py
# --- Line normalisation and single-line field detectors ---

import re
from typing import List, Optional


# ---- Line normalizer ----

def split_lines(text: str) -> List[str]:
    """Return the trimmed, non-empty lines of ``text`` in their original order."""
    if not text:
        return []
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


# ---- Primitive extractors ----

_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_MIN_LENGTH = 10
_PHONE_RE = re.compile(rf"\+?[\d\s\-()]{{{PHONE_MIN_LENGTH},}}")
_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")

MONTH_PATTERN = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\w*"

# Priority order: a full range beats an open range beats a single month/year.
DURATION_PATTERNS = (
    re.compile(r"\b\d{4}\s*-\s*\d{4}\b"),
    re.compile(r"\b\d{4}\s*-\s*present\b", re.IGNORECASE),
    re.compile(rf"\b{MONTH_PATTERN}\s+\d{{4}}", re.IGNORECASE),
)


def extract_email(line: str) -> Optional[str]:
    match = _EMAIL_RE.search(line or "")
    return match.group(0) if match else None


def extract_phone(line: str) -> Optional[str]:
    # the character class admits whitespace, so trim the edges of each run
    # and keep the length floor on what remains
    for match in _PHONE_RE.finditer(line or ""):
        candidate = match.group(0).strip()
        if len(candidate) >= PHONE_MIN_LENGTH:
            return candidate
    return None


def extract_year(text: str) -> Optional[str]:
    match = _YEAR_RE.search(text or "")
    return match.group(0) if match else None


def extract_duration(text: str) -> Optional[str]:
    if not text:
        return None
    for pattern in DURATION_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


__all__ = [
    "split_lines",
    "extract_email",
    "extract_phone",
    "extract_year",
    "extract_duration",
]
