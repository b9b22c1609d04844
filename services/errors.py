"""Error kinds raised across ResearchMate.

The parser never raises; everything here belongs either to the scoring
engine's input check or to the I/O collaborators around the core.
"""

from __future__ import annotations


class InputError(ValueError):
    """Caller supplied nothing usable (no data to score, bad upload, bad URL)."""


class ExtractionError(RuntimeError):
    """A PDF/DOCX/TXT payload could not be turned into text."""


class FetchError(RuntimeError):
    """The Scholar profile page could not be downloaded."""


class ParseError(RuntimeError):
    """The downloaded page does not look like a Scholar profile."""


__all__ = ["InputError", "ExtractionError", "FetchError", "ParseError"]
