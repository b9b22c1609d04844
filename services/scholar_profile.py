"""Fetch a Google Scholar profile page and turn it into a ScholarProfile.

Usage
-----

    profile = fetch_scholar_profile("https://scholar.google.com/citations?user=XXXX")

The scraper only reads the public profile page: header (name, affiliation,
interests), the citation metrics table and the first page of publications.
Network trouble surfaces as ``FetchError``; a page that has none of the
profile blocks surfaces as ``ParseError``.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Dict, List, Optional

import requests
from bs4 import BeautifulSoup

from services.errors import FetchError, InputError, ParseError
from services.schema import MAX_PUBLICATIONS, ScholarProfile, build_scholar_profile

logger = logging.getLogger(__name__)

SCHOLAR_HOST = "scholar.google.com"
DEFAULT_TIMEOUT = float(os.getenv("RESEARCHMATE_SCHOLAR_TIMEOUT", "15"))
USER_AGENT = os.getenv(
    "RESEARCHMATE_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
)

_NON_DIGIT_RE = re.compile(r"[^\d]")


def validate_profile_url(url: str) -> str:
    url = (url or "").strip()
    if not url:
        raise InputError("Profile URL is required")
    if SCHOLAR_HOST not in url:
        raise InputError("Invalid Google Scholar URL")
    return url


def _text(node) -> str:
    if node is None:
        return ""
    return " ".join(node.get_text(" ").split())


def _count(text: str) -> int:
    digits = _NON_DIGIT_RE.sub("", text or "")
    return int(digits) if digits else 0


def _metric(soup: BeautifulSoup, row: int) -> int:
    cell = soup.select_one(f"#gsc_rsb_st tbody tr:nth-of-type({row}) td:nth-of-type(2)")
    return _count(_text(cell))


def _publications(soup: BeautifulSoup) -> List[Dict[str, object]]:
    publications: List[Dict[str, object]] = []
    for row in soup.select("#gsc_a_b .gsc_a_tr")[:MAX_PUBLICATIONS]:
        title_node = row.select_one(".gsc_a_at")
        title = _text(title_node)
        if not title:
            continue
        authors_node = title_node.find_next_sibling()
        venue_node = authors_node.find_next_sibling() if authors_node is not None else None
        publications.append(
            {
                "title": title,
                "authors": _text(authors_node),
                "venue": _text(venue_node),
                "year": _text(row.select_one(".gsc_a_y")),
                "citations": _count(_text(row.select_one(".gsc_a_c a"))),
            }
        )
    return publications


def parse_scholar_html(html: str) -> ScholarProfile:
    """Extract a ScholarProfile from the markup of a Scholar profile page."""

    soup = BeautifulSoup(html or "", "lxml")
    if not any(soup.select_one(selector) for selector in ("#gsc_prf_in", "#gsc_rsb_st", "#gsc_a_b")):
        raise ParseError("Page does not look like a Google Scholar profile")

    interests = [_text(node) for node in soup.select("#gsc_prf_int .gsc_prf_inta")]
    profile = build_scholar_profile(
        name=_text(soup.select_one("#gsc_prf_in")),
        affiliation=_text(soup.select_one("#gsc_prf_inw + .gsc_prf_il")),
        research_interests=[interest for interest in interests if interest],
        publications=_publications(soup),
        total_citations=_metric(soup, 1),
        h_index=_metric(soup, 2),
        i10_index=_metric(soup, 3),
    )
    logger.debug(
        "Parsed Scholar profile %s: %d interests, %d publications",
        profile.name,
        len(profile.research_interests),
        len(profile.publications),
    )
    return profile


def fetch_scholar_profile(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ScholarProfile:
    url = validate_profile_url(url)
    client = session or requests
    try:
        response = client.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("Failed to fetch Scholar profile %s: %s", url, exc)
        raise FetchError(f"Failed to fetch Scholar profile: {exc}") from exc

    logger.info("Fetched Scholar profile %s (%d bytes)", url, len(response.text))
    return parse_scholar_html(response.text)


__all__ = [
    "validate_profile_url",
    "parse_scholar_html",
    "fetch_scholar_profile",
]
