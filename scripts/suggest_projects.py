"""Parse a resume and/or a Scholar profile and print ranked project suggestions.

Usage
-----

    python scripts/suggest_projects.py \
        --resume path/to/resume.pdf \
        --scholar-url "https://scholar.google.com/citations?user=XXXX" \
        --output suggestions.json

Either input may be omitted, but not both. ``--scholar-json`` reads a profile
previously saved by this script (or any JSON with the same field names)
instead of hitting the network.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from data_loader import load_resume  # noqa: E402
from nlp.parser import parse_resume_text  # noqa: E402
from services.errors import ExtractionError, FetchError, InputError, ParseError  # noqa: E402
from services.project_matcher import MAX_SUGGESTIONS, suggest_projects  # noqa: E402
from services.scholar_profile import fetch_scholar_profile  # noqa: E402
from services.schema import ResumeProfile, ScholarProfile  # noqa: E402


def _load_scholar(args: argparse.Namespace) -> Optional[ScholarProfile]:
    if args.scholar_json:
        data = json.loads(Path(args.scholar_json).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise InputError(f"{args.scholar_json} does not hold a profile object")
        return ScholarProfile.from_dict(data)
    if args.scholar_url:
        return fetch_scholar_profile(args.scholar_url)
    return None


def build_report(args: argparse.Namespace) -> Dict[str, Any]:
    resume: Optional[ResumeProfile] = None
    if args.resume:
        resume = parse_resume_text(load_resume(args.resume))
    scholar = _load_scholar(args)

    suggestions = suggest_projects(resume, scholar, limit=args.limit)
    return {
        "resume": resume.to_dict() if resume is not None else None,
        "scholar": scholar.to_dict() if scholar is not None else None,
        "suggestions": [item.to_dict() for item in suggestions],
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Suggest projects from a resume and/or Scholar profile")
    parser.add_argument("--resume", default=None, help="Resume file (.pdf, .docx or .txt)")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--scholar-url", default=None, help="Google Scholar profile URL")
    source.add_argument("--scholar-json", default=None, help="Saved Scholar profile JSON")
    parser.add_argument("--limit", type=int, default=MAX_SUGGESTIONS, help="Maximum suggestions (at most 8)")
    parser.add_argument("--output", default=None, help="Destination JSON file (stdout when omitted)")
    parser.add_argument("--verbose", action="store_true", help="Log scoring details")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        report = build_report(args)
    except (InputError, ExtractionError, FetchError, ParseError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    payload = json.dumps(report, indent=2, ensure_ascii=False)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload + "\n", encoding="utf-8")
        print(f"Saved {len(report['suggestions'])} suggestions to {output_path}")
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
