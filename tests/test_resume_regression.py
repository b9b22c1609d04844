import json
from pathlib import Path

from nlp.parser import parse_resume_text


FIXTURE_PATH = Path(__file__).resolve().parent / "fixtures" / "resume_samples.json"


def test_resume_regressions():
    samples = json.loads(FIXTURE_PATH.read_text(encoding="utf-8"))
    assert samples
    for sample in samples:
        expected = sample["expected"]

        result = parse_resume_text(sample["text"]).to_dict()

        assert result["name"] == expected["name"], sample["label"]
        assert result["email"] == expected["email"], sample["label"]
        assert result["phone"] == expected["phone"], sample["label"]
        assert result["skills"] == expected["skills"], sample["label"]
        assert result["education"] == expected["education"], sample["label"]
        assert result["experience"] == expected["experience"], sample["label"]
