import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "suggest_projects.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("suggest_projects", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_cli_writes_report(cli, tmp_path):
    resume_path = tmp_path / "resume.txt"
    resume_path.write_text(
        "Jane Doe\njane@x.com\nSkills\nReact, Node.js\n",
        encoding="utf-8",
    )
    scholar_path = tmp_path / "scholar.json"
    scholar_path.write_text(json.dumps({"name": "Jane Doe", "researchInterests": ["Robotics"]}), encoding="utf-8")
    output_path = tmp_path / "out" / "suggestions.json"

    code = cli.main(
        ["--resume", str(resume_path), "--scholar-json", str(scholar_path), "--output", str(output_path)]
    )

    assert code == 0
    report = json.loads(output_path.read_text(encoding="utf-8"))
    assert report["resume"]["skills"] == ["React", "Node.js"]
    assert report["scholar"]["researchInterests"] == ["Robotics"]
    suggestions = report["suggestions"]
    assert suggestions[0]["title"] == "Robotics Research Project"
    assert suggestions[0]["matchScore"] == 90
    assert len(suggestions) <= 8


def test_cli_prints_to_stdout(cli, tmp_path, capsys):
    resume_path = tmp_path / "resume.txt"
    resume_path.write_text("Solo Dev\nPython\n", encoding="utf-8")

    assert cli.main(["--resume", str(resume_path), "--limit", "2"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["scholar"] is None
    assert len(report["suggestions"]) == 2


def test_cli_without_inputs_fails_cleanly(cli, capsys):
    assert cli.main([]) == 2
    assert "No data provided" in capsys.readouterr().err
