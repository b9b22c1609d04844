import json

import pytest

from services.project_catalogue import (
    PROJECT_TEMPLATES,
    build_catalogue,
    build_template,
    default_templates,
    load_templates,
)
from services.schema import DIFFICULTIES


def _template(key):
    return next(t for t in default_templates() if t.key == key)


def test_default_catalogue_shape():
    templates = default_templates()
    keys = [template.key for template in templates]
    assert keys == ["web-development", "machine-learning", "cloud-devops", "database", "general"]
    assert len(set(keys)) == len(keys)
    assert templates[-1].always

    titles = [project.title for template in templates for project in template.projects]
    assert len(titles) == 9
    assert len(set(titles)) == len(titles)


def test_every_project_is_well_formed():
    for template in default_templates():
        assert template.projects
        for project in template.projects:
            assert project.title
            assert project.description
            assert project.category
            assert project.difficulty in DIFFICULTIES
            assert project.estimated_time.endswith("weeks")
            assert project.required_skills
            assert project.tags


def test_general_template_always_applies():
    general = _template("general")
    assert general.applies([], [])
    assert general.applies(["COBOL"], ["Medieval History"])


def test_skill_predicates_match_exact_skill_names():
    web = _template("web-development")
    assert web.applies(["TypeScript"], [])
    assert web.applies(["Python", "React"], [])
    assert not web.applies(["typescript"], [])
    assert not web.applies(["ReactJS"], [])
    assert not web.applies([], ["React"])

    database = _template("database")
    assert database.applies(["Database"], [])
    assert not database.applies(["Docker"], [])

    cloud = _template("cloud-devops")
    assert cloud.applies(["Git"], [])


def test_machine_learning_template_reads_interests():
    ml = _template("machine-learning")
    assert ml.applies(["Data Science"], [])
    assert ml.applies([], ["Deep Machine Learning Systems"])
    assert ml.applies([], ["Explainable AI"])
    assert not ml.applies([], ["Robotics"])


def test_catalogue_requires_a_fallback():
    records = [record for record in PROJECT_TEMPLATES if not record.get("always")]
    with pytest.raises(ValueError):
        build_catalogue(records)


def test_build_template_rejects_bad_records():
    project = {
        "title": "Thing",
        "description": "Build a thing.",
        "category": "Misc",
        "difficulty": "Expert",
        "estimatedTime": "1 week",
        "requiredSkills": ["Python"],
        "tags": ["thing"],
    }
    with pytest.raises(ValueError):
        build_template({"key": "bad", "always": True, "projects": [project]})
    with pytest.raises(ValueError):
        build_template({"key": "empty", "always": True, "projects": []})
    with pytest.raises(ValueError):
        build_template({"always": True, "projects": [dict(project, difficulty="Beginner")]})


def test_load_templates_from_json(tmp_path):
    records = [
        {
            "key": "rust",
            "skills_any": ["Rust"],
            "projects": [
                {
                    "title": "Embedded Telemetry Collector",
                    "description": "Collect sensor data.",
                    "category": "Systems",
                    "difficulty": "Advanced",
                    "estimatedTime": "6-8 weeks",
                    "requiredSkills": ["Rust", "MQTT"],
                    "tags": ["iot"],
                }
            ],
        },
        {"key": "fallback", "always": True, "projects": [PROJECT_TEMPLATES[-1]["projects"][0]]},
    ]
    path = tmp_path / "templates.json"
    path.write_text(json.dumps(records), encoding="utf-8")

    templates = load_templates(path)
    assert [t.key for t in templates] == ["rust", "fallback"]
    rust = templates[0]
    assert rust.applies(["Rust"], [])
    assert not rust.applies(["rust"], [])
    assert rust.projects[0].required_skills == ("Rust", "MQTT")
    assert rust.projects[0].estimated_time == "6-8 weeks"


def test_load_templates_rejects_non_list(tmp_path):
    path = tmp_path / "templates.json"
    path.write_text(json.dumps({"key": "general"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_templates(path)
