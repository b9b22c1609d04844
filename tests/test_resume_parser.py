import nlp.parser as parser_module
from nlp.layout import PositionalLayout
from services.schema import EducationEntry, ExperienceEntry, ResumeProfile

parse_resume = parser_module.parse_resume
parse_resume_text = parser_module.parse_resume_text


JANE_LINES = [
    "Jane Doe",
    "jane@x.com",
    "555-123-4567",
    "EXPERIENCE",
    "Software Engineer",
    "Acme Corp",
    "2019-2022 built APIs",
    "EDUCATION",
    "BS Computer Science",
    "MIT 2015",
]


def test_parse_resume_worked_example():
    result = parse_resume(JANE_LINES)

    assert isinstance(result, ResumeProfile)
    assert result.name == "Jane Doe"
    assert result.email == "jane@x.com"
    assert result.phone == "555-123-4567"

    assert len(result.experience) == 1
    job = result.experience[0]
    assert job.title == "Software Engineer"
    assert job.company == "Acme Corp"
    assert job.duration == "2019-2022"
    assert job.description == "2019-2022 built APIs"

    assert result.education == (
        EducationEntry(degree="BS Computer Science", institution="MIT 2015", year="2015"),
    )


def test_parse_resume_empty_input_gives_empty_profile():
    result = parse_resume([])
    assert result == ResumeProfile()
    assert result.to_dict() == {
        "name": "",
        "email": "",
        "phone": "",
        "skills": [],
        "education": [],
        "experience": [],
    }
    assert parse_resume_text("") == ResumeProfile()


def test_parse_resume_is_idempotent():
    text = "\n".join(JANE_LINES)
    assert parse_resume_text(text) == parse_resume_text(text)
    assert parse_resume_text(text).to_dict() == parse_resume_text(text).to_dict()


def test_first_email_and_phone_win():
    lines = [
        "Sam Lee",
        "sam@first.org",
        "+1 415 555 0100",
        "backup: sam@second.org, 020 7946 0958",
    ]
    result = parse_resume(lines)
    assert result.email == "sam@first.org"
    assert result.phone == "+1 415 555 0100"


def test_skills_are_case_insensitive_and_unique():
    lines = ["Ana Ruiz", "Built tools in javascript", "More JavaScript and Docker", "docker, DOCKER"]
    result = parse_resume(lines)
    assert result.skills.count("JavaScript") == 1
    assert result.skills.count("Docker") == 1
    # containment match: "JavaScript" also reports "Java"
    assert result.skills == ("JavaScript", "Java", "Docker")


def test_skills_follow_keyword_order_within_a_line():
    result = parse_resume(["Name Here", "SQL, Python, React"])
    assert result.skills == ("Python", "React", "SQL")


def test_skill_keywords_table():
    assert parser_module.SKILL_KEYWORDS[:3] == ["JavaScript", "Python", "Java"]
    assert len(parser_module.SKILL_KEYWORDS) == len(set(parser_module.SKILL_KEYWORDS))
    for keyword in ("Node.js", "Machine Learning", "Data Science", "AI", "TypeScript", "SQL", "AWS", "Docker", "Git"):
        assert keyword in parser_module.SKILL_KEYWORDS


def test_section_markers():
    Section = parser_module.Section
    classify = parser_module.classify_marker
    assert classify("EDUCATION") is Section.EDUCATION
    assert classify("Academic Background") is Section.EDUCATION
    assert classify("Professional Experience") is Section.EXPERIENCE
    assert classify("Work History") is Section.EXPERIENCE
    assert classify("Employment") is Section.EXPERIENCE
    assert classify("Skills:") is None
    assert classify("Projects") is None
    assert classify("Skills: Python, SQL") is None
    assert classify("Software Engineer") is None


def test_no_markers_means_no_sections():
    lines = ["Chris Park", "Senior Software Engineer", "Globex Corporation", "2015-2020 everything"]
    result = parse_resume(lines)
    assert result.education == ()
    assert result.experience == ()


def test_short_lines_do_not_start_entries():
    lines = ["Kim", "EDUCATION", "BSc 2012", "Oxford", "Experience", "Intern", "Initech"]
    result = parse_resume(lines)
    assert result.education == ()
    assert result.experience == ()


def test_follow_on_lines_are_read_but_headings_are_not_skipped():
    lines = ["Dana Fox", "Experience", "Research Assistant at CERN", "Education", "BSc Computer Science 2014", "Skills"]
    result = parse_resume(lines)
    assert result.experience == (
        ExperienceEntry(title="Research Assistant at CERN", company="Education", duration="", description="BSc Computer Science 2014"),
    )
    assert result.education == (
        EducationEntry(degree="BSc Computer Science 2014", institution="Skills", year="2014"),
    )


def test_other_headings_do_not_close_a_section():
    lines = [
        "Pat Doe",
        "Experience",
        "Senior Data Engineer",
        "Globex",
        "Built ETL pipelines",
        "Projects",
        "Recommendation engine at Globex",
        "Initech",
        "Ran A/B tests",
    ]
    result = parse_resume(lines)
    assert [entry.title for entry in result.experience] == [
        "Senior Data Engineer",
        "Recommendation engine at Globex",
    ]
    assert result.experience[1].company == "Initech"
    assert result.experience[1].description == "Ran A/B tests"


def test_year_falls_back_to_institution_line():
    lines = ["Lee Min", "Education", "Master of Engineering", "KAIST, 2019", "Bachelor of Engineering 2016"]
    result = parse_resume(lines)
    assert [entry.year for entry in result.education] == ["2019", "2016"]
    assert result.education[1].institution == ""


def test_entries_are_capped_at_five():
    lines = ["Repeat Person", "Education"]
    for idx in range(8):
        lines.extend([f"Certificate course number {idx}", f"Institute {idx}"])
    lines.append("Experience")
    for idx in range(9):
        lines.extend([f"Consulting engagement {idx}", f"Client {idx}", f"Delivered report {idx}"])

    result = parse_resume(lines)
    assert len(result.education) == 5
    assert len(result.experience) == 5
    assert result.education[0].degree == "Certificate course number 0"
    assert result.experience[-1].title == "Consulting engagement 4"


def test_custom_layout_is_used():
    class TitleOnlyLayout(PositionalLayout):
        def read_experience(self, line, following):
            return ExperienceEntry(title=line.upper()), 0

    lines = ["Pat Doe", "Experience", "Platform Engineer", "Staff Engineer at Hooli"]
    result = parse_resume(lines, layout=TitleOnlyLayout())
    assert [entry.title for entry in result.experience] == ["PLATFORM ENGINEER", "STAFF ENGINEER AT HOOLI"]


def test_parse_never_raises_on_noise():
    noise = ["", "   ", "@@@@", "(((((((((((", "education" * 50, "x" * 5000]
    result = parse_resume_text("\n".join(noise))
    assert isinstance(result, ResumeProfile)
    assert len(result.education) <= 5
    assert len(result.experience) <= 5


def test_debug_output_is_opt_in(capsys):
    parser_module.set_debug(False)
    parse_resume(JANE_LINES)
    assert capsys.readouterr().out == ""

    parser_module.set_debug(True)
    try:
        parse_resume(JANE_LINES)
    finally:
        parser_module.set_debug(False)
    out = capsys.readouterr().out
    assert "[parser] parse: start (10 lines)" in out
    assert "[parser] extract_sections: education=1, experience=1" in out
