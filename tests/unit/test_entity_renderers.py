"""Unit tests for the per-section entity renderers."""

import pytest

from vellum.contexts.templating.defaults import SectionKind
from vellum.contexts.templating.entity_renderers import (
    SECTION_RENDERERS,
    merge_program_parts,
    render_additional_sections,
    render_education,
    render_hobbies,
    render_languages,
    render_projects,
    render_references,
    render_section,
    render_skills,
    render_work_experience,
)
from vellum.contexts.templating.resume_data_structure import (
    AdditionalSection,
    Education,
    Hobby,
    Language,
    Project,
    Reference,
    Skill,
    WorkExperience,
)
from vellum.contexts.templating.style_analyzer import Spacing, TemplateStyle

DEFAULT_STYLE = TemplateStyle()
COMPACT_STYLE = TemplateStyle(spacing=Spacing.COMPACT)
MACRO_STYLE = TemplateStyle(custom_commands=["SkillsEntry"], uses_itemize=False)


@pytest.mark.unit
def test_every_section_kind_has_a_renderer():
    """Test that dispatch covers all section kinds."""
    assert set(SECTION_RENDERERS) == set(SectionKind)


@pytest.mark.unit
@pytest.mark.parametrize("kind", list(SectionKind))
def test_empty_input_renders_nothing(kind):
    """Test that an empty entry list yields an empty fragment."""
    assert render_section(kind, [], DEFAULT_STYLE) == ""


@pytest.mark.unit
def test_work_experience_drops_entries_without_company():
    """Test that incomplete work entries are excluded."""
    experiences = [
        WorkExperience(job_title="Engineer"),
        WorkExperience(job_title="Developer", company="Acme", start_date="2020", end_date="2022"),
    ]

    result = render_work_experience(experiences, DEFAULT_STYLE)

    assert "Engineer" not in result
    assert "Developer" in result
    assert "2020 - 2022" in result


@pytest.mark.unit
def test_work_experience_all_incomplete_renders_nothing():
    """Test that a section whose entries are all incomplete is empty."""
    assert render_work_experience([WorkExperience(company="Acme")], DEFAULT_STYLE) == ""


@pytest.mark.unit
def test_work_experience_current_job_shows_present():
    """Test that a current job ends with Present regardless of end date."""
    exp = WorkExperience(
        job_title="Lead", company="Acme", start_date="2021", end_date="2023", is_current_job=True
    )

    assert "2021 - Present" in render_work_experience([exp], DEFAULT_STYLE)


@pytest.mark.unit
def test_work_experience_bullet_layouts():
    """Test itemize bullets versus manual bullet lines."""
    exp = WorkExperience(
        job_title="Lead", company="Acme", responsibilities=["Shipped v2"], achievements=["Cut costs"]
    )

    itemized = render_work_experience([exp], DEFAULT_STYLE)
    manual = render_work_experience([exp], MACRO_STYLE)

    assert "\\begin{itemize}" in itemized
    assert "\\item Shipped v2" in itemized
    assert "\\item Cut costs" in itemized
    assert "\\begin{itemize}" not in manual
    assert "\\noindent $\\bullet$ Shipped v2\\\\" in manual


@pytest.mark.unit
def test_work_experience_compact_layout():
    """Test that compact templates put title and dates on one line."""
    exp = WorkExperience(job_title="Lead", company="Acme", location="Berlin", start_date="2021", end_date="2022")

    result = render_work_experience([exp], COMPACT_STYLE)

    assert result.startswith("\\textbf{Lead} \\hfill 2021 - 2022\\\\")
    assert "\\textit{Acme} \\hfill Berlin" in result


@pytest.mark.unit
def test_work_experience_escapes_user_text():
    """Test that user text is escaped."""
    exp = WorkExperience(job_title="R&D Lead", company="50% Co", responsibilities=["Grew $1M"])

    result = render_work_experience([exp], DEFAULT_STYLE)

    assert "R&D" not in result
    assert "50%" not in result
    assert "$1M" not in result


@pytest.mark.unit
@pytest.mark.parametrize(
    "parts, expected",
    [
        (["Bachelor of Science", "Bachelor of Science in Computer Science"], ["Bachelor of Science in Computer Science"]),
        (["Bachelor of Science in Computer Science", "computer science"], ["Bachelor of Science in Computer Science"]),
        (["MSc", "Physics"], ["MSc", "Physics"]),
        (["PhD", ""], ["PhD"]),
        (["PhD", None], ["PhD"]),
    ],
)
def test_merge_program_parts(parts, expected):
    """Test degree / field-of-study deduplication."""
    assert merge_program_parts(parts) == expected


@pytest.mark.unit
def test_education_merges_degree_and_field():
    """Test that a field of study repeating the degree is shown once."""
    edu = Education(
        degree="Bachelor of Science",
        field_of_study="Bachelor of Science in Computer Science",
        institution="MIT",
        graduation_date="2020",
    )

    result = render_education([edu], DEFAULT_STYLE)

    assert result.count("Bachelor of Science") == 1
    assert "Bachelor of Science in Computer Science" in result


@pytest.mark.unit
def test_education_location_is_optional():
    """Test that a missing location leaves no stray separator."""
    edu = Education(degree="MSc", field_of_study="Physics", institution="ETH", graduation_date="2019")

    result = render_education([edu], DEFAULT_STYLE)

    assert "MSc, Physics" in result
    assert "ETH \\hfill 2019" in result


@pytest.mark.unit
def test_education_drops_entries_without_institution():
    """Test that education entries need both degree and institution."""
    assert render_education([Education(degree="BSc")], DEFAULT_STYLE) == ""


@pytest.mark.unit
def test_skills_grouped_by_category():
    """Test that skills are grouped by category with a default category."""
    skills = [
        Skill(name="Python", category="Programming"),
        Skill(name="Go", category="Programming"),
        Skill(name="Writing"),
    ]

    result = render_skills(skills, DEFAULT_STYLE)

    assert result.splitlines() == [
        "\\textbf{Programming:} Python, Go\\\\[0.2em]",
        "\\textbf{General:} Writing\\\\[0.2em]",
    ]


@pytest.mark.unit
def test_skills_use_skills_entry_macro():
    """Test that templates with a skills-entry macro get one macro call per category."""
    skills = [Skill(name="Python", category="Programming"), Skill(name="Go", category="Programming")]

    assert render_skills(skills, MACRO_STYLE) == "\\SkillsEntry{Programming}{Python, Go}"


@pytest.mark.unit
def test_languages_with_and_without_macro():
    """Test the two language layouts."""
    languages = [Language(name="French", proficiency="Fluent"), Language(name="Latin")]

    assert render_languages(languages, MACRO_STYLE) == "\\SkillsEntry{Languages}{French (Fluent), Latin}"
    assert render_languages(languages, DEFAULT_STYLE).splitlines() == [
        "\\textbf{French}: Fluent\\\\[0.2em]",
        "\\textbf{Latin}\\\\[0.2em]",
    ]


@pytest.mark.unit
def test_projects_optional_parts():
    """Test that url, bullets and technologies appear only when present."""
    full = Project(name="Atlas", url="atlas.dev", description=["Built it"], technologies=["Rust", "Wasm"])
    bare = Project(name="Sketch")

    result = render_projects([full, bare], DEFAULT_STYLE)

    assert "\\textbf{Atlas} \\hfill \\url{atlas.dev}\\\\" in result
    assert "\\item Built it" in result
    assert "Technologies: Rust, Wasm" in result
    assert result.endswith("\\textbf{Sketch}\\\\")


@pytest.mark.unit
def test_references_require_name_and_email():
    """Test that references without an email are excluded."""
    references = [
        Reference(name="Grace Hopper", title="Admiral", company="Navy", email="grace@navy.mil"),
        Reference(name="Anonymous"),
    ]

    result = render_references(references, DEFAULT_STYLE)

    assert "Grace Hopper" in result
    assert "Anonymous" not in result


@pytest.mark.unit
def test_hobbies_capitalize_and_merge_categories():
    """Test that hobby categories are capitalized and same-label groups merge."""
    hobbies = [
        Hobby(name="Harp", category="music"),
        Hobby(name="Chess"),
        Hobby(name="Piano", category="Music"),
    ]

    result = render_hobbies(hobbies, MACRO_STYLE)

    assert result.splitlines() == [
        "\\SkillsEntry{Music}{Harp, Piano}",
        "\\SkillsEntry{Other}{Chess}",
    ]


@pytest.mark.unit
def test_additional_sections():
    """Test free-form sections get an uppercase starred heading."""
    sections = [AdditionalSection(title="Patents", content="None filed"), AdditionalSection(content="orphan")]

    result = render_additional_sections(sections, DEFAULT_STYLE)

    assert result == "\\section*{PATENTS}\nNone filed\\\\[0.5em]"
