"""Unit tests for the marker tokenizer, both marker dialects, and cleanup."""

import pytest

from vellum.contexts.templating import section_processor
from vellum.contexts.templating.resume_data_structure import ResumeData, Skill, WorkExperience
from vellum.contexts.templating.section_processor import (
    ConditionalBlock,
    LoopBlock,
    PlainText,
    cleanup_placeholders,
    emit_nodes,
    has_loop_markers,
    inject_sections,
    render_loop_item,
    render_loop_sections,
    resolve_conditionals,
    resolve_loops,
    tokenize_markers,
)
from vellum.contexts.templating.style_analyzer import TemplateStyle

# --- Tokenizer ---


@pytest.mark.unit
def test_tokenize_nested_blocks():
    """Test that conditional and loop blocks nest."""
    nodes = tokenize_markers("a{{#IF_X}}b{{#X}}c{{/X}}{{/IF_X}}d")

    assert nodes == [
        PlainText("a"),
        ConditionalBlock("X", [PlainText("b"), LoopBlock("X", "c", [PlainText("c")])]),
        PlainText("d"),
    ]


@pytest.mark.unit
def test_tokenize_unmatched_close_stays_text():
    """Test that a closing marker without an opener is plain text."""
    nodes = tokenize_markers("a{{/IF_X}}b")

    assert all(isinstance(node, PlainText) for node in nodes)
    assert emit_nodes(nodes) == "a{{/IF_X}}b"


@pytest.mark.unit
def test_tokenize_unclosed_open_stays_text():
    """Test that an opener that is never closed is plain text."""
    nodes = tokenize_markers("{{#IF_A}}x{{#IF_B}}y{{/IF_B}}")

    assert nodes[0] == PlainText("{{#IF_A}}")
    assert nodes[-1] == ConditionalBlock("B", [PlainText("y")])


@pytest.mark.unit
@pytest.mark.parametrize(
    "source",
    [
        "plain LaTeX \\textbf{x}",
        "{{#IF_A}}{{A}}{{/IF_A}} and {{#B}}{{name}}{{/B}}",
        "{{#IF_A}}unclosed {{/B}} stray",
        "{{#if isCurrentJob}}lowercase markers are text{{/if}}",
    ],
)
def test_emit_reproduces_source(source):
    """Test that emitting a token tree gives back the source text."""
    assert emit_nodes(tokenize_markers(source)) == source


# --- Dialect A ---


@pytest.mark.unit
def test_conditional_with_data():
    """Test that a block with data is replaced by before + fragment + after."""
    text = "<{{#IF_SKILLS}}[{{SKILLS}}]{{/IF_SKILLS}}>"

    assert resolve_conditionals(text, {"SKILLS": "python"}) == "<[python]>"


@pytest.mark.unit
def test_conditional_without_data_is_removed():
    """Test that a block whose fragment is None disappears."""
    text = "<{{#IF_SKILLS}}[{{SKILLS}}]{{/IF_SKILLS}}>"

    assert resolve_conditionals(text, {"SKILLS": None}) == "<>"


@pytest.mark.unit
def test_conditional_with_blank_fragment_is_removed():
    """Test that a block whose rendered fragment is blank disappears."""
    text = "<{{#IF_SKILLS}}Skills: {{SKILLS}}{{/IF_SKILLS}}>"

    assert resolve_conditionals(text, {"SKILLS": "  \n"}) == "<>"


@pytest.mark.unit
def test_conditional_for_unknown_name_is_left_in_place():
    """Test that blocks for names without a fragment entry survive unchanged."""
    text = "{{#IF_OTHER}}x{{/IF_OTHER}}"

    assert resolve_conditionals(text, {"SKILLS": "python"}) == text


@pytest.mark.unit
def test_conditional_without_placeholder_acts_as_gate():
    """Test that a placeholder-less block keeps its body when data exists."""
    text = "{{#IF_LINKEDIN}} | {{/IF_LINKEDIN}}"

    assert resolve_conditionals(text, {"LINKEDIN": "in/jane"}) == " | "
    assert resolve_conditionals(text, {"LINKEDIN": None}) == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "linkedin, github, expected",
    [
        ("L", "G", "L | G"),
        ("L", None, "L"),
        (None, "G", "G"),
        (None, None, ""),
    ],
)
def test_conditional_nested_separator(linkedin, github, expected):
    """Test a separator that only shows when both neighbours exist."""
    text = (
        "{{#IF_LINKEDIN}}{{LINKEDIN}}{{/IF_LINKEDIN}}"
        "{{#IF_GITHUB}}{{#IF_LINKEDIN}} | {{/IF_LINKEDIN}}{{GITHUB}}{{/IF_GITHUB}}"
    )

    assert resolve_conditionals(text, {"LINKEDIN": linkedin, "GITHUB": github}) == expected


@pytest.mark.unit
def test_inject_sections_places_each_section():
    """Test section injection keeps template order and drops empty sections."""
    template = (
        "{{#IF_SKILLS}}\\section*{Skills}\n{{SKILLS}}{{/IF_SKILLS}}\n"
        "{{#IF_EDUCATION}}\\section*{Education}\n{{EDUCATION}}{{/IF_EDUCATION}}\n"
        "{{#IF_ADDITIONAL_SECTIONS}}{{ADDITIONAL_SECTIONS}}{{/IF_ADDITIONAL_SECTIONS}}"
    )
    resume = ResumeData(skills=[Skill(name="Python", category="Programming")])

    result = inject_sections(template, resume, TemplateStyle())

    assert "\\section*{Skills}\n\\textbf{Programming:} Python" in result
    assert "Education" not in result
    assert "{{" not in result


# --- Dialect B ---


@pytest.mark.unit
@pytest.mark.parametrize("current, expected", [(True, "2020 - Present"), (False, "2020 - 2022")])
def test_loop_item_if_unless(current, expected):
    """Test that if/unless blocks pick the date ending."""
    body = "{{startDate}} - {{#if isCurrentJob}}Present{{/if}}{{#unless isCurrentJob}}{{endDate}}{{/unless}}"
    view = {"startDate": "2020", "endDate": "2022", "isCurrentJob": current}

    assert render_loop_item(body, view) == expected


@pytest.mark.unit
def test_loop_item_sub_loop_escapes_elements():
    """Test that array sub-loops repeat per element with escaped text."""
    body = "{{#responsibilities}}\\item {{.}}{{/responsibilities}}"
    view = {"responsibilities": ["Cut costs 20%", "Led R&D"]}

    assert render_loop_item(body, view) == "\\item Cut costs 20\n\\item Led R  D"


@pytest.mark.unit
def test_loop_item_this_token_and_empty_sub_loop():
    """Test the {{this}} element token and removal of empty sub-loops."""
    body = "{{name}}{{#technologies}} [{{this}}]{{/technologies}}"

    assert render_loop_item(body, {"name": "Atlas", "technologies": ["Rust"]}) == "Atlas [Rust]"
    assert render_loop_item(body, {"name": "Atlas", "technologies": []}) == "Atlas"


@pytest.mark.unit
def test_loop_item_optional_block():
    """Test generic optional blocks keyed on scalar fields."""
    body = "{{name}}{{#proficiencyLevel}} ({{proficiencyLevel}}){{/proficiencyLevel}}"

    assert render_loop_item(body, {"name": "Go", "proficiencyLevel": "Expert"}) == "Go (Expert)"
    assert render_loop_item(body, {"name": "Go", "proficiencyLevel": ""}) == "Go"
    assert render_loop_item(body, {"name": "Go"}) == "Go"


@pytest.mark.unit
def test_loop_item_boolean_scalar():
    """Test that booleans substitute as lowercase words."""
    assert render_loop_item("{{isCurrentJob}}", {"isCurrentJob": False}) == "false"


@pytest.mark.unit
def test_resolve_loops_expands_and_removes():
    """Test loop expansion, and removal of loops and gates for empty sections."""
    text = (
        "{{#SKILLS}}{{name}}{{/SKILLS}}|"
        "{{#IF_AWARDS}}Awards: {{#AWARDS}}{{title}}{{/AWARDS}}{{/IF_AWARDS}}|"
        "{{#OTHER}}kept{{/OTHER}}"
    )
    items = {"SKILLS": [{"name": "Go"}, {"name": "Rust"}], "AWARDS": []}

    assert resolve_loops(text, items) == "Go\nRust||{{#OTHER}}kept{{/OTHER}}"


@pytest.mark.unit
def test_render_loop_sections_uses_item_views():
    """Test loop rendering from resume data, including the Present ending."""
    resume = ResumeData(
        work_experience=[
            WorkExperience(job_title="Analyst", company="Acme", start_date="2021", is_current_job=True)
        ]
    )
    template = (
        "{{#IF_WORK_EXPERIENCE}}{{#WORK_EXPERIENCE}}{{jobTitle}} at {{company}} "
        "({{endDate}}){{/WORK_EXPERIENCE}}{{/IF_WORK_EXPERIENCE}}"
        "{{#IF_SKILLS}}Skills{{/IF_SKILLS}}"
    )

    result = render_loop_sections(template, resume)

    assert result == "{{#IF_WORK_EXPERIENCE}}Analyst at Acme (Present){{/IF_WORK_EXPERIENCE}}"


@pytest.mark.unit
def test_has_loop_markers():
    """Test loop dialect detection."""
    assert has_loop_markers("{{#WORK_EXPERIENCE}}x{{/WORK_EXPERIENCE}}")
    assert not has_loop_markers("{{#IF_WORK_EXPERIENCE}}{{WORK_EXPERIENCE}}{{/IF_WORK_EXPERIENCE}}")
    assert not has_loop_markers("{{#UNKNOWN}}x{{/UNKNOWN}}")


# --- Cleanup ---


@pytest.mark.unit
def test_cleanup_removes_residual_markers():
    """Test that leftover conditionals and tokens are stripped."""
    text = "a {{#IF_X}}gone {{X}}{{/IF_X}}b {{STRAY}} c {{#name}}"

    result = cleanup_placeholders(text)

    assert result == "a b  c "


@pytest.mark.unit
def test_cleanup_collapses_blank_lines():
    """Test that blank-line runs collapse to a single blank line."""
    assert cleanup_placeholders("a\n\n{{X}}\n   \n\nb") == "a\n\nb"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "{{#IF_A}}{{#IF_B}}x{{/IF_B}}{{/IF_A}}",
        "{{#IF_A}}never closed {{A}}",
        "{{/IF_A}} {{#B}}{{.}}{{/B}} {{this}}",
    ],
)
def test_cleanup_leaves_no_marker_syntax(text):
    """Test that no marker syntax survives cleanup."""
    result = cleanup_placeholders(text)

    assert "{{" not in result
    assert "#IF_" not in result


@pytest.mark.unit
def test_cleanup_iteration_cap(monkeypatch):
    """Test that cleanup stops after max_iterations even if the text keeps changing."""
    calls = []

    def ever_changing(content, max_consecutive=1):
        calls.append(content)
        return content + "x"

    monkeypatch.setattr(section_processor, "set_max_consecutive_blank_lines", ever_changing)

    cleanup_placeholders("start", max_iterations=15)

    assert len(calls) == 15
