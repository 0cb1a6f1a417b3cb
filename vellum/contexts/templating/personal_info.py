"""
Personal Info / Summary Injector

First stage of every render, whatever the template shape:
- {{FIRST_NAME}}, {{LAST_NAME}}, {{EMAIL}}, {{PHONE}} are replaced with escaped values
- a template that uses the contact-info macro gets its existing invocation
  rewritten in place with the candidate's details
- optional personal fields ({{#IF_LINKEDIN}} ... {{LINKEDIN}} ... {{/IF_LINKEDIN}})
  are kept or dropped depending on whether the value exists
- {{PROFESSIONAL_SUMMARY}} is replaced with the escaped summary
"""

from typing import Dict, Optional

from vellum.contexts.templating.defaults import (
    DEFAULT_PROFESSIONAL_SUMMARY,
    PERSONAL_CONDITIONAL_FIELDS,
)
from vellum.contexts.templating.escaping import escape_latex as esc
from vellum.contexts.templating.latex_patterns import Placeholders, StructuralMacros
from vellum.contexts.templating.logger import _log_debug
from vellum.contexts.templating.registries import SnippetRegistry
from vellum.contexts.templating.resume_data_structure import PersonalInfo, ResumeData
from vellum.contexts.templating.section_processor import resolve_conditionals
from vellum.contexts.templating.style_analyzer import TemplateStyle
from vellum.utils.text_processing import find_command_invocation


def render_contact_macro(personal: PersonalInfo, snippets: SnippetRegistry) -> str:
    """Build a \\NameEmailPhoneSiteGithub{...}{...}{...}{...}{...} invocation."""
    return snippets.render(
        "header_contact_macro",
        macro=StructuralMacros.CONTACT_INFO,
        full_name=esc(personal.full_name),
        email=esc(personal.email),
        phone=esc(personal.phone),
        website=esc(personal.website_url or personal.portfolio_url),
        github=esc(personal.github_url),
    ).strip()


def invokes_contact_macro(template: str) -> bool:
    """Whether the template already calls the contact-info macro (not just defines it)."""
    return (
        find_command_invocation(
            template, StructuralMacros.CONTACT_INFO, StructuralMacros.CONTACT_INFO_ARGS
        )
        is not None
    )


def rewrite_contact_macro(template: str, personal: PersonalInfo, snippets: SnippetRegistry) -> str:
    """
    Replace the first existing contact-macro invocation with the candidate's details.

    The invocation is found structurally (the macro followed by five balanced
    brace arguments), so the \\newcommand definition is left alone. Templates
    that never invoke the macro are returned unchanged.
    """
    span = find_command_invocation(
        template, StructuralMacros.CONTACT_INFO, StructuralMacros.CONTACT_INFO_ARGS
    )
    if span is None:
        _log_debug(f"No \\{StructuralMacros.CONTACT_INFO} invocation to rewrite")
        return template

    start, end = span
    return template[:start] + render_contact_macro(personal, snippets) + template[end:]


def personal_field_values(personal: PersonalInfo) -> Dict[str, Optional[str]]:
    """Escaped value per optional personal marker, None where the field is empty."""
    values: Dict[str, Optional[str]] = {}
    for marker, attribute in PERSONAL_CONDITIONAL_FIELDS.items():
        raw = getattr(personal, attribute)
        values[marker] = esc(raw) if raw and str(raw).strip() else None
    return values


def inject_personal_info(
    template: str,
    resume: ResumeData,
    style: TemplateStyle,
    snippets: SnippetRegistry,
) -> str:
    """
    Substitute personal details and the professional summary into a template.

    Args:
        template: Template source
        resume: Validated resume data
        style: Detected template style (decides whether the contact macro is rewritten)
        snippets: Snippet registry providing the contact-macro scaffold

    Returns:
        Template with personal placeholders resolved
    """
    personal = resume.personal_info

    result = template
    result = result.replace(Placeholders.FIRST_NAME, esc(personal.first_name))
    result = result.replace(Placeholders.LAST_NAME, esc(personal.last_name))
    result = result.replace(Placeholders.EMAIL, esc(personal.email))
    result = result.replace(Placeholders.PHONE, esc(personal.phone))

    if style.has_command(StructuralMacros.CONTACT_INFO):
        result = rewrite_contact_macro(result, personal, snippets)

    values = personal_field_values(personal)
    result = resolve_conditionals(result, values)
    for marker, value in values.items():
        result = result.replace("{{" + marker + "}}", value or "")

    summary = esc(resume.professional_summary or DEFAULT_PROFESSIONAL_SUMMARY)
    return result.replace(Placeholders.PROFESSIONAL_SUMMARY, summary)
