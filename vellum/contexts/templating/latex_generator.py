"""
LaTeX Generator

Builds the whole resume body for monolithic templates (those with a single
{{TEMPLATE_CONTENT}} marker), following the detected template style.
"""

from typing import List

from vellum.contexts.templating.defaults import (
    MONOLITHIC_ORDER,
    REFERENCES_FALLBACK,
    SECTION_DATA_FIELDS,
    SECTION_TITLES,
    SUMMARY_TITLE,
    SectionKind,
)
from vellum.contexts.templating.entity_renderers import render_section
from vellum.contexts.templating.escaping import escape_latex as esc
from vellum.contexts.templating.latex_patterns import StructuralMacros
from vellum.contexts.templating.logger import _log_debug
from vellum.contexts.templating.personal_info import render_contact_macro
from vellum.contexts.templating.registries import SnippetRegistry
from vellum.contexts.templating.resume_data_structure import ResumeData
from vellum.contexts.templating.style_analyzer import Spacing, TemplateStyle


class StyleAwareContentGenerator:
    """Generates monolithic resume content in a template's own style."""

    def __init__(self, snippets: SnippetRegistry = None):
        self.snippets = snippets or SnippetRegistry()

    def _generate_header(self, resume: ResumeData, style: TemplateStyle) -> str:
        """
        Contact header: the template's contact macro when it has one, otherwise
        a centered name line with email, phone and (optional) location.
        """
        personal = resume.personal_info

        if style.has_command(StructuralMacros.CONTACT_INFO):
            return render_contact_macro(personal, self.snippets)

        return self.snippets.render(
            "header_generic",
            first_name=esc(personal.first_name),
            last_name=esc(personal.last_name),
            email=esc(personal.email),
            phone=esc(personal.phone),
            location=esc(personal.location),
        ).strip()

    def _generate_section_header(self, title: str, style: TemplateStyle) -> str:
        macro = (
            StructuralMacros.NEW_SECTION
            if style.has_command(StructuralMacros.NEW_SECTION)
            else None
        )
        return self.snippets.render(
            "section_header",
            macro=macro,
            uses_sections=style.uses_sections,
            title=esc(title),
        ).strip()

    @staticmethod
    def _spacer(style: TemplateStyle) -> str:
        if style.spacing == Spacing.COMPACT:
            if style.has_command(StructuralMacros.SEPARATOR_SPACE):
                return f"\\{StructuralMacros.SEPARATOR_SPACE}"
            return "\\vspace{0.5em}"
        if style.spacing == Spacing.SPACIOUS:
            return "\\bigskip"
        return "\\medskip"

    def generate(self, resume: ResumeData, style: TemplateStyle, include_header: bool = True) -> str:
        """
        Generate the full resume body.

        Order: header, summary, then every section in MONOLITHIC_ORDER that has
        rendered content, each followed by the style's spacer. References close
        the document (with a fallback line when there are none) and take no spacer.

        Args:
            resume: Validated resume data
            style: Detected template style
            include_header: Emit the contact header (False when the template
                            already invokes the contact macro itself)

        Returns:
            LaTeX body to substitute for {{TEMPLATE_CONTENT}}
        """
        spacer = self._spacer(style)
        parts: List[str] = []
        if include_header:
            parts.extend([self._generate_header(resume, style), spacer])

        parts.append(self._generate_section_header(SUMMARY_TITLE, style))
        parts.append(esc(resume.professional_summary))
        parts.append(spacer)

        emitted = []
        for kind in MONOLITHIC_ORDER:
            entries = getattr(resume, SECTION_DATA_FIELDS[kind])
            content = render_section(kind, entries, style) if entries else ""

            if kind == SectionKind.REFERENCES:
                parts.append(self._generate_section_header(SECTION_TITLES[kind], style))
                parts.append(content if content.strip() else REFERENCES_FALLBACK)
                continue

            if not content.strip():
                continue

            parts.append(self._generate_section_header(SECTION_TITLES[kind], style))
            parts.append(content)
            parts.append(spacer)
            emitted.append(kind.value)

        _log_debug(f"Monolithic sections emitted: {', '.join(emitted) or 'none'}")
        return "\n".join(parts)
