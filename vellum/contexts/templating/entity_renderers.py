"""
Entity Renderers

One pure function per resume section kind: (entries, style) -> LaTeX fragment.

Shared rules:
- Incomplete entries (missing an identifying field) are dropped silently
- All user text goes through escape_latex()
- Layout follows the template style (compact vs. stacked, itemize vs. manual bullets)
- No entries after filtering -> "" (never an empty wrapper)

SECTION_RENDERERS maps each SectionKind to its renderer; callers dispatch through it.
"""

from typing import Callable, Dict, Iterable, List

from vellum.contexts.templating.defaults import (
    DEFAULT_HOBBY_CATEGORY,
    DEFAULT_SKILL_CATEGORY,
    SectionKind,
)
from vellum.contexts.templating.escaping import escape_latex as esc
from vellum.contexts.templating.latex_patterns import StructuralMacros
from vellum.contexts.templating.resume_data_structure import (
    AdditionalSection,
    Award,
    Certification,
    Education,
    Hobby,
    Language,
    Project,
    Publication,
    Reference,
    Skill,
    VolunteerExperience,
    WorkExperience,
)
from vellum.contexts.templating.style_analyzer import Spacing, TemplateStyle
from vellum.utils.text_processing import capitalize_first

ITEMIZE_OPTIONS = "[leftmargin=*, parsep=0pt, itemsep=0pt]"

Renderer = Callable[[list, TemplateStyle], str]


def _is_compact(style: TemplateStyle) -> bool:
    return style.spacing == Spacing.COMPACT


def _bullet_list(items: List[str], style: TemplateStyle, manual_prefix: str = "\\noindent ") -> str:
    """
    Render bullet points as an itemize environment or as manual bullet lines.

    Args:
        items: Raw (unescaped) bullet texts
        style: Template style (uses_itemize selects the layout)
        manual_prefix: Text placed before the bullet glyph in manual mode

    Returns:
        LaTeX for the bullets, or "" for no items
    """
    if not items:
        return ""

    if style.uses_itemize:
        lines = [f"\\begin{{itemize}}{ITEMIZE_OPTIONS}"]
        lines.extend(f"\\item {esc(item)}" for item in items)
        lines.append("\\end{itemize}")
    else:
        lines = [f"{manual_prefix}$\\bullet$ {esc(item)}\\\\" for item in items]

    return "\n".join(lines)


def _group_names_by_category(entries: Iterable, default_category: str) -> Dict[str, List[str]]:
    """Group entry names by category, keeping first-seen category order."""
    groups: Dict[str, List[str]] = {}
    for entry in entries:
        category = entry.category or default_category
        groups.setdefault(category, []).append(entry.name)
    return groups


def _category_lines(groups: Dict[str, List[str]], style: TemplateStyle) -> str:
    """Emit one line per category via the skills-entry macro or a bold label."""
    lines = []
    for category, names in groups.items():
        joined = esc(", ".join(names))
        if style.has_command(StructuralMacros.SKILLS_ENTRY):
            lines.append(f"\\{StructuralMacros.SKILLS_ENTRY}{{{esc(category)}}}{{{joined}}}")
        else:
            lines.append(f"\\textbf{{{esc(category)}:}} {joined}\\\\[0.2em]")
    return "\n".join(lines)


def merge_program_parts(parts: Iterable[str]) -> List[str]:
    """
    Deduplicate degree / field-of-study strings.

    A candidate contained (case-insensitively) in an accepted value is dropped;
    an accepted value contained in the candidate is replaced by the longer
    candidate; anything else is accepted as a distinct value.

    Example:
        >>> merge_program_parts(["Bachelor of Science", "Bachelor of Science in Computer Science"])
        ['Bachelor of Science in Computer Science']
        >>> merge_program_parts(["MSc", "Physics"])
        ['MSc', 'Physics']
    """
    accepted: List[str] = []

    for part in parts:
        candidate = str(part).strip() if part is not None else ""
        if not candidate:
            continue
        lower = candidate.lower()

        merged = False
        for idx, existing in enumerate(accepted):
            existing_lower = existing.lower()
            if lower in existing_lower:
                merged = True
                break
            if existing_lower in lower:
                accepted[idx] = candidate
                merged = True
                break

        if not merged:
            accepted.append(candidate)

    return accepted


def render_work_experience(experiences: List[WorkExperience], style: TemplateStyle) -> str:
    entries = []
    for exp in experiences:
        if not (exp.job_title and exp.company):
            continue

        end_date = "Present" if exp.is_current_job else (exp.end_date or "")
        dates = f"{esc(exp.start_date)} - {esc(end_date)}"

        if _is_compact(style):
            lines = [
                f"\\textbf{{{esc(exp.job_title)}}} \\hfill {dates}\\\\",
                f"\\textit{{{esc(exp.company)}}} \\hfill {esc(exp.location)}\\\\[0.3em]",
            ]
        else:
            lines = [
                f"{{\\large \\textbf{{{esc(exp.job_title)}}}}}\\\\",
                f"\\textit{{{esc(exp.company)}, {esc(exp.location)}}} \\hfill {dates}\\\\[0.5em]",
            ]

        bullets = _bullet_list(exp.responsibilities + exp.achievements, style)
        if bullets:
            lines.append(bullets)

        entries.append("\n".join(lines))

    return "\n\n".join(entries)


def render_education(education: List[Education], style: TemplateStyle) -> str:
    entries = []
    for edu in education:
        if not (edu.degree and edu.institution):
            continue

        program = ", ".join(merge_program_parts([edu.degree, edu.field_of_study]))
        has_location = bool(edu.location and edu.location.strip())

        if _is_compact(style):
            location = f" \\hfill {esc(edu.location)}" if has_location else ""
            lines = [
                f"\\textbf{{{esc(program)}}} \\hfill {esc(edu.graduation_date)}\\\\",
                f"\\textit{{{esc(edu.institution)}}}{location}\\\\[0.3em]",
            ]
        else:
            location = f", {esc(edu.location)}" if has_location else ""
            lines = [
                f"{{\\textbf{{{esc(program)}}}}}\\\\",
                f"{esc(edu.institution)}{location} \\hfill {esc(edu.graduation_date)}\\\\[0.5em]",
            ]

        entries.append("\n".join(lines))

    return "\n\n".join(entries)


def render_skills(skills: List[Skill], style: TemplateStyle) -> str:
    complete = [skill for skill in skills if skill.name]
    if not complete:
        return ""
    return _category_lines(_group_names_by_category(complete, DEFAULT_SKILL_CATEGORY), style)


def render_projects(projects: List[Project], style: TemplateStyle) -> str:
    entries = []
    for project in projects:
        if not project.name:
            continue

        title = f"\\textbf{{{esc(project.name)}}}"
        if project.url:
            title += f" \\hfill \\url{{{esc(project.url)}}}"
        lines = [title + "\\\\"]

        bullets = _bullet_list(project.description, style, manual_prefix="")
        if bullets:
            lines.append(bullets)

        if project.technologies:
            lines.append(
                f"\\textit{{Technologies: {esc(', '.join(project.technologies))}}}\\\\[0.3em]"
            )

        entries.append("\n".join(lines))

    return "\n\n".join(entries)


def render_certifications(certifications: List[Certification], style: TemplateStyle) -> str:
    return "\n".join(
        f"\\textbf{{{esc(cert.name)}}} \\hfill {esc(cert.date)}\\\\\n"
        f"\\textit{{{esc(cert.issuer)}}}\\\\[0.3em]"
        for cert in certifications
        if cert.name and cert.issuer
    )


def render_languages(languages: List[Language], style: TemplateStyle) -> str:
    complete = [lang for lang in languages if lang.name]
    if not complete:
        return ""

    if style.has_command(StructuralMacros.SKILLS_ENTRY):
        spoken = ", ".join(
            f"{esc(lang.name)} ({esc(lang.proficiency)})" if lang.proficiency else esc(lang.name)
            for lang in complete
        )
        return f"\\{StructuralMacros.SKILLS_ENTRY}{{Languages}}{{{spoken}}}"

    return "\n".join(
        f"\\textbf{{{esc(lang.name)}}}: {esc(lang.proficiency)}\\\\[0.2em]"
        if lang.proficiency
        else f"\\textbf{{{esc(lang.name)}}}\\\\[0.2em]"
        for lang in complete
    )


def render_volunteer_experience(
    volunteering: List[VolunteerExperience], style: TemplateStyle
) -> str:
    entries = []
    for vol in volunteering:
        if not (vol.role and vol.organization):
            continue

        end_date = "Present" if vol.is_current_role else (vol.end_date or "")
        lines = [
            f"\\textbf{{{esc(vol.role)}}} \\hfill {esc(vol.start_date)} - {esc(end_date)}\\\\",
            f"\\textit{{{esc(vol.organization)}, {esc(vol.location)}}}\\\\",
        ]
        if vol.description:
            lines.append(f"{esc(vol.description)}\\\\[0.3em]")

        bullets = _bullet_list(vol.responsibilities + vol.achievements, style)
        if bullets:
            lines.append(bullets)

        entries.append("\n".join(lines))

    return "\n\n".join(entries)


def render_awards(awards: List[Award], style: TemplateStyle) -> str:
    return "\n".join(
        f"\\textbf{{{esc(award.title)}}} \\hfill {esc(award.date)}\\\\\n"
        f"\\textit{{{esc(award.issuer)}}}\\\\[0.3em]"
        for award in awards
        if award.title and award.issuer
    )


def render_publications(publications: List[Publication], style: TemplateStyle) -> str:
    return "\n".join(
        f"\\textbf{{{esc(pub.title)}}} \\hfill {esc(pub.publication_date)}\\\\\n"
        f"\\textit{{{esc(pub.publisher)}}}\\\\[0.3em]"
        for pub in publications
        if pub.title and pub.publisher
    )


def render_references(references: List[Reference], style: TemplateStyle) -> str:
    return "\n".join(
        f"\\textbf{{{esc(ref.name)}}} - {esc(ref.title)}\\\\\n"
        f"\\textit{{{esc(ref.company)}}}\\\\\n"
        f"{esc(ref.email)} $\\bullet$ {esc(ref.phone)}\\\\[0.3em]"
        for ref in references
        if ref.name and ref.email
    )


def render_hobbies(hobbies: List[Hobby], style: TemplateStyle) -> str:
    complete = [hobby for hobby in hobbies if hobby.name]
    if not complete:
        return ""

    labelled: Dict[str, List[str]] = {}
    for category, names in _group_names_by_category(complete, DEFAULT_HOBBY_CATEGORY).items():
        labelled.setdefault(capitalize_first(category), []).extend(names)
    return _category_lines(labelled, style)


SECTION_RENDERERS: Dict[SectionKind, Renderer] = {
    SectionKind.WORK_EXPERIENCE: render_work_experience,
    SectionKind.EDUCATION: render_education,
    SectionKind.SKILLS: render_skills,
    SectionKind.PROJECTS: render_projects,
    SectionKind.CERTIFICATIONS: render_certifications,
    SectionKind.LANGUAGES: render_languages,
    SectionKind.VOLUNTEER_EXPERIENCE: render_volunteer_experience,
    SectionKind.AWARDS: render_awards,
    SectionKind.PUBLICATIONS: render_publications,
    SectionKind.REFERENCES: render_references,
    SectionKind.HOBBIES: render_hobbies,
}


def render_section(kind: SectionKind, entries: list, style: TemplateStyle) -> str:
    """Render one section by looking its renderer up in SECTION_RENDERERS."""
    return SECTION_RENDERERS[kind](entries, style)


def render_additional_sections(sections: List[AdditionalSection], style: TemplateStyle) -> str:
    """Free-form titled sections, each closed with a small vertical gap."""
    return "\n\n".join(
        f"\\section*{{{esc(section.title.upper())}}}\n{esc(section.content)}\\\\[0.5em]"
        for section in sections
        if section.title
    )
