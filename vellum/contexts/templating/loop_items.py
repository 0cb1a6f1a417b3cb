"""
Loop Item Views

Field views exposed to handlebars-style loop bodies ({{#WORK_EXPERIENCE}} ... {{/WORK_EXPERIENCE}}).

Each view maps the camelCase names templates use ({{jobTitle}}, {{#if isCurrentJob}},
{{#responsibilities}}) to values. Scalar text is escaped here; list values stay raw
and are escaped element by element when a sub-loop expands them. URLs are passed
through unescaped so templates can hand them to \\href.
"""

from typing import Any, Callable, Dict, List

from vellum.contexts.templating.defaults import SectionKind
from vellum.contexts.templating.escaping import escape_latex as esc
from vellum.contexts.templating.resume_data_structure import (
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

ItemView = Dict[str, Any]


def _itemize(lines: List[str]) -> str:
    if not lines:
        return ""
    body = "\n  ".join(lines)
    return f"\\begin{{itemize}}\n  {body}\n\\end{{itemize}}"


def work_experience_view(exp: WorkExperience) -> ItemView:
    end_date = "Present" if exp.is_current_job else (exp.end_date or "")
    items = [f"\\item {esc(r)}" for r in exp.responsibilities]
    items += [f"\\item \\textit{{{esc(a)}}}" for a in exp.achievements]
    return {
        "jobTitle": esc(exp.job_title),
        "company": esc(exp.company),
        "location": esc(exp.location),
        "startDate": esc(exp.start_date),
        "endDate": esc(end_date),
        "isCurrentJob": exp.is_current_job,
        "responsibilities": list(exp.responsibilities),
        "achievements": list(exp.achievements),
        "itemsContent": _itemize(items),
    }


def education_view(edu: Education) -> ItemView:
    return {
        "degree": esc(edu.degree),
        "institution": esc(edu.institution),
        "fieldOfStudy": esc(edu.field_of_study),
        "location": esc(edu.location),
        "startDate": esc(edu.graduation_date),
        "endDate": esc(edu.graduation_date),
        "graduationDate": esc(edu.graduation_date),
        "gpa": esc(edu.gpa),
        "honors": list(edu.coursework),
        "coursework": list(edu.coursework),
        "courses": [],
    }


def skill_view(skill: Skill) -> ItemView:
    return {
        "name": esc(skill.name),
        "category": esc(skill.category),
        "proficiencyLevel": esc(skill.proficiency_level),
    }


def language_view(lang: Language) -> ItemView:
    return {"name": esc(lang.name), "proficiency": esc(lang.proficiency)}


def project_view(project: Project) -> ItemView:
    return {
        "name": esc(project.name),
        "description": esc(". ".join(project.description)),
        "technologies": list(project.technologies),
        "url": project.url or "",
        "startDate": project.start_date or "",
        "endDate": project.end_date or "",
    }


def certification_view(cert: Certification) -> ItemView:
    return {
        "name": esc(cert.name),
        "issuer": esc(cert.issuer),
        "date": esc(cert.date),
        "expirationDate": cert.expiration_date or "",
        "credentialId": cert.url or "",
        "url": cert.url or "",
    }


def volunteer_view(vol: VolunteerExperience) -> ItemView:
    end_date = "Present" if vol.is_current_role else (vol.end_date or "")
    return {
        "organization": esc(vol.organization),
        "role": esc(vol.role),
        "location": esc(vol.location),
        "startDate": esc(vol.start_date),
        "endDate": esc(end_date),
        "isCurrentRole": vol.is_current_role,
        "description": esc(vol.description),
        "achievements": list(vol.achievements),
        "achievementsList": _itemize([f"\\item {esc(a)}" for a in vol.achievements]),
    }


def award_view(award: Award) -> ItemView:
    return {
        "title": esc(award.title),
        "issuer": esc(award.issuer),
        "date": esc(award.date),
        "description": esc(award.description),
    }


def publication_view(pub: Publication) -> ItemView:
    return {
        "title": esc(pub.title),
        "publisher": esc(pub.publisher),
        "publicationDate": esc(pub.publication_date),
        "url": pub.url or "",
        "description": esc(pub.description),
    }


def reference_view(ref: Reference) -> ItemView:
    return {
        "name": esc(ref.name),
        "title": esc(ref.title),
        "company": esc(ref.company),
        "email": esc(ref.email),
        "phone": esc(ref.phone),
        "relationship": esc(ref.relationship),
    }


def hobby_view(hobby: Hobby) -> ItemView:
    return {
        "name": esc(hobby.name),
        "description": esc(hobby.description),
        "category": esc(hobby.category),
    }


LOOP_ITEM_VIEWS: Dict[SectionKind, Callable[[Any], ItemView]] = {
    SectionKind.WORK_EXPERIENCE: work_experience_view,
    SectionKind.EDUCATION: education_view,
    SectionKind.SKILLS: skill_view,
    SectionKind.PROJECTS: project_view,
    SectionKind.CERTIFICATIONS: certification_view,
    SectionKind.LANGUAGES: language_view,
    SectionKind.VOLUNTEER_EXPERIENCE: volunteer_view,
    SectionKind.AWARDS: award_view,
    SectionKind.PUBLICATIONS: publication_view,
    SectionKind.REFERENCES: reference_view,
    SectionKind.HOBBIES: hobby_view,
}
