"""
Default values and section tables for resume rendering.

Provides shared defaults used by:
- resume_data_structure.py (fallback summary at validation time)
- personal_info.py (summary placeholder substitution)
- latex_generator.py (monolithic section order and titles)
- orchestrator.py / section_processor.py (marker names per section)
"""

from enum import Enum

DEFAULT_PROFESSIONAL_SUMMARY = "Professional seeking new opportunities."

REFERENCES_FALLBACK = "References available upon request."


class SectionKind(str, Enum):
    """
    Resume section kinds. Values are the marker names templates use
    (e.g., {{#IF_WORK_EXPERIENCE}} ... {{WORK_EXPERIENCE}} ... {{/IF_WORK_EXPERIENCE}}).
    """

    WORK_EXPERIENCE = "WORK_EXPERIENCE"
    EDUCATION = "EDUCATION"
    SKILLS = "SKILLS"
    PROJECTS = "PROJECTS"
    CERTIFICATIONS = "CERTIFICATIONS"
    LANGUAGES = "LANGUAGES"
    VOLUNTEER_EXPERIENCE = "VOLUNTEER_EXPERIENCE"
    AWARDS = "AWARDS"
    PUBLICATIONS = "PUBLICATIONS"
    REFERENCES = "REFERENCES"
    HOBBIES = "HOBBIES"


# ResumeData attribute holding each section's entries
SECTION_DATA_FIELDS = {
    SectionKind.WORK_EXPERIENCE: "work_experience",
    SectionKind.EDUCATION: "education",
    SectionKind.SKILLS: "skills",
    SectionKind.PROJECTS: "projects",
    SectionKind.CERTIFICATIONS: "certifications",
    SectionKind.LANGUAGES: "languages",
    SectionKind.VOLUNTEER_EXPERIENCE: "volunteer_experience",
    SectionKind.AWARDS: "awards",
    SectionKind.PUBLICATIONS: "publications",
    SectionKind.REFERENCES: "references",
    SectionKind.HOBBIES: "hobbies",
}

# Injection order for sectioned templates (each section stays where the template puts it)
SECTIONED_ORDER = [
    SectionKind.WORK_EXPERIENCE,
    SectionKind.EDUCATION,
    SectionKind.SKILLS,
    SectionKind.PROJECTS,
    SectionKind.CERTIFICATIONS,
    SectionKind.LANGUAGES,
    SectionKind.VOLUNTEER_EXPERIENCE,
    SectionKind.AWARDS,
    SectionKind.PUBLICATIONS,
    SectionKind.REFERENCES,
    SectionKind.HOBBIES,
]

# Emission order for monolithic templates; references always close the document
MONOLITHIC_ORDER = [
    SectionKind.WORK_EXPERIENCE,
    SectionKind.EDUCATION,
    SectionKind.SKILLS,
    SectionKind.PROJECTS,
    SectionKind.CERTIFICATIONS,
    SectionKind.LANGUAGES,
    SectionKind.VOLUNTEER_EXPERIENCE,
    SectionKind.AWARDS,
    SectionKind.PUBLICATIONS,
    SectionKind.HOBBIES,
    SectionKind.REFERENCES,
]

SECTION_TITLES = {
    SectionKind.WORK_EXPERIENCE: "Work Experience",
    SectionKind.EDUCATION: "Education",
    SectionKind.SKILLS: "Skills",
    SectionKind.PROJECTS: "Projects",
    SectionKind.CERTIFICATIONS: "Certifications",
    SectionKind.LANGUAGES: "Languages",
    SectionKind.VOLUNTEER_EXPERIENCE: "Volunteer Experience",
    SectionKind.AWARDS: "Awards & Honors",
    SectionKind.PUBLICATIONS: "Publications",
    SectionKind.REFERENCES: "References",
    SectionKind.HOBBIES: "Interests & Hobbies",
}

SUMMARY_TITLE = "Professional Summary"

# Category labels used when an entry has none
DEFAULT_SKILL_CATEGORY = "General"
DEFAULT_HOBBY_CATEGORY = "other"

# Marker name for free-form additional sections ({{#IF_ADDITIONAL_SECTIONS}})
ADDITIONAL_SECTIONS_MARKER = "ADDITIONAL_SECTIONS"

# Personal fields templates may gate with {{#IF_NAME}} ... {{NAME}} ... {{/IF_NAME}},
# mapped to the PersonalInfo attribute supplying the value
PERSONAL_CONDITIONAL_FIELDS = {
    "PROFESSIONAL_TITLE": "professional_title",
    "LOCATION": "location",
    "LINKEDIN": "linkedin_url",
    "GITHUB": "github_url",
    "PORTFOLIO": "portfolio_url",
    "WEBSITE": "website_url",
}
