"""
Resume Data Structures

Defines the typed records a resume is made of, and the one-time validation that
turns loosely-shaped input (camelCase wire JSON or snake_case dicts) into them.

After validate_resume_data() every list field is a list (possibly empty) and every
record has its optional fields defaulted, so renderers never check for missing
collections themselves.
"""

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from omegaconf import OmegaConf

from vellum.contexts.templating.defaults import DEFAULT_PROFESSIONAL_SUMMARY
from vellum.contexts.templating.exceptions import ResumeValidationError

T = TypeVar("T")


@dataclass
class PersonalInfo:
    """
    Contact details shown in the resume header.

    Attributes:
        first_name, last_name, email: Mandatory
        phone, location: Shown when present
        linkedin_url, portfolio_url, github_url, website_url: Optional links
        professional_title: Optional headline
    """

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    github_url: Optional[str] = None
    website_url: Optional[str] = None
    professional_title: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class WorkExperience:
    job_title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: Optional[str] = None
    is_current_job: bool = False
    responsibilities: List[str] = field(default_factory=list)
    achievements: List[str] = field(default_factory=list)


@dataclass
class Education:
    degree: str = ""
    institution: str = ""
    field_of_study: str = ""
    location: Optional[str] = None
    graduation_date: str = ""
    gpa: Optional[str] = None
    coursework: List[str] = field(default_factory=list)


@dataclass
class Skill:
    name: str = ""
    category: str = ""
    proficiency_level: Optional[str] = None


@dataclass
class Project:
    name: str = ""
    description: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)
    url: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


@dataclass
class Certification:
    name: str = ""
    issuer: str = ""
    date: str = ""
    expiration_date: Optional[str] = None
    url: Optional[str] = None


@dataclass
class Language:
    name: str = ""
    proficiency: str = ""


@dataclass
class VolunteerExperience:
    """
    Volunteer role. Mirrors WorkExperience; input may use either the
    work-experience keys (jobTitle, company, isCurrentJob) or role/organization/isCurrentRole.
    """

    role: str = ""
    organization: str = ""
    location: str = ""
    start_date: str = ""
    end_date: Optional[str] = None
    is_current_role: bool = False
    description: str = ""
    responsibilities: List[str] = field(default_factory=list)
    achievements: List[str] = field(default_factory=list)


@dataclass
class Award:
    title: str = ""
    issuer: str = ""
    date: str = ""
    description: Optional[str] = None


@dataclass
class Publication:
    title: str = ""
    publisher: str = ""
    publication_date: str = ""
    url: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Reference:
    name: str = ""
    title: str = ""
    company: str = ""
    email: str = ""
    phone: str = ""
    relationship: str = ""


@dataclass
class Hobby:
    name: str = ""
    category: str = ""
    description: Optional[str] = None


@dataclass
class AdditionalSection:
    title: str = ""
    content: str = ""


@dataclass
class ResumeData:
    """
    Complete resume content.

    List fields keep input order; renderers emit entries in that order.
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    professional_summary: str = DEFAULT_PROFESSIONAL_SUMMARY
    work_experience: List[WorkExperience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    certifications: List[Certification] = field(default_factory=list)
    languages: List[Language] = field(default_factory=list)
    volunteer_experience: List[VolunteerExperience] = field(default_factory=list)
    awards: List[Award] = field(default_factory=list)
    publications: List[Publication] = field(default_factory=list)
    references: List[Reference] = field(default_factory=list)
    hobbies: List[Hobby] = field(default_factory=list)
    additional_sections: List[AdditionalSection] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase wire shape accepted by validate_resume_data()."""
        return _to_camel(dataclasses.asdict(self))


# Record type for each list field of ResumeData
LIST_FIELD_TYPES: Dict[str, Type] = {
    "work_experience": WorkExperience,
    "education": Education,
    "skills": Skill,
    "projects": Project,
    "certifications": Certification,
    "languages": Language,
    "volunteer_experience": VolunteerExperience,
    "awards": Award,
    "publications": Publication,
    "references": Reference,
    "hobbies": Hobby,
    "additional_sections": AdditionalSection,
}

# Alternative input keys accepted for a record field (besides snake_case and camelCase)
FIELD_ALIASES: Dict[Type, Dict[str, List[str]]] = {
    VolunteerExperience: {
        "role": ["jobTitle", "job_title"],
        "organization": ["company"],
        "is_current_role": ["isCurrentJob", "is_current_job"],
    },
}


def snake_to_camel(name: str) -> str:
    """
    Convert a snake_case name to camelCase.

    Example:
        >>> snake_to_camel("job_title")
        'jobTitle'
    """
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _to_camel(value: Any) -> Any:
    if isinstance(value, dict):
        return {snake_to_camel(k): _to_camel(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_camel(v) for v in value]
    return value


def _lookup(raw: Mapping[str, Any], name: str, aliases: List[str]) -> Any:
    for key in [name, snake_to_camel(name), *aliases]:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _coerce_string_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None]


def _coerce(value: Any, field_type: Any, default: Any) -> Any:
    if field_type is bool:
        return bool(value) if value is not None else default
    if field_type == List[str]:
        return _coerce_string_list(value)
    if value is None:
        return default
    return str(value)


def build_record(record_type: Type[T], raw: Mapping[str, Any]) -> T:
    """
    Build a record dataclass from a loosely-shaped mapping.

    Each field is looked up under its snake_case name, its camelCase name, and any
    aliases in FIELD_ALIASES. Missing fields take the dataclass default; list fields
    that are not lists become empty lists; scalars are stringified.

    Args:
        record_type: Dataclass type to build (e.g., WorkExperience)
        raw: Input mapping

    Returns:
        Populated record
    """
    aliases = FIELD_ALIASES.get(record_type, {})
    values = {}

    for f in dataclasses.fields(record_type):
        if f.default is not dataclasses.MISSING:
            default = f.default
        else:
            default = f.default_factory()
        value = _lookup(raw, f.name, aliases.get(f.name, []))
        values[f.name] = _coerce(value, f.type, default)

    return record_type(**values)


def _build_list(record_type: Type[T], value: Any) -> List[T]:
    if not isinstance(value, (list, tuple)):
        return []
    return [build_record(record_type, item) for item in value if isinstance(item, Mapping)]


def validate_resume_data(data: Union[ResumeData, Mapping[str, Any]]) -> ResumeData:
    """
    Validate resume input and apply all defaults.

    Mandatory personal fields are checked first; nothing else can fail. Absent or
    malformed list fields become empty lists and an empty professional summary is
    replaced by the default sentence.

    Args:
        data: ResumeData instance or a mapping in camelCase/snake_case shape

    Returns:
        Fully-defaulted ResumeData

    Raises:
        ResumeValidationError: If first name, last name, or email is missing
    """
    if isinstance(data, ResumeData):
        data = dataclasses.asdict(data)
    if not isinstance(data, Mapping):
        raise ResumeValidationError("Resume data must be a mapping", ["personalInfo"])

    raw_personal = _lookup(data, "personal_info", [])
    if not isinstance(raw_personal, Mapping):
        raw_personal = {}
    personal_info = build_record(PersonalInfo, raw_personal)

    if not personal_info.first_name or not personal_info.last_name:
        missing = [
            name
            for name, value in [("firstName", personal_info.first_name), ("lastName", personal_info.last_name)]
            if not value
        ]
        raise ResumeValidationError("First name and last name are required", missing)
    if not personal_info.email:
        raise ResumeValidationError("Email is required", ["email"])

    summary = _lookup(data, "professional_summary", [])
    lists = {
        name: _build_list(record_type, _lookup(data, name, []))
        for name, record_type in LIST_FIELD_TYPES.items()
    }

    return ResumeData(
        personal_info=personal_info,
        professional_summary=str(summary) if summary else DEFAULT_PROFESSIONAL_SUMMARY,
        **lists,
    )


def load_resume_file(path: Path) -> Dict[str, Any]:
    """
    Read raw resume data from a YAML or JSON file.

    JSON is valid YAML, so both go through OmegaConf. The result is unvalidated;
    pass it to validate_resume_data() (ResumeRenderer.render() does this itself).

    Args:
        path: Resume data file

    Returns:
        Plain dict of the file's contents
    """
    conf = OmegaConf.load(path)
    data = OmegaConf.to_container(conf, resolve=True)
    if not isinstance(data, dict):
        raise ResumeValidationError(f"Resume data file must contain a mapping: {path}", ["personalInfo"])
    return data
