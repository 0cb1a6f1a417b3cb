"""Unit tests for resume data validation and normalization."""

from pathlib import Path

import pytest

from vellum.contexts.templating.defaults import DEFAULT_PROFESSIONAL_SUMMARY
from vellum.contexts.templating.exceptions import ResumeValidationError
from vellum.contexts.templating.resume_data_structure import (
    ResumeData,
    VolunteerExperience,
    WorkExperience,
    build_record,
    load_resume_file,
    snake_to_camel,
    validate_resume_data,
)

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "resumes"

MINIMAL = {"personalInfo": {"firstName": "Jane", "lastName": "Doe", "email": "jane@x.com"}}


@pytest.mark.unit
def test_minimal_resume_gets_defaults():
    """Test that only mandatory fields are needed and everything else defaults."""
    resume = validate_resume_data(MINIMAL)

    assert resume.personal_info.full_name == "Jane Doe"
    assert resume.professional_summary == DEFAULT_PROFESSIONAL_SUMMARY
    assert resume.work_experience == []
    assert resume.hobbies == []
    assert resume.additional_sections == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "personal, missing",
    [
        ({"lastName": "Doe", "email": "j@x.com"}, ["firstName"]),
        ({"firstName": "Jane", "email": "j@x.com"}, ["lastName"]),
        ({"email": "j@x.com"}, ["firstName", "lastName"]),
    ],
)
def test_missing_name_is_rejected(personal, missing):
    """Test the name check and the reported missing fields."""
    with pytest.raises(ResumeValidationError, match="First name and last name are required") as exc_info:
        validate_resume_data({"personalInfo": personal})

    assert exc_info.value.missing_fields == missing


@pytest.mark.unit
def test_missing_email_is_rejected():
    """Test the email check."""
    with pytest.raises(ResumeValidationError, match="Email is required") as exc_info:
        validate_resume_data({"personalInfo": {"firstName": "Jane", "lastName": "Doe"}})

    assert exc_info.value.missing_fields == ["email"]


@pytest.mark.unit
@pytest.mark.parametrize("data", [None, [], "resume", {}])
def test_malformed_input_is_rejected(data):
    """Test that inputs without personal info fail validation."""
    with pytest.raises(ResumeValidationError):
        validate_resume_data(data)


@pytest.mark.unit
def test_validation_error_is_a_value_error():
    """Test that callers can catch validation failures as ValueError."""
    with pytest.raises(ValueError):
        validate_resume_data({})


@pytest.mark.unit
def test_camel_and_snake_case_input():
    """Test that both key styles are accepted."""
    camel = validate_resume_data(
        {**MINIMAL, "workExperience": [{"jobTitle": "Dev", "company": "Acme", "isCurrentJob": True}]}
    )
    snake = validate_resume_data(
        {
            "personal_info": {"first_name": "Jane", "last_name": "Doe", "email": "jane@x.com"},
            "work_experience": [{"job_title": "Dev", "company": "Acme", "is_current_job": True}],
        }
    )

    assert camel == snake
    assert camel.work_experience[0] == WorkExperience(job_title="Dev", company="Acme", is_current_job=True)


@pytest.mark.unit
def test_malformed_lists_become_empty():
    """Test that non-list section values and non-mapping entries are dropped."""
    resume = validate_resume_data({**MINIMAL, "skills": "Python", "education": [None, "MIT", {"degree": "BSc"}]})

    assert resume.skills == []
    assert len(resume.education) == 1
    assert resume.education[0].degree == "BSc"


@pytest.mark.unit
def test_record_list_fields_are_coerced():
    """Test that string-list fields tolerate bad input."""
    exp = build_record(WorkExperience, {"responsibilities": "not a list", "achievements": ["a", None, 3]})

    assert exp.responsibilities == []
    assert exp.achievements == ["a", "3"]


@pytest.mark.unit
def test_volunteer_accepts_work_experience_keys():
    """Test the volunteer aliases for role, organization and current flag."""
    vol = build_record(VolunteerExperience, {"jobTitle": "Mentor", "company": "Code Club", "isCurrentJob": True})

    assert vol.role == "Mentor"
    assert vol.organization == "Code Club"
    assert vol.is_current_role is True


@pytest.mark.unit
def test_resume_data_input_is_revalidated():
    """Test that a ResumeData instance passes through validation."""
    resume = validate_resume_data(MINIMAL)

    assert validate_resume_data(resume) == resume


@pytest.mark.unit
def test_to_dict_uses_wire_shape():
    """Test that serialization produces camelCase keys accepted by validation."""
    resume = validate_resume_data({**MINIMAL, "workExperience": [{"jobTitle": "Dev", "company": "Acme"}]})
    wire = resume.to_dict()

    assert wire["personalInfo"]["firstName"] == "Jane"
    assert wire["workExperience"][0]["jobTitle"] == "Dev"
    assert validate_resume_data(wire) == resume


@pytest.mark.unit
def test_snake_to_camel():
    """Test key conversion."""
    assert snake_to_camel("job_title") == "jobTitle"
    assert snake_to_camel("is_current_job") == "isCurrentJob"
    assert snake_to_camel("name") == "name"


@pytest.mark.unit
def test_load_resume_file():
    """Test reading resume data from YAML."""
    data = load_resume_file(FIXTURES_PATH / "full_resume.yaml")
    resume = validate_resume_data(data)

    assert isinstance(resume, ResumeData)
    assert resume.personal_info.professional_title == "Analytical Engineer"
    assert [exp.job_title for exp in resume.work_experience] == ["Lead Analyst", "Tutor"]
    assert resume.projects[1].technologies == []
    assert resume.additional_sections[0].title == "Patents"


@pytest.mark.unit
def test_load_resume_file_rejects_non_mapping(tmp_path):
    """Test that a file holding a list is rejected."""
    path = tmp_path / "list.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ResumeValidationError):
        load_resume_file(path)
