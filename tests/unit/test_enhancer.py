"""Unit tests for ContentEnhancer with a scripted LLM provider."""

import json

import pytest

from vellum.contexts.enhancement.enhancer import ContentEnhancer
from vellum.contexts.templating.exceptions import EnhancementError
from vellum.contexts.templating.resume_data_structure import (
    PersonalInfo,
    Project,
    ResumeData,
    WorkExperience,
)
from vellum.utils.llm import LLMProvider, LLMResponse


class ScriptedProvider(LLMProvider):
    """Answers each prompt kind with a canned response and records the prompts."""

    _provider_prefix = "scripted"
    _retryable_exception = ConnectionError
    _retry_message = "Scripted retry"

    def __init__(self, fail_on: str = None):
        self.prompts = []
        self.fail_on = fail_on
        self.update_model("test")

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        self.prompts.append(user_prompt)

        if self.fail_on and self.fail_on in user_prompt:
            raise RuntimeError("provider exploded")

        if "keywords from this job posting" in user_prompt:
            content = '["Kubernetes", "Go", "observability", "a very long keyword that goes on and on"]'
        elif "professional summary" in user_prompt:
            content = '"Platform engineer focused on reliable systems."'
        elif "bullet points of this position" in user_prompt:
            content = json.dumps({"responsibilities": ["Ran Kubernetes clusters"], "achievements": []})
        else:
            content = "```json\n" + json.dumps({"description": ["Built an observability stack"]}) + "\n```"

        return LLMResponse(content=content, model=self.model, input_tokens=10, output_tokens=5)


def _resume() -> ResumeData:
    return ResumeData(
        personal_info=PersonalInfo(first_name="Jane", last_name="Doe", email="jane@x.com"),
        professional_summary="I run servers.",
        work_experience=[
            WorkExperience(
                job_title="SRE",
                company="Acme",
                responsibilities=["Ran servers"],
                achievements=["Cut pages by half"],
            )
        ],
        projects=[Project(name="Atlas", description=["Dashboards"], technologies=["Go"])],
    )


@pytest.mark.unit
def test_enhance_rewrites_content():
    """Test that summary, work bullets and project descriptions are rewritten."""
    provider = ScriptedProvider()
    original = _resume()

    enhanced = ContentEnhancer(provider=provider).enhance(original)

    assert enhanced.professional_summary == "Platform engineer focused on reliable systems."
    assert enhanced.work_experience[0].responsibilities == ["Ran Kubernetes clusters"]
    # Empty rewrite keeps the original bullets
    assert enhanced.work_experience[0].achievements == ["Cut pages by half"]
    assert enhanced.projects[0].description == ["Built an observability stack"]
    assert enhanced.projects[0].technologies == ["Go"]
    assert len(provider.prompts) == 3


@pytest.mark.unit
def test_enhance_does_not_modify_input():
    """Test that the input resume is left untouched."""
    original = _resume()

    ContentEnhancer(provider=ScriptedProvider()).enhance(original)

    assert original == _resume()


@pytest.mark.unit
def test_enhance_with_job_description_uses_keywords():
    """Test that extracted keywords are filtered and woven into later prompts."""
    provider = ScriptedProvider()
    enhancer = ContentEnhancer(provider=provider)

    assert enhancer.extract_job_keywords("We need Go and Kubernetes") == ["Kubernetes", "observability"]

    enhancer.enhance(_resume(), job_description="We need Go and Kubernetes")

    assert "keywords from this job posting" in provider.prompts[1]
    assert "Kubernetes, observability" in provider.prompts[2]


@pytest.mark.unit
def test_enhance_failure_raises_enhancement_error():
    """Test that provider failures surface as EnhancementError."""
    enhancer = ContentEnhancer(provider=ScriptedProvider(fail_on="bullet points"))

    with pytest.raises(EnhancementError, match="AI enhancement failed") as exc_info:
        enhancer.enhance(_resume())

    assert isinstance(exc_info.value.original_error, RuntimeError)


@pytest.mark.unit
def test_enhance_summary_rejects_empty_rewrite():
    """Test that an empty summary rewrite is an error."""

    class SilentProvider(ScriptedProvider):
        def _call_api(self, system_prompt, user_prompt):
            return LLMResponse(content='  ""  ', model=self.model, input_tokens=1, output_tokens=0)

    with pytest.raises(EnhancementError, match="empty professional summary"):
        ContentEnhancer(provider=SilentProvider()).enhance_summary("I run servers.", [])
