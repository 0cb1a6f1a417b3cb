"""
AI content enhancement for resume data.

Rewrites the professional summary, work-experience bullets and project
descriptions through an LLM provider. With a job description, target keywords
are extracted first and woven into every rewrite.

Any provider or parsing failure surfaces as EnhancementError; the renderer
treats that as non-fatal and keeps the original data.
"""

import dataclasses
import json
import time
from typing import List, Optional

from vellum.contexts.enhancement.logger import (
    _log_debug,
    log_enhancement_result,
    log_enhancement_start,
    log_llm_call,
)
from vellum.contexts.templating.exceptions import EnhancementError
from vellum.contexts.templating.resume_data_structure import (
    Project,
    ResumeData,
    WorkExperience,
)
from vellum.utils.llm import (
    LLMProvider,
    get_provider,
    parse_array_response,
    parse_dict_response,
)

MAX_KEYWORDS = 15
JOB_DESCRIPTION_LIMIT = 2000

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SYSTEM_PROMPT = """\
You are an expert resume writer. Rewrite resume content to be concise, specific and
achievement-oriented, using strong action verbs and quantified impact where the
original supports it. Never invent employers, dates, titles or numbers.
Use PLAIN TEXT ONLY inside every value: no markdown, no LaTeX."""

_KEYWORDS_PROMPT_TEMPLATE = """\
Extract the {limit} most important keywords from this job posting: primary tech
stack, required methodologies, key soft skills, and industry standards.

Return ONLY a JSON array of strings.

---
Job Posting:
{job_description}"""

_SUMMARY_PROMPT_TEMPLATE = """\
Rewrite this professional summary in 2-4 sentences.{keywords_block}

Return ONLY the rewritten summary text.

---
Summary:
{summary}"""

_WORK_PROMPT_TEMPLATE = """\
Rewrite the bullet points of this position.{keywords_block}

Return a JSON object with exactly two keys, "responsibilities" and "achievements",
each a list of strings. Keep the number of bullets roughly the same.

---
Position:
{entry_json}"""

_PROJECT_PROMPT_TEMPLATE = """\
Rewrite the description bullets of this project.{keywords_block}

Return a JSON object with exactly one key, "description", holding a list of strings.

---
Project:
{entry_json}"""


def _keywords_block(keywords: List[str]) -> str:
    if not keywords:
        return ""
    return f"\nWhere it is truthful, emphasize these target keywords: {', '.join(keywords)}."


class ContentEnhancer:
    """
    LLM-backed rewriter for resume content.

    The provider is created on first use (from LLM_PROVIDER unless one is
    injected), so constructing an enhancer never requires API credentials.
    """

    def __init__(
        self,
        provider: LLMProvider = None,
        provider_name: str = None,
        model: str = None,
    ):
        self._provider = provider
        self.provider_name = provider_name
        self.model = model

    @property
    def provider(self) -> LLMProvider:
        if self._provider is None:
            self._provider = get_provider(provider_name=self.provider_name, model=self.model)
        return self._provider

    def _ask(self, label: str, user_prompt: str) -> str:
        response = self.provider.generate(system_prompt=_SYSTEM_PROMPT, user_prompt=user_prompt)
        log_llm_call(label, response)
        return response.content

    def extract_job_keywords(self, job_description: str) -> List[str]:
        """Ask for the job posting's key terms; short and overlong items are dropped."""
        text = self._ask(
            "job keywords",
            _KEYWORDS_PROMPT_TEMPLATE.format(
                limit=MAX_KEYWORDS, job_description=job_description[:JOB_DESCRIPTION_LIMIT]
            ),
        )
        keywords = [k.strip() for k in parse_array_response(text, fallback_count=MAX_KEYWORDS)]
        return [k for k in keywords if 2 < len(k) < 30][:MAX_KEYWORDS]

    def enhance_summary(self, summary: str, keywords: List[str]) -> str:
        text = self._ask(
            "summary",
            _SUMMARY_PROMPT_TEMPLATE.format(keywords_block=_keywords_block(keywords), summary=summary),
        )
        rewritten = text.strip().strip('"').strip()
        if not rewritten:
            raise EnhancementError("LLM returned an empty professional summary")
        return rewritten

    def enhance_work_experience(
        self, experience: WorkExperience, keywords: List[str], label: str = "work experience"
    ) -> WorkExperience:
        entry = {
            "jobTitle": experience.job_title,
            "company": experience.company,
            "responsibilities": experience.responsibilities,
            "achievements": experience.achievements,
        }
        parsed = parse_dict_response(
            self._ask(
                label,
                _WORK_PROMPT_TEMPLATE.format(
                    keywords_block=_keywords_block(keywords), entry_json=json.dumps(entry, indent=2)
                ),
            )
        )
        return dataclasses.replace(
            experience,
            responsibilities=parsed.get("responsibilities") or experience.responsibilities,
            achievements=parsed.get("achievements") or experience.achievements,
        )

    def enhance_project(self, project: Project, keywords: List[str], label: str = "project") -> Project:
        entry = {
            "name": project.name,
            "description": project.description,
            "technologies": project.technologies,
        }
        parsed = parse_dict_response(
            self._ask(
                label,
                _PROJECT_PROMPT_TEMPLATE.format(
                    keywords_block=_keywords_block(keywords), entry_json=json.dumps(entry, indent=2)
                ),
            )
        )
        return dataclasses.replace(project, description=parsed.get("description") or project.description)

    def enhance(self, resume: ResumeData, job_description: Optional[str] = None) -> ResumeData:
        """
        Return a rewritten copy of the resume; the input is not modified.

        Args:
            resume: Validated resume data
            job_description: Optional posting to optimize the content for

        Returns:
            Enhanced ResumeData

        Raises:
            EnhancementError: If the provider cannot be created or any call fails
        """
        start_time = time.time()

        try:
            log_enhancement_start(self.provider.name, job_targeted=bool(job_description))

            keywords = self.extract_job_keywords(job_description) if job_description else []
            rewritten = 0

            summary = resume.professional_summary
            if summary:
                summary = self.enhance_summary(summary, keywords)
                rewritten += 1

            work_experience = []
            for i, experience in enumerate(resume.work_experience, 1):
                work_experience.append(
                    self.enhance_work_experience(experience, keywords, label=f"work experience {i}")
                )
                rewritten += 1

            projects = []
            for i, project in enumerate(resume.projects, 1):
                projects.append(self.enhance_project(project, keywords, label=f"project {i}"))
                rewritten += 1

        except EnhancementError:
            raise
        except Exception as e:
            raise EnhancementError(f"AI enhancement failed: {e}", original_error=e) from e

        log_enhancement_result(rewritten, keywords, time.time() - start_time)
        _log_debug(f"  Summary length: {len(resume.professional_summary)} -> {len(summary)}")

        return dataclasses.replace(
            resume,
            professional_summary=summary,
            work_experience=work_experience,
            projects=projects,
        )
