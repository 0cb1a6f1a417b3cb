"""
Render Orchestrator

Sequences the full rendering pipeline for one request:

    validate -> load template (cached) -> analyze style (cached)
    -> enhance (optional, non-fatal) -> inject personal info and summary
    -> MONOLITHIC: generate whole body | SECTIONED: inject each section
    -> loop dialect (if the template uses it) -> cleanup

Error policy: validation and template-not-found errors reach the caller as-is;
enhancement failures of any kind are logged and the original data is used; anything else is
logged in full and re-raised as a RenderError with a generic message.
"""

import hashlib
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from vellum.contexts.templating.exceptions import (
    GENERIC_PDF_FAILURE,
    RenderError,
    ResumeValidationError,
    TemplateNotFoundError,
)
from vellum.contexts.templating.latex_generator import StyleAwareContentGenerator
from vellum.contexts.templating.latex_patterns import Placeholders
from vellum.contexts.templating.logger import (
    _log_debug,
    _log_error,
    _log_warning,
    log_render_result,
    log_render_start,
)
from vellum.contexts.templating.personal_info import inject_personal_info, invokes_contact_macro
from vellum.contexts.templating.registries import SnippetRegistry, TemplateCache
from vellum.contexts.templating.resume_data_structure import ResumeData, validate_resume_data
from vellum.contexts.templating.section_processor import (
    cleanup_placeholders,
    has_loop_markers,
    inject_sections,
    render_loop_sections,
)
from vellum.contexts.templating.style_analyzer import TemplateStyle, TemplateStyleAnalyzer
from vellum.contexts.templating.template_store import TemplateStore

# Style-cache key prefix for sources passed in directly (never stored in the template cache)
CUSTOM_TEMPLATE_ID = "custom"


class RenderMode(str, Enum):
    MONOLITHIC = "MONOLITHIC"
    SECTIONED = "SECTIONED"


def decide_render_mode(template: str) -> RenderMode:
    """A template with a single whole-body marker is filled monolithically."""
    if Placeholders.TEMPLATE_CONTENT in template:
        return RenderMode.MONOLITHIC
    return RenderMode.SECTIONED


def custom_style_key(template_id: str, template: str) -> str:
    """Style-cache key for caller-supplied source: same id with different code gets its own entry."""
    digest = hashlib.sha256(template.encode("utf-8")).hexdigest()[:16]
    return f"{CUSTOM_TEMPLATE_ID}:{template_id}:{digest}"


@dataclass
class RenderOptions:
    """
    Per-request rendering options.

    Attributes:
        enhance_with_ai: Rewrite content through the enhancement collaborator first
        job_description: Posting to optimize for (only used with enhance_with_ai)
        custom_template_code: Template source to use instead of loading template_id
    """

    enhance_with_ai: bool = False
    job_description: Optional[str] = None
    custom_template_code: Optional[str] = None


class ResumeRenderer:
    """
    Renders resume data into LaTeX, preserving the chosen template's style.

    Collaborators (template store, enhancer, compiler) are injected; the
    template-source and style caches are owned by the renderer instance.
    """

    def __init__(
        self,
        store: TemplateStore = None,
        enhancer=None,
        compiler=None,
        style_analyzer: TemplateStyleAnalyzer = None,
        template_cache: TemplateCache = None,
        snippets: SnippetRegistry = None,
    ):
        """
        Args:
            store: Template storage (default: TemplateStore at TEMPLATES_PATH)
            enhancer: Object with enhance(resume, job_description) -> ResumeData
            compiler: Object with compile(markup) -> bytes (needed by generate_pdf)
            style_analyzer: Memoizing style analyzer (default: a fresh one)
            template_cache: Cache for template sources (default: a fresh one)
            snippets: LaTeX scaffolding snippets (default: packaged snippets)
        """
        self.store = store or TemplateStore()
        self.enhancer = enhancer
        self.compiler = compiler
        self.style_analyzer = style_analyzer or TemplateStyleAnalyzer()
        self.template_cache = template_cache if template_cache is not None else TemplateCache("source")
        self.snippets = snippets or SnippetRegistry()
        self.content_generator = StyleAwareContentGenerator(self.snippets)

    def load_template(self, template_id: str) -> str:
        """Template source for an id, read from the store at most once."""
        return self.template_cache.get_or_compute(template_id, lambda: self.store.load(template_id))

    def _enhance(self, resume: ResumeData, job_description: Optional[str]) -> ResumeData:
        if self.enhancer is None:
            _log_warning("AI enhancement requested but no enhancer is configured; using original data")
            return resume

        # Any enhancer failure, or a result that no longer validates, falls back to the input
        try:
            return validate_resume_data(self.enhancer.enhance(resume, job_description))
        except Exception as e:
            _log_warning(f"AI enhancement failed, using original content: {type(e).__name__}: {e}")
            return resume

    def _render_body(self, template: str, resume: ResumeData, style: TemplateStyle, mode: RenderMode) -> str:
        result = inject_personal_info(template, resume, style, self.snippets)

        if mode == RenderMode.MONOLITHIC:
            content = self.content_generator.generate(
                resume, style, include_header=not invokes_contact_macro(template)
            )
            result = result.replace(Placeholders.TEMPLATE_CONTENT, content)
        else:
            result = inject_sections(result, resume, style)

        if has_loop_markers(result):
            result = render_loop_sections(result, resume)

        return cleanup_placeholders(result)

    def render(
        self,
        resume_data: Union[ResumeData, Mapping[str, Any]],
        template_id: str,
        options: RenderOptions = None,
    ) -> str:
        """
        Render resume data into a LaTeX document using a template.

        Args:
            resume_data: ResumeData or a camelCase / snake_case mapping
            template_id: Template identifier (cache key for source and style)
            options: Rendering options (default: RenderOptions())

        Returns:
            LaTeX document text with no marker syntax left

        Raises:
            ResumeValidationError: Missing first name, last name or email
            TemplateNotFoundError: Template exists in neither storage variant
            RenderError: Any other failure (generic message, cause chained)
        """
        options = options or RenderOptions()
        start_time = time.time()

        try:
            resume = validate_resume_data(resume_data)

            if options.custom_template_code is not None:
                template = options.custom_template_code
                style_key = custom_style_key(template_id, template)
            else:
                template = self.load_template(template_id)
                style_key = template_id

            style = self.style_analyzer.analyze(template, style_key)
            mode = decide_render_mode(template)
            log_render_start(template_id, mode.value, options.enhance_with_ai)

            if options.enhance_with_ai:
                resume = self._enhance(resume, options.job_description)

            latex = self._render_body(template, resume, style, mode)

        except (ResumeValidationError, TemplateNotFoundError):
            raise
        except Exception as e:
            _log_error(f"Rendering {template_id} failed: {type(e).__name__}: {e}")
            raise RenderError(template_id=template_id, original_error=e) from e

        log_render_result(template_id, latex, time.time() - start_time)
        return latex

    def generate_pdf(
        self,
        resume_data: Union[ResumeData, Mapping[str, Any]],
        template_id: str,
    ) -> bytes:
        """
        Render without AI enhancement and compile the result to PDF.

        Raises:
            ResumeValidationError: Missing mandatory personal fields
            TemplateNotFoundError: Unknown template
            RenderError: Rendering or compilation failed (generic PDF message)
        """
        latex = self.render(resume_data, template_id, RenderOptions(enhance_with_ai=False))

        try:
            if self.compiler is None:
                raise RuntimeError("No LaTeX compiler configured")
            pdf = self.compiler.compile(latex)
        except Exception as e:
            _log_error(f"PDF generation for {template_id} failed: {type(e).__name__}: {e}")
            raise RenderError(GENERIC_PDF_FAILURE, template_id=template_id, original_error=e) from e

        _log_debug(f"{template_id}: PDF generated ({len(pdf)} bytes)")
        return pdf
