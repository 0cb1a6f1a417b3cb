"""
Templating Context

Responsibilities:
- Validates and normalizes resume data (structured data model for resume content)
- Loads LaTeX templates from the template store and lists the catalogue
- Detects each template's formatting conventions (spacing, headers, bullets, macros)
- Fills templates: personal info, whole-body generation or per-section injection,
  block-conditional and loop marker dialects, placeholder cleanup
- Escapes user text into LaTeX-safe text

Owns: Resume data model, template style detection, marker interpretation, LaTeX text output
Never: Rewrites content (enhancement context) or runs the LaTeX compiler (rendering context)
"""

from vellum.contexts.templating.exceptions import (
    EnhancementError,
    RenderError,
    ResumeValidationError,
    TemplateNotFoundError,
    VellumError,
)
from vellum.contexts.templating.orchestrator import (
    RenderMode,
    RenderOptions,
    ResumeRenderer,
)
from vellum.contexts.templating.resume_data_structure import (
    ResumeData,
    validate_resume_data,
)
from vellum.contexts.templating.style_analyzer import (
    TemplateStyle,
    TemplateStyleAnalyzer,
    detect_template_style,
)
from vellum.contexts.templating.template_store import TemplateInfo, TemplateStore

__all__ = [
    # Rendering orchestration
    "ResumeRenderer",
    "RenderOptions",
    "RenderMode",
    # Template storage
    "TemplateStore",
    "TemplateInfo",
    # Style detection
    "TemplateStyle",
    "TemplateStyleAnalyzer",
    "detect_template_style",
    # Data structure and validation
    "ResumeData",
    "validate_resume_data",
    # Errors
    "VellumError",
    "ResumeValidationError",
    "TemplateNotFoundError",
    "EnhancementError",
    "RenderError",
]
