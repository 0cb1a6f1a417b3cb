"""
Template Style Analyzer

Infers a template's formatting conventions by inspecting its LaTeX source.
Results are memoized per template id: templates are immutable for the lifetime
of the process, so a style is computed at most once per id.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List

from vellum.contexts.templating.latex_patterns import (
    DetectionRegex,
    StructuralMacros,
    StyleMarkers,
)
from vellum.contexts.templating.logger import log_style_detected
from vellum.contexts.templating.registries import TemplateCache


class Spacing(str, Enum):
    COMPACT = "compact"
    NORMAL = "normal"
    SPACIOUS = "spacious"


class HeaderStyle(str, Enum):
    SIMPLE = "simple"
    CUSTOM = "custom"
    COMPLEX = "complex"


@dataclass
class TemplateStyle:
    """
    Formatting conventions detected in a template.

    Attributes:
        has_custom_commands: Template defines at least one \\newcommand
        custom_commands: Defined command names, followed by any recognized
            structural macros the template uses
        uses_sections: Template provides a section-heading macro
        uses_itemize: Lists should use itemize (False for templates that bullet manually)
        spacing: Vertical rhythm of the template
        header_style: How the contact header is built
    """

    has_custom_commands: bool = False
    custom_commands: List[str] = field(default_factory=list)
    uses_sections: bool = False
    uses_itemize: bool = True
    spacing: Spacing = Spacing.NORMAL
    header_style: HeaderStyle = HeaderStyle.SIMPLE

    def has_command(self, name: str) -> bool:
        """Check whether a command name is available in this template."""
        return name in self.custom_commands


def detect_template_style(template: str) -> TemplateStyle:
    """
    Detect the style of a template from its source text.

    Each rule is evaluated independently:
    - \\newcommand{\\Name} definitions populate custom_commands
    - Contact-info macro -> custom header
    - New-section macro -> uses_sections
    - Skills-entry macro -> recorded (and disables itemize)
    - Compact / spacious spacing markers -> spacing
    - Manual bullet markers -> no itemize

    Args:
        template: LaTeX template source

    Returns:
        Detected TemplateStyle
    """
    style = TemplateStyle()

    style.custom_commands = re.findall(DetectionRegex.NEWCOMMAND_DEFINITION, template)
    style.has_custom_commands = len(style.custom_commands) > 0

    if f"\\{StructuralMacros.CONTACT_INFO}" in template:
        style.header_style = HeaderStyle.CUSTOM
        style.custom_commands.append(StructuralMacros.CONTACT_INFO)
    if f"\\{StructuralMacros.NEW_SECTION}" in template:
        style.uses_sections = True
        style.custom_commands.append(StructuralMacros.NEW_SECTION)
    if f"\\{StructuralMacros.SKILLS_ENTRY}" in template:
        style.custom_commands.append(StructuralMacros.SKILLS_ENTRY)

    if any(marker in template for marker in StyleMarkers.COMPACT_SPACING):
        style.spacing = Spacing.COMPACT
    elif any(marker in template for marker in StyleMarkers.SPACIOUS_SPACING):
        style.spacing = Spacing.SPACIOUS

    if any(marker in template for marker in StyleMarkers.NON_LIST_BULLETS) or style.has_command(
        StructuralMacros.SKILLS_ENTRY
    ):
        style.uses_itemize = False

    return style


class TemplateStyleAnalyzer:
    """
    Memoizing front end for detect_template_style().

    The cache is owned by the analyzer (and the analyzer by the renderer), so cold
    and warm behavior can be exercised independently in tests.
    """

    def __init__(
        self,
        cache: TemplateCache = None,
        detector: Callable[[str], TemplateStyle] = detect_template_style,
    ):
        self.cache = cache if cache is not None else TemplateCache("style")
        self.detector = detector

    def analyze(self, template: str, template_id: str) -> TemplateStyle:
        """
        Return the style for a template, detecting it on first use of template_id.

        Args:
            template: LaTeX template source
            template_id: Cache key

        Returns:
            TemplateStyle (the same object for repeated calls with one id)
        """
        def compute() -> TemplateStyle:
            style = self.detector(template)
            log_style_detected(template_id, style)
            return style

        return self.cache.get_or_compute(template_id, compute)
