"""
Template Store

Filesystem storage for author-supplied LaTeX templates.

Layout (one directory per template):
    <templates_path>/<dir>/<template_id>-standardized.tex   (preferred)
    <templates_path>/<dir>/templatecode.txt                  (original upload)
    <templates_path>/<dir>/<preview>.png|.jpg|...            (optional)

<dir> is the template id, except for ids listed in DIRECTORY_OVERRIDES.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from vellum.contexts.templating.exceptions import TemplateNotFoundError
from vellum.contexts.templating.logger import _log_debug, _log_info, _log_warning

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("TEMPLATES_PATH", "templates"))

STANDARDIZED_SUFFIX = "-standardized.tex"
ORIGINAL_FILENAME = "templatecode.txt"
PREVIEW_EXTENSIONS = (".jpeg", ".jpg", ".png", ".gif", ".webp")
PREVIEW_URL_PREFIX = "/templates"

# Template ids whose directory name differs from the id
DIRECTORY_OVERRIDES = {"template21": "template 21"}


@dataclass
class TemplateInfo:
    """Catalogue entry for one available template."""

    id: str
    name: str
    description: str
    screenshot_url: Optional[str] = None
    category: str = "professional"


def format_template_name(template_id: str) -> str:
    """
    Turn a template id into a display name.

    Example:
        >>> format_template_name("template12")
        'Template 12'
        >>> format_template_name("modernBlue")
        'Modern Blue'
    """
    name = re.sub(r"template(\d+)", r"Template \1", template_id, count=1, flags=re.IGNORECASE)
    name = re.sub(r"([A-Z])", r" \1", name).strip()
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split())


class TemplateStore:
    """Loads template sources and lists the template catalogue from a directory tree."""

    def __init__(self, templates_path: Path = None):
        """
        Args:
            templates_path: Root of the template tree. Defaults to TEMPLATES_PATH
                            from environment
        """
        self.templates_path = Path(templates_path) if templates_path is not None else TEMPLATES_PATH

    def template_dir(self, template_id: str) -> Path:
        return self.templates_path / DIRECTORY_OVERRIDES.get(template_id, template_id)

    def candidate_paths(self, template_id: str) -> List[Path]:
        """Paths tried by load(), in lookup order."""
        directory = self.template_dir(template_id)
        return [directory / f"{template_id}{STANDARDIZED_SUFFIX}", directory / ORIGINAL_FILENAME]

    def load(self, template_id: str) -> str:
        """
        Read a template's source, preferring the standardized version.

        Args:
            template_id: Template identifier

        Returns:
            Template source text

        Raises:
            TemplateNotFoundError: If neither version exists
        """
        candidates = self.candidate_paths(template_id)

        for path in candidates:
            if path.is_file():
                kind = "standardized" if path.name.endswith(STANDARDIZED_SUFFIX) else "original"
                _log_info(f"Loaded {kind} template: {template_id}")
                return path.read_text(encoding="utf-8")

        raise TemplateNotFoundError(template_id, candidates)

    def _find_preview_image(self, directory: Path, template_id: str) -> Optional[str]:
        for entry in sorted(directory.iterdir()):
            if entry.suffix.lower() in PREVIEW_EXTENSIONS:
                return f"{PREVIEW_URL_PREFIX}/{template_id}/{entry.name}"
        _log_debug(f"No preview image found for template {template_id}")
        return None

    def list_templates(self) -> List[TemplateInfo]:
        """
        List every template directory that holds a standardized or original source.

        Directories that cannot be read are skipped with a warning; a missing
        templates root yields an empty list.

        Returns:
            TemplateInfo entries sorted by directory name
        """
        if not self.templates_path.is_dir():
            _log_warning(f"Templates directory not found: {self.templates_path}")
            return []

        reverse_overrides = {directory: template_id for template_id, directory in DIRECTORY_OVERRIDES.items()}
        templates = []

        for directory in sorted(self.templates_path.iterdir()):
            if not directory.is_dir():
                continue

            template_id = reverse_overrides.get(directory.name, directory.name)
            try:
                if not any(path.is_file() for path in self.candidate_paths(template_id)):
                    continue

                templates.append(
                    TemplateInfo(
                        id=template_id,
                        name=format_template_name(template_id),
                        description=f"Professional LaTeX template - {directory.name}",
                        screenshot_url=self._find_preview_image(directory, template_id),
                    )
                )
            except OSError as e:
                _log_warning(f"Failed to process template directory {directory.name}: {e}")

        _log_info(f"Found {len(templates)} available templates in {self.templates_path}")
        return templates
