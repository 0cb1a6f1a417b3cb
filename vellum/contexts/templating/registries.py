"""
Templating Registries

Caches for template-derived data, and the registry that loads the LaTeX
scaffolding snippets used by monolithic rendering.
"""

import os
from pathlib import Path
from typing import Callable, Dict, Generic, TypeVar

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

load_dotenv()
SNIPPETS_PATH = Path(os.getenv("VELLUM_SNIPPETS_PATH", Path(__file__).parent / "snippets"))

V = TypeVar("V")


class TemplateCache(Generic[V]):
    """
    Get-or-compute cache keyed by template id.

    Templates are immutable for the lifetime of the process, so entries are never
    invalidated. There is no lock: two callers racing on the same uncached id may
    both compute, which is harmless because loading and analysis are idempotent.
    """

    def __init__(self, name: str = "template"):
        self.name = name
        self._cache: Dict[str, V] = {}

    def get_or_compute(self, template_id: str, compute: Callable[[], V]) -> V:
        """
        Return the cached value for template_id, computing and storing it on a miss.

        Args:
            template_id: Cache key
            compute: Zero-argument callable producing the value

        Returns:
            Cached or freshly computed value
        """
        if template_id in self._cache:
            return self._cache[template_id]

        value = compute()
        self._cache[template_id] = value
        return value

    def is_cached(self, template_id: str) -> bool:
        return template_id in self._cache

    def clear_cache(self):
        """Clear the cache."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


class SnippetRegistry:
    """
    Registry for loading and caching Jinja2 snippets of LaTeX scaffolding.

    Snippets are stored in vellum/contexts/templating/snippets/{name}.tex.jinja
    and use custom delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>
    """

    def __init__(self, snippets_path: Path = None):
        """
        Initialize the snippet registry.

        Args:
            snippets_path: Directory holding snippet files. Defaults to
                           VELLUM_SNIPPETS_PATH from environment, else the packaged snippets
        """
        if snippets_path is None:
            snippets_path = SNIPPETS_PATH

        self.snippets_path = snippets_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(snippets_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )

    def get_snippet(self, name: str) -> Template:
        """
        Get a snippet by name, loading and caching it if necessary.

        Args:
            name: Snippet name (e.g., 'header_generic')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If snippet file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        snippet_path = f"{name}.tex.jinja"

        try:
            template = self.env.get_template(snippet_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Snippet '{name}' not found at {self.snippets_path / snippet_path}"
            ) from e

        self._cache[name] = template
        return template

    def render(self, snippet_name: str, /, **context) -> str:
        """Render a snippet with the given context."""
        return self.get_snippet(snippet_name).render(**context)

    def is_cached(self, name: str) -> bool:
        return name in self._cache
