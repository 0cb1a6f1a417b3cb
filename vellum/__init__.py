"""
VELLUM - Visual-style Extraction and LaTeX Layout for Unified Markup

Renders structured resume data into LaTeX source while preserving the visual
conventions of whichever author-supplied template was chosen.

Architecture:
- Templating Context: Template style detection, marker dialects, LaTeX population
- Enhancement Context: Optional LLM rewriting of resume content
- Rendering Context: PDF compilation of generated LaTeX
"""

__version__ = "0.1.0"
