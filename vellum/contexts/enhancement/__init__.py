"""
Enhancement Context

Responsibilities:
- Rewrites resume content (summary, work bullets, project descriptions) through an LLM
- Optimizes content for a job description via extracted target keywords

Owns: Prompting, LLM provider selection, parsing rewritten content
Never: Touches LaTeX or template structure
"""

from vellum.contexts.enhancement.enhancer import ContentEnhancer

__all__ = ["ContentEnhancer"]
