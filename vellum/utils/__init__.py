"""
Shared utilities for VELLUM.

Common functionality used across contexts:
- Logging setup and provenance
- Text processing (balanced delimiters, command lookup, blank-line normalization)
- LLM provider access and response parsing
- PDF inspection
"""
