"""
Rendering Context

Responsibilities:
- Compiles LaTeX to PDF
- Parses LaTeX logs into errors and warnings
- Reports page counts of generated PDFs

Owns: LaTeX compilation, PDF generation
Never: Modifies template content
"""

from vellum.contexts.rendering.compiler import (
    CompilationError,
    CompilationResult,
    LatexCompiler,
    compile_latex,
    compile_resume,
)

__all__ = [
    "CompilationError",
    "CompilationResult",
    "LatexCompiler",
    "compile_latex",
    "compile_resume",
]
