"""
LaTeX Compilation Module

Handles compilation of .tex files (or in-memory LaTeX markup) to PDF.
"""

import os
import re
import shutil
import subprocess
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from vellum.contexts.rendering.logger import (
    _log_info,
    log_artifact_cleanup,
    log_compilation_result,
    log_compilation_start,
    setup_rendering_logger,
)
from vellum.contexts.templating.exceptions import VellumError
from vellum.utils.logger import session_log_dir
from vellum.utils.pdf_processing import page_count

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
KEEP_LATEX_ARTIFACTS = os.getenv("KEEP_LATEX_ARTIFACTS", "false").lower() == "true"

# LaTeX intermediate files created during compilation
LATEX_ARTIFACTS = [".aux", ".log", ".out", ".toc"]


class CompilationError(VellumError):
    """
    Exception raised when LaTeX markup cannot be compiled to PDF.

    Attributes:
        errors: Parsed LaTeX errors (may be empty if the compiler never ran)
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or []

        parts = [message]
        for i, err in enumerate(self.errors[:5], 1):
            parts.append(f"  Error {i}: {err}")
        if len(self.errors) > 5:
            parts.append(f"  ... and {len(self.errors) - 5} more errors")

        super().__init__("\n".join(parts))


@dataclass
class CompilationResult:
    """
    Result of LaTeX compilation.

    Attributes:
        success: Whether compilation succeeded
        pdf_path: Path to generated PDF (None if failed or compiled in a temporary directory)
        pdf_bytes: PDF content (set by LatexCompiler, which compiles in a temporary directory)
        stdout: Standard output from the compiler
        stderr: Standard error from the compiler
        errors: List of parsed LaTeX errors
        warnings: List of parsed LaTeX warnings
        page_count: Number of pages in generated PDF (None if not available)
    """

    success: bool
    pdf_path: Optional[Path] = None
    pdf_bytes: Optional[bytes] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def _parse_latex_log(log_content: str) -> tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # LaTeX error pattern: "! Error message"
    error_pattern = re.compile(r"^! (.+)$", re.MULTILINE)
    for match in error_pattern.finditer(log_content):
        errors.append(match.group(1).strip())

    # Additional error patterns that don't start with "!"
    additional_error_patterns = [
        r"Undefined control sequence",
        r"File ended while scanning use of",
        r"Emergency stop",
    ]
    for pattern in additional_error_patterns:
        match = re.search(rf"({pattern}.*?)$", log_content, re.MULTILINE)
        if match and match.group(1) not in errors:
            errors.append(match.group(1))

    # Common warning patterns
    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]

    for pattern in warning_patterns:
        compiled = re.compile(pattern, re.MULTILINE)
        for match in compiled.finditer(log_content):
            warnings.append(match.group(1).strip())

    return errors, warnings


def _remove_artifacts(tex_path: Path) -> None:
    """
    Remove intermediate LaTeX files.

    Args:
        tex_path: Path to the .tex file
    """
    base_path = tex_path.parent / tex_path.stem

    for ext in LATEX_ARTIFACTS:
        artifact_path = base_path.with_suffix(ext)
        if artifact_path.exists():
            artifact_path.unlink()


def compile_latex(
    tex_file: Path,
    compile_dir: Path,
    num_passes: int = 2,
    keep_artifacts: bool = KEEP_LATEX_ARTIFACTS,
    compiler: str = LATEX_COMPILER,
) -> CompilationResult:
    """
    Compile a LaTeX file to PDF.

    Pure compilation function - assumes compile_dir exists. The source is copied
    into compile_dir when it lives elsewhere, and the copy is removed afterwards.

    Args:
        tex_file: Path to the .tex file to compile
        compile_dir: Output directory (must exist)
        num_passes: Number of compiler passes (default: 2 for cross-references)
        keep_artifacts: Keep intermediate files (default: from KEEP_LATEX_ARTIFACTS env)
        compiler: Compiler executable (default: from LATEX_COMPILER env, else pdflatex)

    Returns:
        CompilationResult with success status and diagnostic information
    """
    original_tex_file = tex_file
    if tex_file.parent.resolve() != compile_dir.resolve():
        tex_file = compile_dir / tex_file.name
        shutil.copy2(original_tex_file, tex_file)

    # Clean any existing output files to ensure unambiguous success detection
    # Missing log file -> compilation failed; existing PDF -> compilation succeeded
    stem = tex_file.stem
    for ext in [".pdf"] + LATEX_ARTIFACTS:
        old_file = compile_dir / f"{stem}{ext}"
        if old_file.exists():
            old_file.unlink()

    all_stdout = []
    all_stderr = []

    # First pass generates .aux, later passes resolve references
    for _ in range(num_passes):
        cmd = [
            compiler,
            "-interaction=nonstopmode",
            "-file-line-error",
            tex_file.name,
        ]

        try:
            result = subprocess.run(
                cmd,
                cwd=compile_dir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
            )
        except FileNotFoundError:
            return CompilationResult(
                success=False, errors=[f"LaTeX compiler not found: {compiler}"]
            )

        all_stdout.append(result.stdout)
        all_stderr.append(result.stderr)

        # Stop on fatal errors; log parsing below separates errors from warnings
        if result.returncode != 0:
            break

    # Parse log file for detailed errors and warnings
    log_file = compile_dir / f"{stem}.log"
    errors = []
    warnings = []

    if log_file.exists():
        # pdflatex writes log files in latin-1 encoding (font metadata contains non-UTF-8)
        log_content = log_file.read_text(encoding="latin-1")
        errors, warnings = _parse_latex_log(log_content)

    # A PDF with no parsed errors counts as success even after a non-zero exit
    pdf_path = compile_dir / f"{stem}.pdf"
    success = pdf_path.exists() and len(errors) == 0
    if not pdf_path.exists() and not errors:
        errors.append("PDF file was not generated")

    if not keep_artifacts:
        _remove_artifacts(tex_file)

    if original_tex_file != tex_file and tex_file.exists():
        tex_file.unlink()

    return CompilationResult(
        success=success,
        pdf_path=pdf_path if pdf_path.exists() else None,
        stdout="\n".join(all_stdout),
        stderr="\n".join(all_stderr),
        errors=errors,
        warnings=warnings,
        page_count=page_count(pdf_path) if pdf_path.exists() else None,
    )


class LatexCompiler:
    """
    Compiles in-memory LaTeX markup to PDF bytes inside a temporary directory.

    Used by the resume renderer for PDF generation.
    """

    def __init__(self, num_passes: int = 2, compiler: str = LATEX_COMPILER):
        self.num_passes = num_passes
        self.compiler = compiler

    def run(self, markup: str, name: str = "resume") -> CompilationResult:
        """
        Compile markup and return the full result (PDF content in pdf_bytes).

        Args:
            markup: Complete LaTeX document
            name: File stem used inside the temporary directory

        Returns:
            CompilationResult (pdf_path is None: the directory is gone on return)
        """
        with tempfile.TemporaryDirectory(prefix="vellum_") as tmp:
            compile_dir = Path(tmp)
            tex_file = compile_dir / f"{name}.tex"
            tex_file.write_text(markup, encoding="utf-8")

            log_compilation_start(name, tex_file, self.num_passes, compile_dir, in_memory=True)
            start_time = time.time()

            result = compile_latex(
                tex_file=tex_file,
                compile_dir=compile_dir,
                num_passes=self.num_passes,
                keep_artifacts=False,
                compiler=self.compiler,
            )

            if result.pdf_path is not None:
                result.pdf_bytes = result.pdf_path.read_bytes()
            result.pdf_path = None

        log_compilation_result(name, result, time.time() - start_time)
        return result

    def compile(self, markup: str) -> bytes:
        """
        Compile markup to PDF bytes.

        Raises:
            CompilationError: If no PDF was produced or LaTeX reported errors
        """
        result = self.run(markup)
        if not result.success or result.pdf_bytes is None:
            raise CompilationError("LaTeX compilation failed", result.errors)
        return result.pdf_bytes


def compile_resume(
    tex_file: Path,
    output_dir: Optional[Path] = None,
    num_passes: int = 2,
    verbose: bool = False,
) -> CompilationResult:
    """
    Compile a rendered resume .tex file with session logging.

    Creates a timestamped log directory under LOGS_PATH. The PDF is written to
    output_dir (default: next to the .tex file). Artifacts are kept on failure
    for debugging and removed on success unless KEEP_LATEX_ARTIFACTS is set.

    Args:
        tex_file: Path to the .tex file to compile
        output_dir: Directory for the PDF (created if missing)
        num_passes: Number of compiler passes
        verbose: Log detailed warnings and compiler output

    Returns:
        CompilationResult with success status and diagnostic information
    """
    tex_file = Path(tex_file).resolve()
    if not tex_file.exists():
        return CompilationResult(success=False, errors=[f"TeX file not found: {tex_file}"])

    output_dir = Path(output_dir).resolve() if output_dir is not None else tex_file.parent
    output_dir.mkdir(parents=True, exist_ok=True)

    log_dir = session_log_dir("render")
    setup_rendering_logger(log_dir)

    name = tex_file.stem
    log_compilation_start(name, tex_file, num_passes, output_dir)
    start_time = time.time()

    result = compile_latex(
        tex_file=tex_file,
        compile_dir=output_dir,
        num_passes=num_passes,
        keep_artifacts=True,
    )

    log_compilation_result(name, result, time.time() - start_time, verbose=verbose)

    artifacts_tex = output_dir / tex_file.name
    if not result.success:
        log_artifact_cleanup(artifacts_tex, removed=False, reason="compilation failed")
    elif KEEP_LATEX_ARTIFACTS:
        log_artifact_cleanup(artifacts_tex, removed=False, reason="KEEP_LATEX_ARTIFACTS is set")
    else:
        _remove_artifacts(artifacts_tex)
        log_artifact_cleanup(artifacts_tex, removed=True, reason="compilation succeeded")

    if result.pdf_path:
        _log_info(f"PDF saved to: {result.pdf_path}")

    return result
