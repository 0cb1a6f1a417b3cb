"""
Rendering context logger.

All messages carry the [render] prefix. Two compile paths report here:
file compilation from the CLI (compile_resume, its own session log) and
in-memory compilation for ResumeRenderer.generate_pdf (LatexCompiler, which
logs into whatever session is active).
"""

import os
from pathlib import Path
from typing import Callable, List

from dotenv import load_dotenv
from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path) -> Path:
    """Start a compile session log (records which LaTeX compiler is configured)."""
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"LaTeX compiler": os.getenv("LATEX_COMPILER", "pdflatex")},
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_numbered(items: List[str], label: str, limit: int, log: Callable[[str], None]) -> None:
    for i, item in enumerate(items[:limit], 1):
        log(f"  {label} {i}: {item}")
    if len(items) > limit:
        log(f"  ... and {len(items) - limit} more {label.lower()}s")


def log_compilation_start(
    name: str,
    source: Path,
    num_passes: int,
    compile_dir: Path,
    in_memory: bool = False,
) -> None:
    """
    Log what is about to be compiled.

    Args:
        name: Document identifier (file stem)
        source: .tex file handed to the compiler
        num_passes: Compiler passes requested
        compile_dir: Directory the compiler runs in
        in_memory: Markup came from the renderer (temporary directory, nothing kept)
    """
    origin = "rendered markup" if in_memory else "file"
    _log_info(f"Compiling {name} from {origin} ({num_passes} passes)")
    _log_debug(f"  Source: {source}")
    _log_debug(f"  Working directory: {compile_dir}")


def log_compilation_result(name: str, result, elapsed_time: float, verbose: bool = False) -> None:
    """
    Log a CompilationResult: outcome, page count, parsed diagnostics.

    Compiler stdout/stderr go to the log file when compilation failed or
    verbose is set.
    """
    if result.success:
        pages = f", {result.page_count} pages" if result.page_count is not None else ""
        _log_success(f"{name}: PDF ready{pages}, {len(result.warnings)} warnings ({elapsed_time:.2f}s)")
    else:
        _log_error(f"{name}: compilation failed with {len(result.errors)} errors ({elapsed_time:.2f}s)")
        _log_numbered(result.errors, "Error", 10 if verbose else 5, _log_error)

    _log_numbered(result.warnings, "Warning", 10 if verbose else 3, _log_debug)

    if verbose or not result.success:
        for stream, text in (("STDOUT", result.stdout), ("STDERR", result.stderr)):
            if text:
                logger.opt(raw=True).debug(f"\n{'=' * 80}\nCOMPILER {stream}:\n{'=' * 80}\n{text}\n")


def log_artifact_cleanup(tex_file: Path, removed: bool, reason: str) -> None:
    """Record whether .aux/.log/.out/.toc next to tex_file were kept or removed."""
    action = "Removed" if removed else "Keeping"
    _log_debug(f"{action} LaTeX artifacts for {tex_file.name}: {reason}")
