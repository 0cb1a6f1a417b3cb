"""
Enhancement context logger.

Provides logging interface for enhancement context with automatic [enhance] prefix.
All enhancement modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[enhance]"


def setup_enhancement_logger(log_dir: Path) -> Path:
    """
    Setup logger for enhancement context.

    Args:
        log_dir: Directory for this enhancement session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="enhance",
        log_dir=log_dir,
        extra_provenance={"LLM provider": os.getenv("LLM_PROVIDER", "openai")},
    )


# Wrapper functions with automatic [enhance] prefix


def _log_info(message: str) -> None:
    """Log info message with [enhance] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [enhance] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [enhance] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [enhance] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [enhance] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level enhancement-specific logging helpers


def log_enhancement_start(provider_name: str, job_targeted: bool) -> None:
    """Log which provider is used and whether a job description drives the rewrite."""
    mode = "job-targeted optimization" if job_targeted else "general enhancement"
    _log_info(f"Enhancing resume content with {provider_name} ({mode})")


def log_llm_call(label: str, response) -> None:
    """
    Log token usage of one LLM call.

    Args:
        label: What the call rewrote (e.g., "summary", "work experience 2")
        response: LLMResponse from the provider
    """
    _log_debug(
        f"  {label}: {response.input_tokens} in / {response.output_tokens} out tokens"
        f" ({response.total_tokens} total, {response.model})"
    )


def log_enhancement_result(rewritten: int, keywords: list, elapsed_time: float) -> None:
    """Log a completed enhancement."""
    _log_success(f"Content enhanced: {rewritten} parts rewritten ({elapsed_time:.2f}s)")
    if keywords:
        _log_debug(f"  Target keywords: {', '.join(keywords)}")
