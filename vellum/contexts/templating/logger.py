"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, template_id: str = None) -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session
        template_id: Template being rendered (recorded in provenance)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Template": template_id},
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_render_start(template_id: str, mode: str, enhance: bool) -> None:
    """Log start of a render with its decided mode."""
    _log_info(f"Rendering template {template_id} ({mode.lower()} mode)")
    _log_debug(f"  AI enhancement requested: {enhance}")


def log_style_detected(template_id: str, style) -> None:
    """
    Log the detected style descriptor for a template.

    Args:
        template_id: Template identifier
        style: TemplateStyle from the style analyzer
    """
    _log_info(
        f"Template {template_id} style: spacing={style.spacing.value}, "
        f"header={style.header_style.value}, itemize={style.uses_itemize}"
    )
    if style.custom_commands:
        _log_debug(f"  Custom commands: {', '.join(style.custom_commands)}")


def log_render_result(template_id: str, latex: str, elapsed_time: float) -> None:
    """Log successful render with output size."""
    _log_success(f"{template_id}: LaTeX generated ({len(latex)} characters, {elapsed_time:.2f}s)")


def log_cleanup_result(removed_placeholders: int, iterations: int) -> None:
    """Log what the cleanup pass had to strip."""
    if removed_placeholders > 0:
        _log_debug(
            f"Removed {removed_placeholders} unprocessed placeholders in {iterations} iterations"
        )
