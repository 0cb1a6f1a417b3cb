"""
Generic logger setup utilities.

Every CLI run gets its own session directory under LOGS_PATH
(e.g. outs/logs/template_20260114_123456/) holding one log file per context.
Context-specific wrappers live in contexts/{context}/logger.py and call
setup_logger() with their context name.

Configuration (environment, .env supported):
    LOGS_PATH          Root for session directories (default: outs/logs)
    CONSOLE_LOG_LEVEL  Minimum level echoed to the console (default: INFO)
"""

import os
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
CONSOLE_LOG_LEVEL = os.getenv("CONSOLE_LOG_LEVEL", "INFO").upper()

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def session_log_dir(prefix: str, logs_path: Path = None) -> Path:
    """
    Timestamped directory for one logging session.

    Args:
        prefix: Session kind (e.g., "template" for renders, "render" for compiles)
        logs_path: Root directory (default: LOGS_PATH)

    Example:
        >>> session_log_dir("render")  # doctest: +SKIP
        PosixPath('outs/logs/render_20260114_123456')
    """
    root = logs_path if logs_path is not None else LOGS_PATH
    return root / f"{prefix}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = None,
) -> Path:
    """
    Configure loguru for a context with provenance tracking.

    Sets up dual output (file at DEBUG, console at CONSOLE_LOG_LEVEL) and logs
    a provenance header: script, command, working directory, Python version
    plus whatever the context adds (template id, compiler, LLM provider).

    Args:
        context_name: Context identifier ("template", "render", "enhance")
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})

    Returns:
        Path to log file

    Example:
        from vellum.utils.logger import session_log_dir, setup_logger

        log_file = setup_logger(
            context_name="template",
            log_dir=session_log_dir("template"),
            extra_provenance={"Template": "template12"}
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    colors = {**LEVEL_COLORS, **(level_colors or {})}
    for level_name, color in colors.items():
        logger.level(level_name, color=color)

    logger.add(
        log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}", level="DEBUG"
    )
    logger.add(
        sys.stdout,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
        level=CONSOLE_LOG_LEVEL,
        colorize=True,
    )

    log_provenance(context_name, extra_provenance)

    return log_file


def log_provenance(context_name: str, extra_context: dict = None) -> None:
    """Log the session header: how this run was started and for what."""
    logger.info("=" * 80)
    logger.info(f"Context: {context_name}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
