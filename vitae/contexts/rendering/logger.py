"""
Rendering context logger.

Provides logging interface for the rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, template_id: str = "") -> Path:
    """
    Setup logger for a rendering session.

    Args:
        log_dir: Directory for this rendering session
        template_id: Requested skin, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Template": template_id or "(default)"},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_template_fallback(requested_id: str, fallback_id: str, reason: str) -> None:
    """Log a catalog lookup that fell back to the default skin."""
    _log_warning(f"Template '{requested_id}' {reason}, using '{fallback_id}'")


def log_render_result(template_id: str, injected: int, removed: int, stripped: int) -> None:
    """Log what a render pass did to the skeleton."""
    _log_debug(
        f"Rendered '{template_id}': {injected} section(s) injected, "
        f"{removed} container(s) removed, {stripped} leftover placeholder(s) stripped"
    )


def log_validation_result(template_id: str, issues) -> None:
    """Log the outcome of a skin output check."""
    if issues:
        _log_error(f"Template '{template_id}' failed output validation ({len(issues)} issue(s))")
        for issue in issues:
            _log_error(f"  {issue}")
    else:
        _log_success(f"Template '{template_id}' passed output validation")
