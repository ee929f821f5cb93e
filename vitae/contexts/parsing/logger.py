"""
Parsing context logger.

Provides logging interface for the parsing context with automatic [parse] prefix.
All parsing modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[parse]"


def setup_parsing_logger(log_dir: Path, language: str = "en") -> Path:
    """
    Setup logger for a parsing session.

    Args:
        log_dir: Directory for this parsing session
        language: Document language, recorded in the provenance header

    Returns:
        Path to log file

    Example:
        from vitae.contexts.parsing.logger import setup_parsing_logger, _log_info

        log_file = setup_parsing_logger(log_dir, language="fr")
        _log_info("Starting parse...")
    """
    return _setup_logger(
        context_name="parse",
        log_dir=log_dir,
        extra_provenance={"Language": language},
    )


# Wrapper functions with automatic [parse] prefix


def _log_info(message: str) -> None:
    """Log info message with [parse] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [parse] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [parse] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [parse] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [parse] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level parsing-specific logging helpers


def log_strategy_result(strategy_name: str, section_ids) -> None:
    """Log which parse strategy produced the sections."""
    _log_debug(f"Strategy '{strategy_name}' produced {len(section_ids)} section(s)")
    _log_debug(f"  Ids: {', '.join(section_ids)}")


def log_header_result(header) -> None:
    """Log which header fields were found (HeaderInfo)."""
    found = [key for key, value in header.to_dict().items() if value and key != "name"]
    _log_debug(f"Header for '{header.name}': found {', '.join(found) if found else 'no contact fields'}")
