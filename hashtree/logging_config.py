"""
Logging configuration for Hashtree.

Provides centralized structured logging setup with JSON output for production
and human-readable output for development.

Importing this module does not touch structlog's global configuration. Loggers
from get_logger always wrap a stdlib logger, so until setup_logging runs their
events are filtered and routed by whatever stdlib logging the host application
has set up.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import structlog


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for Hashtree.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs only to stderr.
        json_format: If True, use JSON format. If False, use human-readable format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=log_file is None))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance for a specific module.

    Args:
        name: Logger name (typically __name__ of the module). Names outside
            the hashtree namespace are prefixed with "hashtree.".

    Returns:
        Structured logger instance.
    """
    if not (name == "hashtree" or name.startswith("hashtree.")):
        name = f"hashtree.{name}"
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def log_tree_build(
    logger: structlog.stdlib.BoundLogger,
    leaf_count: int,
    depth: int,
    merkle_root: str,
    duration_ms: float,
    **kwargs: Any,
) -> None:
    """
    Log a full (re)build of the tree layers.

    Args:
        logger: Logger instance
        leaf_count: Number of leaves in layer 0
        depth: Number of layers, root layer included
        merkle_root: Computed root (hex encoded)
        duration_ms: Build duration in milliseconds
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "tree_build",
        "leaf_count": leaf_count,
        "depth": depth,
        "merkle_root": merkle_root,
        "duration_ms": duration_ms,
    }

    log_data.update(kwargs)

    logger.debug("tree_build", **log_data)


def log_proof_verification(
    logger: structlog.stdlib.BoundLogger,
    success: bool,
    proof_length: int,
    failure_reason: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log the outcome of a proof verification.

    A failed verification is an ordinary result, not an error, so both
    outcomes are logged at DEBUG.

    Args:
        logger: Logger instance
        success: Whether the recomputed root matched
        proof_length: Number of steps in the proof
        failure_reason: Reason for failure if not successful
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "proof_verification",
        "success": success,
        "proof_length": proof_length,
    }

    if failure_reason is not None:
        log_data["failure_reason"] = failure_reason

    log_data.update(kwargs)

    if success:
        logger.debug("proof_verification", **log_data)
    else:
        logger.debug("proof_verification_failed", **log_data)
