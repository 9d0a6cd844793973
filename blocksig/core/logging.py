# ------------------------------------------------------------
# Module: blocksig/core/logging.py
# Purpose: Configure unified logging for the CLI, the server, and the engine.
# ------------------------------------------------------------

"""Unified logging configuration for blocksig.

Summary:
    Centralizes all logging setup so file mode, server mode, and Uvicorn share
    one format and level.

Details:
    - Reads verbosity and access log settings from `Settings`.
    - Prefixes every line with the run mode (`[File] ` / `[Server] `) when given.
    - Writes to a log file when requested, falling back to stdout if it
      cannot be opened.
    - Supports a full mute mode for CI or benchmark runs.

Developer Guidance:
    - Call `configure_logging()` once at process entry (see `blocksig/cli.py`).
    - Always retrieve module loggers via `logging.getLogger("blocksig.<area>")`.
    - Never modify logging configuration directly in other modules.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from blocksig.core.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _open_handler(log_file: str | Path | None) -> logging.Handler:
    if log_file:
        try:
            return logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            print(f"Unable to open log file {log_file}: {e}", file=sys.stderr)
    return logging.StreamHandler(sys.stdout)


def configure_logging(
    prefix: str = "",
    log_file: str | Path | None = None,
    settings: Settings | None = None,
) -> None:
    """Configure global logging behavior for the entire process.

    Behavior:
        - Disables all logs if `MUTE_ALL_LOGS` is True.
        - Otherwise installs one handler (file or stdout) with a uniform format.
        - Aligns Uvicorn's internal loggers with the global level.
        - Disables Uvicorn access logs if `ACCESS_LOG` is False.

    Example:
        >>> from blocksig.core.logging import configure_logging
        >>> configure_logging(prefix="[File] ")
        >>> logging.getLogger("blocksig").info("Logging configured")
    """
    cfg = settings or default_settings
    if cfg.MUTE_ALL_LOGS:
        # Completely silence all logs (useful for tests or benchmarks)
        logging.disable(logging.CRITICAL)
        return

    handler = _open_handler(log_file)
    handler.setFormatter(logging.Formatter(prefix + LOG_FORMAT))
    logging.basicConfig(level=cfg.LOG_LEVEL, handlers=[handler], force=True)

    # Sync all key loggers (including uvicorn internals)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(cfg.LOG_LEVEL)

    if not cfg.ACCESS_LOG:
        logging.getLogger("uvicorn.access").disabled = True


def mode_prefix(is_file: bool, is_server: bool) -> str:
    """Return the log line prefix for the active run mode."""
    if is_file:
        return "[File] "
    if is_server:
        return "[Server] "
    return ""


__all__ = ["LOG_FORMAT", "configure_logging", "mode_prefix"]
