"""Logging for the ranking package.

Loggers live under the ``fsel.ranking`` namespace, one child per module.
Levels are used consistently:

- DEBUG: function entry, with arrays and frames summarised by shape or length
  so raw attribute values never reach the log
- INFO: completed rankings and bootstraps
- WARNING: every Advisory attached to a result, keyed by its code

The library never installs handlers; the CLI adds a rich handler for
``--verbose``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fsel.ranking.results import Advisory

# Package logger
logger = logging.getLogger("fsel.ranking")


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific submodule.

    Args:
        name: Submodule name (e.g., "bootstrap", "dense").

    Returns:
        Logger configured for the submodule.
    """
    return logging.getLogger(f"fsel.ranking.{name}")


def log_function_entry(
    logger: logging.Logger,
    func_name: str,
    **params: Any,
) -> None:
    """Log function entry with parameters.

    Args:
        logger: Logger instance.
        func_name: Name of the function.
        **params: Key parameters to log (sanitized).
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    safe_params = {}
    for key, value in params.items():
        if isinstance(value, (int, float, str, bool, type(None))):
            safe_params[key] = value
        elif hasattr(value, "shape"):
            safe_params[key] = f"<{type(value).__name__} shape={tuple(value.shape)}>"
        elif hasattr(value, "__len__") and not isinstance(value, dict):
            safe_params[key] = f"<{type(value).__name__} len={len(value)}>"
        else:
            safe_params[key] = f"<{type(value).__name__}>"

    logger.debug(f"Entering {func_name}({_pairs(safe_params)})")


def _pairs(values: dict[str, Any]) -> str:
    return ", ".join(f"{k}={v}" for k, v in values.items())


def log_result(
    logger: logging.Logger,
    message: str,
    **metrics: Any,
) -> None:
    """Log a completed computation at INFO, e.g. ``Bootstrap complete: n_boot=1000``."""
    logger.info(f"{message}: {_pairs(metrics)}" if metrics else message)


def log_warning(
    logger: logging.Logger,
    message: str,
    **context: Any,
) -> None:
    """Log a non-fatal condition at WARNING with ``key=value`` context."""
    logger.warning(f"{message} ({_pairs(context)})" if context else message)


def log_advisory(logger: logging.Logger, advisory: Advisory) -> None:
    """Log an advisory attached to a result, keyed by its code."""
    log_warning(logger, advisory.message, code=advisory.code, **advisory.context)
