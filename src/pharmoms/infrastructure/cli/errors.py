"""Mapping of failures to CLI errors."""

from __future__ import annotations

import click
import structlog

from pharmoms.infrastructure.config import get_settings

logger = structlog.get_logger(__name__)


def unexpected_error(action: str, exc: Exception) -> click.ClickException:
    """Log an unexpected failure and build the message shown to the user.

    Details are only shown with ``PHARMOMS_DEBUG`` on; the log always has
    the traceback.
    """
    logger.exception(f"Failed to {action}", error=str(exc))
    if get_settings().debug:
        return click.ClickException(f"Failed to {action}: {exc}")
    return click.ClickException(f"Failed to {action}")
