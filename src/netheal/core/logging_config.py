"""Logging configuration for netheal."""

import logging

from rich.logging import RichHandler


def setup_logging(verbose: bool = False, level: str | None = None) -> None:
    """Configure application logging levels.

    Args:
        verbose: If True, show detailed logs including timestamps and paths.
                 If False, only show essential netheal logs.
        level: Explicit level name for the netheal logger; overrides ``verbose``.
    """
    # Root logger - suppress everything by default
    logging.getLogger().setLevel(logging.WARNING)

    netheal_level = logging.DEBUG if verbose else logging.INFO
    if level:
        netheal_level = logging.getLevelName(level.upper())
    netheal_logger = logging.getLogger("netheal")
    netheal_logger.setLevel(netheal_level)

    # Silence HTTP libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    # Configure Rich handler for netheal logs only
    if not any(isinstance(h, RichHandler) for h in netheal_logger.handlers):
        handler = RichHandler(
            show_time=verbose,
            show_path=verbose,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        netheal_logger.addHandler(handler)
        netheal_logger.propagate = False
