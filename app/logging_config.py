"""Logging setup for the API and CLI."""
import logging
from typing import Iterable, Optional, Union


def configure_logging(
    level: Union[int, str] = logging.INFO,
    handlers: Optional[Iterable[logging.Handler]] = None,
) -> None:
    """Configure root logging with one consistent format."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=list(handlers) if handlers else None,
    )
