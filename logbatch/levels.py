"""Log level filtering — ordinal ranks and a configurable threshold."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

LEVELS = {
    "debug": 10,
    "info": 20,
    "warn": 30,
    "error": 40,
}


def level_value(level: Optional[str]) -> int:
    """Return the ordinal of *level*, or -1 if unknown."""
    if not isinstance(level, str):
        return -1
    return LEVELS.get(level.strip().lower(), -1)


class LevelFilter:
    """Suppresses events ranked below the configured threshold.

    The default threshold is 0, so nothing is filtered until a valid level
    has been configured.
    """

    def __init__(self) -> None:
        self._threshold = 0

    @property
    def threshold(self) -> int:
        return self._threshold

    def configure(self, level: Optional[str]) -> bool:
        """Set the threshold from a level name.

        Unknown or missing names leave the previous threshold in place and
        log a warning. Returns True when the threshold was updated.
        """
        value = level_value(level)
        if value == -1:
            logger.warning("invalid log level: %r", level)
            return False
        self._threshold = value
        return True

    def allows(self, level: str) -> bool:
        """Return True if *level* ranks at or above the threshold."""
        return level_value(level) >= self._threshold
