"""Write-once per-turn announcement slot."""

from __future__ import annotations

import logging
from typing import Optional


logger = logging.getLogger(__name__)


class AnnouncementSlot:
    """Holds at most one announcement; later writes in the same turn are ignored."""

    __slots__ = ("_text",)

    def __init__(self) -> None:
        self._text: Optional[str] = None

    @property
    def is_set(self) -> bool:
        return self._text is not None

    def announce(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"announcement must be a str, got {type(text).__name__}")
        if self._text is not None:
            logger.debug("Ignoring announcement %r, slot already holds %r", text, self._text)
            return
        self._text = text

    def read(self) -> Optional[str]:
        return self._text
