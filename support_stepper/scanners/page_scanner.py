"""
Page Scanner Interface.

A page scanner reads whatever the agent is looking at (a CRM case page,
a ticket) and hands back its text so the side panel can pre-fill the
issue description. The core only ever sees the resulting query string.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 10_000


class PageContent(BaseModel):
    url: str = ""
    title: str = ""
    text: str = ""
    metadata: Dict[str, str] = Field(default_factory=dict)
    scanned_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class PageScanner(ABC):
    """
    Defines the contract for any page scanner (static fixture, browser tab, CRM).
    Scanners start disabled.
    """

    def __init__(self):
        self.enabled = False

    def is_enabled(self) -> bool:
        return self.enabled

    def enable(self) -> None:
        self.enabled = True
        logger.info(f"{type(self).__name__} enabled")

    def disable(self) -> None:
        self.enabled = False
        logger.info(f"{type(self).__name__} disabled")

    @abstractmethod
    def scan(self) -> Optional[PageContent]:
        """Returns the page content, or None when disabled or nothing is available."""
        pass


class DisabledPageScanner(PageScanner):
    """Used when page scanning is switched off. Never returns content."""

    def enable(self) -> None:
        logger.warning("DisabledPageScanner cannot be enabled")

    def scan(self) -> Optional[PageContent]:
        return None


class StaticPageScanner(PageScanner):
    """
    Returns fixed content. Stands in for a live scanner in tests and demos.
    """

    def __init__(self, content: Optional[PageContent] = None):
        super().__init__()
        self.content = content

    def scan(self) -> Optional[PageContent]:
        if not self.is_enabled():
            logger.debug("Page scanner is disabled")
            return None
        if self.content is None:
            return None
        return self.content.model_copy(update={"text": self.content.text[:MAX_TEXT_LENGTH]})


def create_page_scanner(
    kind: Literal["disabled", "static"] = "disabled",
    content: Optional[PageContent] = None,
    enabled: bool = False,
) -> PageScanner:
    if kind == "static":
        scanner = StaticPageScanner(content)
    else:
        scanner = DisabledPageScanner()
    if enabled:
        scanner.enable()
    return scanner
