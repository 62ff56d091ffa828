"""Navigation of the user agent to the identity provider."""

from __future__ import annotations

import asyncio
import logging
import webbrowser
from collections.abc import Awaitable
from typing import Protocol

logger = logging.getLogger(__name__)


class Navigator(Protocol):
    """Protocol for sending the user agent to a URL.

    Navigation may end the current execution context, so nothing after a
    ``navigate`` call is guaranteed to run.
    """

    def navigate(self, url: str) -> None | Awaitable[None]: ...


class BrowserNavigator:
    """Opens URLs in the system web browser.

    The browser is launched in a worker thread, since console browsers block
    until they exit.
    """

    def __init__(self, new: int = 0):
        """Initialize the navigator.

        Args:
            new: ``webbrowser.open`` target (0 same window, 1 new window,
                2 new tab)
        """
        self.new = new

    async def navigate(self, url: str) -> None:
        logger.debug("Opening browser for identity provider redirect")
        if not await asyncio.to_thread(webbrowser.open, url, new=self.new):
            logger.warning(f"No browser available, visit this URL: {url}")
