import logging
import threading
from unittest.mock import patch

from pkceflow.navigation import BrowserNavigator


class TestBrowserNavigator:
    async def test_opens_url(self) -> None:
        with patch("pkceflow.navigation.webbrowser.open", return_value=True) as opener:
            await BrowserNavigator(new=2).navigate("https://idp.example.com/login")

        opener.assert_called_once_with("https://idp.example.com/login", new=2)

    async def test_browser_is_opened_off_the_event_loop(self) -> None:
        # Arrange
        threads: list[threading.Thread] = []

        def fake_open(url: str, new: int = 0) -> bool:
            threads.append(threading.current_thread())
            return True

        # Act
        with patch("pkceflow.navigation.webbrowser.open", side_effect=fake_open):
            await BrowserNavigator().navigate("https://idp.example.com/login")

        # Assert
        assert threads and threads[0] is not threading.main_thread()

    async def test_warns_when_no_browser(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="pkceflow.navigation"):
            with patch("pkceflow.navigation.webbrowser.open", return_value=False):
                await BrowserNavigator().navigate("https://idp.example.com/login")

        assert "https://idp.example.com/login" in caplog.text
