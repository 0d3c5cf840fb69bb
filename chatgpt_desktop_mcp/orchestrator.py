"""
Automation orchestrator - the two operations the tool exposes.

SRP: composes lifecycle, clipboard and UI driver; knows nothing about the
request format or the response envelope.
"""

from __future__ import annotations

from typing import List, Optional

from chatgpt_desktop_mcp.app_lifecycle import AppLifecycleManager
from chatgpt_desktop_mcp.clipboard_bridge import ClipboardBridge
from chatgpt_desktop_mcp.logger import StatusLogger
from chatgpt_desktop_mcp.ui_driver import UIAutomationDriver


class AutomationOrchestrator:
    def __init__(
        self,
        lifecycle: AppLifecycleManager,
        clipboard: ClipboardBridge,
        driver: UIAutomationDriver,
        logger: StatusLogger,
    ):
        self._lifecycle = lifecycle
        self._clipboard = clipboard
        self._driver = driver
        self._logger = logger

    def ask(self, prompt_text: str, conversation_id: Optional[str] = None) -> str:
        """
        Send ``prompt_text`` and return the copied response.

        The user's clipboard is captured before the prompt is placed on it
        and restored exactly once, whether the run succeeds or raises.
        """
        self._logger.update_status("Asking")
        self._lifecycle.ensure_running()

        with self._clipboard.preserved():
            self._clipboard.set(prompt_text)
            self._driver.perform_ask(prompt_text, conversation_id)
            self._driver.capture_response()
            response = self._clipboard.get()

        self._logger.update_status(f"Response captured ({len(response)} chars)")
        return response

    def list_conversations(self) -> List[str]:
        self._logger.update_status("Listing conversations")
        self._lifecycle.ensure_running()
        titles = self._driver.extract_conversation_titles()
        self._logger.update_status(f"Found {len(titles)} conversation(s)")
        return titles
