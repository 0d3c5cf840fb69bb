"""
UI automation driver - the chat-specific sequences on top of the engine.

The driver only moves the UI. Putting the prompt on the clipboard and reading
the response back off it is the orchestrator's job.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from chatgpt_desktop_mcp.automation.engine import AutomationEngine
from chatgpt_desktop_mcp.automation.script_model import (
    AutomationScript,
    build_ask_script,
    build_capture_script,
    build_focus_script,
)
from chatgpt_desktop_mcp.models import AutomationSettings, NEW_CHAT_TITLE


class UIAutomationDriver:
    def __init__(
        self,
        engine: AutomationEngine,
        settings: AutomationSettings,
        logger: Optional[Callable[[str], None]] = None,
    ):
        self._engine = engine
        self._settings = settings
        self._logger = logger

    def perform_ask(self, prompt_text: str, conversation_id: Optional[str] = None) -> None:
        """Paste the clipboard into the input field and submit it.

        ``prompt_text`` must already be on the clipboard.
        """
        target = f"conversation '{conversation_id}'" if conversation_id else "current conversation"
        self._log(f"Submitting prompt ({len(prompt_text)} chars) to {target}")
        self._run(build_ask_script(self._settings, conversation_id))

    def capture_response(self) -> None:
        """Wait until generation finishes, then copy the response to the clipboard."""
        self._run(build_capture_script(self._settings))

    def extract_conversation_titles(self) -> List[str]:
        """Titles of the sidebar conversations in UI order, without the "New chat" entry."""
        self._run(build_focus_script(self._settings))
        raw = self._engine.backend.element_names()
        return filter_conversation_titles(raw)

    def _run(self, script: AutomationScript) -> None:
        self._engine.run(script)

    def _log(self, msg: str) -> None:
        if self._logger:
            self._logger(msg)


def filter_conversation_titles(raw: Any) -> List[str]:
    if not isinstance(raw, (list, tuple)):
        return []
    return [
        str(title)
        for title in raw
        if title is not None and str(title).strip() and str(title) != NEW_CHAT_TITLE
    ]
