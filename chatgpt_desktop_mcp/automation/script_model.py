"""
Automation script data model and the chat scripts built from settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from chatgpt_desktop_mcp.models import AutomationSettings
from .actions import (
    Activate,
    BaseAction,
    Click,
    CLEAR,
    COPY,
    Delay,
    PASTE,
    PollUntilAbsent,
    SELECT_ALL,
    SUBMIT,
)


@dataclass
class AutomationScript:
    name: str
    actions: List[BaseAction] = field(default_factory=list)

    def describe(self) -> List[str]:
        return [action.describe() for action in self.actions]


def build_ask_script(settings: AutomationSettings, conversation_id: Optional[str] = None) -> AutomationScript:
    """Activate, optionally select a conversation, replace the input with the clipboard and submit.

    The conversation must be selected before the input is cleared: clearing
    acts on whichever input field has focus.
    """
    actions: List[BaseAction] = [Activate(), Delay(settings.activate_delay)]
    if conversation_id:
        actions.append(Click(conversation_id))
    actions += [
        Delay(settings.step_delay),
        SELECT_ALL,
        CLEAR,
        PASTE,
        Delay(settings.step_delay),
        SUBMIT,
    ]
    return AutomationScript(name="ask", actions=actions)


def build_capture_script(settings: AutomationSettings) -> AutomationScript:
    """Wait for generation to finish, then copy the response to the clipboard."""
    timeout = settings.generation_timeout if settings.has_generation_timeout() else None
    return AutomationScript(
        name="capture_response",
        actions=[
            PollUntilAbsent(
                indicator=settings.generating_indicator,
                interval=settings.poll_interval,
                timeout=timeout,
            ),
            Delay(settings.settle_delay),
            SELECT_ALL,
            COPY,
            Delay(settings.copy_delay),
        ],
    )


def build_focus_script(settings: AutomationSettings) -> AutomationScript:
    """Bring the application forward and let the window settle."""
    return AutomationScript(
        name="focus",
        actions=[Activate(), Delay(settings.activate_delay)],
    )
