"""
Domain models for the ChatGPT desktop bridge.
Each class follows the Single Responsibility Principle (SRP).
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from chatgpt_desktop_mcp.errors import ValidationError


NEW_CHAT_TITLE = "New chat"


class Operation(Enum):
    """Operations supported by the ``chatgpt`` tool."""
    ASK = "ask"
    LIST_CONVERSATIONS = "get_conversations"


@dataclass(frozen=True)
class ToolRequest:
    """A validated tool call."""
    operation: Operation
    prompt: Optional[str] = None
    conversation_id: Optional[str] = None

    @staticmethod
    def from_arguments(raw: Any) -> "ToolRequest":
        """
        Build a request from the raw ``arguments`` object of a tool call.

        Raises:
            ValidationError: if the payload does not match the tool schema
        """
        if not isinstance(raw, dict):
            raise ValidationError("arguments must be an object")

        try:
            operation = Operation(raw.get("operation"))
        except (TypeError, ValueError):
            raise ValidationError(f"unknown operation: {raw.get('operation')!r}")

        prompt = raw.get("prompt")
        if prompt is not None and not isinstance(prompt, str):
            raise ValidationError("prompt must be a string")
        if operation == Operation.ASK and not prompt:
            raise ValidationError("prompt is required for 'ask'")

        conversation_id = raw.get("conversation_id")
        if conversation_id is not None and not isinstance(conversation_id, str):
            raise ValidationError("conversation_id must be a string")

        return ToolRequest(
            operation=operation,
            prompt=prompt,
            conversation_id=conversation_id or None,
        )


@dataclass(frozen=True)
class ClipboardSnapshot:
    """Clipboard text captured before an automation run."""
    text: str


@dataclass(frozen=True)
class ToolResponse:
    """Exactly one response per tool call."""
    text: str
    is_error: bool = False

    def to_envelope(self) -> Dict[str, Any]:
        """Render the MCP response envelope."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


@dataclass
class AutomationSettings:
    """
    Timing and target configuration for the automation engine.

    All delays are in seconds. ``generation_timeout`` of 0 waits for the
    generation indicator without a limit.
    """

    app_name: str = "ChatGPT"
    activate_delay: float = 1.0
    step_delay: float = 0.4
    poll_interval: float = 0.5
    settle_delay: float = 0.2
    copy_delay: float = 0.2
    generation_timeout: float = 300.0
    generating_indicator: str = "Stop generating"
    command_timeout: float = 10.0
    launch_command: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate configuration parameters."""
        if not self.app_name:
            raise ValueError("app_name must not be empty")

        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")

        for name in ("activate_delay", "step_delay", "settle_delay", "copy_delay", "generation_timeout"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")

        if self.command_timeout <= 0:
            raise ValueError("command_timeout must be positive")

    def has_generation_timeout(self) -> bool:
        return self.generation_timeout > 0

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "AutomationSettings":
        """Create settings from a JSON dictionary, filling in defaults."""
        defaults = AutomationSettings()
        launch_raw = data.get("launch_command") or []
        if isinstance(launch_raw, str):
            launch_raw = [launch_raw]

        return AutomationSettings(
            app_name=str(data.get("app_name", defaults.app_name) or defaults.app_name),
            activate_delay=float(data.get("activate_delay", defaults.activate_delay)),
            step_delay=float(data.get("step_delay", defaults.step_delay)),
            poll_interval=float(data.get("poll_interval", defaults.poll_interval)),
            settle_delay=float(data.get("settle_delay", defaults.settle_delay)),
            copy_delay=float(data.get("copy_delay", defaults.copy_delay)),
            generation_timeout=float(data.get("generation_timeout", defaults.generation_timeout)),
            generating_indicator=str(data.get("generating_indicator", defaults.generating_indicator)),
            command_timeout=float(data.get("command_timeout", defaults.command_timeout)),
            launch_command=[str(part) for part in launch_raw],
        )
