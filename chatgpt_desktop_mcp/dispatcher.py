"""
Request dispatcher - validates tool calls and shapes every outcome into a
ToolResponse.

Validation and unknown-tool errors are answered here and never reach the
orchestrator. Anything raised below is caught once and rendered as
``"Error: <message>"``.
"""

from __future__ import annotations

from typing import Any, Dict

from chatgpt_desktop_mcp.errors import UnknownToolError, ValidationError
from chatgpt_desktop_mcp.logger import StatusLogger
from chatgpt_desktop_mcp.models import Operation, ToolRequest, ToolResponse
from chatgpt_desktop_mcp.orchestrator import AutomationOrchestrator


TOOL_NAME = "chatgpt"

TOOL_DEFINITION: Dict[str, Any] = {
    "name": TOOL_NAME,
    "description": "Interact with the ChatGPT desktop app",
    "inputSchema": {
        "type": "object",
        "properties": {
            "operation": {
                "type": "string",
                "description": "Operation: 'ask' or 'get_conversations'",
                "enum": [op.value for op in Operation],
            },
            "prompt": {
                "type": "string",
                "description": "Prompt text (required for 'ask')",
            },
            "conversation_id": {
                "type": "string",
                "description": "Optional existing conversation ID",
            },
        },
        "required": ["operation"],
    },
}

NO_CONVERSATIONS = "No conversations found."


class RequestDispatcher:
    def __init__(self, orchestrator: AutomationOrchestrator, logger: StatusLogger):
        self._orchestrator = orchestrator
        self._logger = logger

    def handle(self, name: str, raw_args: Any) -> ToolResponse:
        try:
            request = self._parse(name, raw_args)
        except UnknownToolError:
            self._logger.log_warning(f"Rejected call to unknown tool {name!r}")
            return ToolResponse("Unknown tool", is_error=True)
        except ValidationError as e:
            self._logger.log_warning(f"Rejected invalid arguments: {e}")
            return ToolResponse("Invalid arguments", is_error=True)

        try:
            return ToolResponse(self._route(request))
        except Exception as e:
            self._logger.log_error(f"{request.operation.value} failed: {e}")
            return ToolResponse(f"Error: {e}", is_error=True)

    def _parse(self, name: str, raw_args: Any) -> ToolRequest:
        if name != TOOL_NAME:
            raise UnknownToolError(name)
        return ToolRequest.from_arguments(raw_args)

    def _route(self, request: ToolRequest) -> str:
        if request.operation == Operation.ASK:
            return self._orchestrator.ask(request.prompt or "", request.conversation_id)
        titles = self._orchestrator.list_conversations()
        return "\n".join(titles) if titles else NO_CONVERSATIONS
