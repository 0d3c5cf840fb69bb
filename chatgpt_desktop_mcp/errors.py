"""
Error taxonomy for the ChatGPT desktop bridge.

AutomationError and its subclasses travel up from the clipboard, lifecycle
and UI layers and are caught once, by the request dispatcher. The request
level errors never leave the dispatcher.
"""


class AutomationError(Exception):
    """Any failure while driving the application or the clipboard."""


class GenerationTimeoutError(AutomationError, TimeoutError):
    """The generation indicator did not disappear within the configured timeout."""


class ValidationError(Exception):
    """Malformed or incomplete tool-call payload."""


class UnknownToolError(Exception):
    """The request names a tool other than the registered one."""


class FatalTransportError(Exception):
    """The stdio request/response channel could not be established."""
