"""
Automation package: scripted control of the chat application's UI.

Key parts
---------
- actions:      Typed primitive actions (activate, click, keystroke, delay, poll)
- script_model: AutomationScript and the builders for the chat scripts
- engine:       Runner that executes a script against a UI backend
- backends:     Per-platform UI backends (AppleScript, pywinauto, keyboard only)
- commands:     Helper-program runner shared with the clipboard and lifecycle code
"""

from .backends import UIBackend, select_ui_backend
from .commands import CommandRunner
from .engine import AutomationEngine
from .script_model import AutomationScript

__all__ = [
    "AutomationEngine",
    "AutomationScript",
    "CommandRunner",
    "UIBackend",
    "select_ui_backend",
]
