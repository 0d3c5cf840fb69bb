"""
UI backends: how actions reach the target application on each platform.

- macOS:   System Events through ``osascript`` (AppleScriptUIBackend)
- Windows: UI Automation through pywinauto (PywinautoUIBackend)
- other:   keystrokes only, through pynput with a pyautogui fallback
           (KeyboardUIBackend); window and element access are not available there

Every backend takes element names and keys as data. The AppleScript backend
passes them as ``argv`` items of an ``on run argv`` handler, and only
whitelisted tokens (modifier names, key codes) ever appear in script text.
"""

from __future__ import annotations

import re
import sys
from typing import Any, List, Optional, Sequence, Tuple

from chatgpt_desktop_mcp.errors import AutomationError
from chatgpt_desktop_mcp.models import AutomationSettings
from .actions import PRIMARY
from .commands import CommandRunner


class UIBackend:
    """Interface every platform backend implements."""

    name = "base"

    def activate(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def click(self, element: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def keystroke(self, key: str, modifiers: Sequence[str] = ()) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def is_present(self, element: str) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def element_names(self) -> List[str]:  # pragma: no cover - interface
        raise NotImplementedError


# --------------------------------------------------------------------------
# macOS
# --------------------------------------------------------------------------

_ACTIVATE_SCRIPT = """
on run argv
    tell application (item 1 of argv) to activate
end run
"""

_CLICK_SCRIPT = """
on run argv
    tell application "System Events"
        tell process (item 1 of argv)
            click button (item 2 of argv) of group 1 of group 1 of window 1
        end tell
    end tell
end run
"""

_KEYSTROKE_SCRIPT = """
on run argv
    tell application "System Events"
        tell process (item 1 of argv)
            {statement}
        end tell
    end tell
end run
"""

_IS_PRESENT_SCRIPT = """
on run argv
    tell application "System Events"
        tell process (item 1 of argv)
            if not (exists window 1) then return "false"
            repeat with e in (entire contents of window 1)
                try
                    if (name of e as text) is (item 2 of argv) then return "true"
                end try
                try
                    if (description of e as text) is (item 2 of argv) then return "true"
                end try
            end repeat
        end tell
    end tell
    return "false"
end run
"""

_ELEMENT_NAMES_SCRIPT = """
on run argv
    set titles to {}
    tell application "System Events"
        tell process (item 1 of argv)
            repeat with b in (buttons of group 1 of group 1 of window 1)
                set n to name of b
                if n is not missing value then set end of titles to (n as text)
            end repeat
        end tell
    end tell
    set AppleScript's text item delimiters to linefeed
    return titles as text
end run
"""

_MAC_MODIFIERS = {
    PRIMARY: "command down",
    "command": "command down",
    "ctrl": "control down",
    "shift": "shift down",
    "alt": "option down",
}

_MAC_KEY_CODES = {
    "backspace": 51,
    "return": 36,
    "tab": 48,
    "escape": 53,
}


class AppleScriptUIBackend(UIBackend):
    name = "applescript"

    def __init__(self, app_name: str, runner: CommandRunner):
        self._app_name = app_name
        self._runner = runner

    def activate(self) -> None:
        self._runner.applescript(_ACTIVATE_SCRIPT, self._app_name)

    def click(self, element: str) -> None:
        self._runner.applescript(_CLICK_SCRIPT, self._app_name, element)

    def keystroke(self, key: str, modifiers: Sequence[str] = ()) -> None:
        statement, args = _mac_key_statement(key, modifiers)
        script = _KEYSTROKE_SCRIPT.format(statement=statement)
        self._runner.applescript(script, self._app_name, *args)

    def is_present(self, element: str) -> bool:
        result = self._runner.applescript(_IS_PRESENT_SCRIPT, self._app_name, element)
        return result.strip() == "true"

    def element_names(self) -> List[str]:
        result = self._runner.applescript(_ELEMENT_NAMES_SCRIPT, self._app_name)
        return [line for line in result.splitlines() if line.strip()]


def _mac_key_statement(key: str, modifiers: Sequence[str]) -> Tuple[str, List[str]]:
    try:
        mods = [_MAC_MODIFIERS[m] for m in modifiers]
    except KeyError as e:
        raise AutomationError(f"Unsupported modifier: {e.args[0]}")
    using = f" using {{{', '.join(mods)}}}" if mods else ""
    if key in _MAC_KEY_CODES:
        return f"key code {_MAC_KEY_CODES[key]}{using}", []
    if len(key) == 1:
        return f"keystroke (item 2 of argv){using}", [key]
    raise AutomationError(f"Unsupported key: {key}")


# --------------------------------------------------------------------------
# Windows
# --------------------------------------------------------------------------

_PW_MODIFIERS = {PRIMARY: "^", "ctrl": "^", "shift": "+", "alt": "%"}
_PW_KEYS = {
    "backspace": "{BACKSPACE}",
    "return": "{ENTER}",
    "tab": "{TAB}",
    "escape": "{ESC}",
}
_PW_RESERVED = set("+^%~(){}[]")


class PywinautoUIBackend(UIBackend):
    """Drives the application window through pywinauto's UIA backend."""

    name = "pywinauto"

    def __init__(self, app_name: str, timeout: float = 10.0):
        self._app_name = app_name
        self._title_re = f".*{re.escape(app_name)}.*"
        self._timeout = timeout

    def activate(self) -> None:
        self._window().set_focus()

    def click(self, element: str) -> None:
        win = self._window()
        try:
            win.child_window(title=element, found_index=0).click_input()
        except Exception as e:
            raise AutomationError(f"Element '{element}' not found: {e}")

    def keystroke(self, key: str, modifiers: Sequence[str] = ()) -> None:
        try:
            from pywinauto.keyboard import send_keys as pw_send_keys  # type: ignore
        except Exception as e:
            raise AutomationError(f"pywinauto is not available: {e}")
        pw_send_keys(_pywinauto_combo(key, modifiers), pause=0.02)

    def is_present(self, element: str) -> bool:
        win = self._window()
        return bool(win.child_window(title=element, found_index=0).exists(timeout=0))

    def element_names(self) -> List[str]:
        win = self._window()
        names = [item.window_text() for item in win.descendants(control_type="ListItem")]
        return [n for n in names if n and n.strip()]

    def _window(self) -> Any:
        try:
            from pywinauto import Application  # type: ignore
        except Exception as e:
            raise AutomationError(f"pywinauto is not available: {e}")
        try:
            app = Application(backend="uia").connect(title_re=self._title_re, timeout=self._timeout)
            return app.top_window()
        except Exception as e:
            raise AutomationError(f"{self._app_name} window not found: {e}")


def _pywinauto_combo(key: str, modifiers: Sequence[str]) -> str:
    try:
        prefix = "".join(_PW_MODIFIERS[m] for m in modifiers)
    except KeyError as e:
        raise AutomationError(f"Unsupported modifier: {e.args[0]}")
    if key in _PW_KEYS:
        return prefix + _PW_KEYS[key]
    if len(key) == 1:
        return prefix + ("{" + key + "}" if key in _PW_RESERVED else key)
    raise AutomationError(f"Unsupported key: {key}")


# --------------------------------------------------------------------------
# Other platforms
# --------------------------------------------------------------------------

_PYNPUT_MODIFIERS = {PRIMARY: "ctrl", "ctrl": "ctrl", "shift": "shift", "alt": "alt"}
_PYNPUT_KEYS = {"backspace": "backspace", "return": "enter", "tab": "tab", "escape": "esc"}


class KeyboardUIBackend(UIBackend):
    """Keystrokes into whatever window has focus; no window or element access.

    Every script starts by activating the app, and that fails here, so no
    keystroke ever lands in some other focused window.
    """

    name = "keyboard"

    def __init__(self, app_name: str):
        self._app_name = app_name

    def activate(self) -> None:
        raise AutomationError(f"Cannot bring {self._app_name} to the front on {sys.platform}")

    def click(self, element: str) -> None:
        raise AutomationError(f"Selecting UI elements is not supported on {sys.platform}")

    def is_present(self, element: str) -> bool:
        raise AutomationError(f"Inspecting UI elements is not supported on {sys.platform}")

    def element_names(self) -> List[str]:
        raise AutomationError(f"Listing UI elements is not supported on {sys.platform}")

    def keystroke(self, key: str, modifiers: Sequence[str] = ()) -> None:
        try:
            mod_names = [_PYNPUT_MODIFIERS[m] for m in modifiers]
        except KeyError as e:
            raise AutomationError(f"Unsupported modifier: {e.args[0]}")
        if key not in _PYNPUT_KEYS and len(key) != 1:
            raise AutomationError(f"Unsupported key: {key}")

        kb_cls, key_mod = _get_pynput()
        if kb_cls is not None and key_mod is not None:
            kb = kb_cls()
            mods = [getattr(key_mod, m) for m in mod_names]
            target = getattr(key_mod, _PYNPUT_KEYS[key]) if key in _PYNPUT_KEYS else key
            for m in mods:
                kb.press(m)
            try:
                kb.press(target); kb.release(target)
            finally:
                for m in reversed(mods):
                    kb.release(m)
            return

        # Fallback: pyautogui
        try:
            import pyautogui  # local import to avoid hard dep at import time
        except Exception as e:
            raise AutomationError(f"No keyboard backend available (install pynput): {e}")
        pyautogui.hotkey(*mod_names, _PYNPUT_KEYS.get(key, key))


def _get_pynput() -> Tuple[Optional[Any], Optional[Any]]:
    """Import pynput lazily and return (KeyboardControllerClass, KeyModule)."""
    try:
        from pynput.keyboard import Controller as KeyboardController, Key as KeyModule  # type: ignore
        return KeyboardController, KeyModule
    except Exception:
        return None, None


def select_ui_backend(
    settings: AutomationSettings,
    runner: CommandRunner,
    platform: Optional[str] = None,
) -> UIBackend:
    """Pick the UI backend for ``platform`` (defaults to the running OS)."""
    platform = platform or sys.platform
    if platform == "darwin":
        return AppleScriptUIBackend(settings.app_name, runner)
    if platform.startswith("win"):
        return PywinautoUIBackend(settings.app_name, timeout=settings.command_timeout)
    return KeyboardUIBackend(settings.app_name)
