from __future__ import annotations

import pytest

from chatgpt_desktop_mcp.automation import backends
from chatgpt_desktop_mcp.automation.actions import PRIMARY
from chatgpt_desktop_mcp.automation.backends import (
    AppleScriptUIBackend,
    KeyboardUIBackend,
    PywinautoUIBackend,
    _pywinauto_combo,
    select_ui_backend,
)
from conftest import FakeRunner, MemoryClipboard
from chatgpt_desktop_mcp.context import AutomationContext
from chatgpt_desktop_mcp.errors import AutomationError
from chatgpt_desktop_mcp.models import AutomationSettings


def test_backend_selection_by_platform() -> None:
    settings = AutomationSettings()
    runner = FakeRunner()
    assert isinstance(select_ui_backend(settings, runner, "darwin"), AppleScriptUIBackend)
    assert isinstance(select_ui_backend(settings, runner, "win32"), PywinautoUIBackend)
    assert isinstance(select_ui_backend(settings, runner, "linux"), KeyboardUIBackend)


def test_conversation_id_is_passed_as_argument() -> None:
    runner = FakeRunner()
    hostile = 'x" of window 1\ndo shell script "say pwned'
    AppleScriptUIBackend("ChatGPT", runner).click(hostile)

    script, args = runner.scripts[-1]
    assert args == ("ChatGPT", hostile)
    assert "pwned" not in script
    assert "item 2 of argv" in script


def test_applescript_keystrokes() -> None:
    runner = FakeRunner()
    backend = AppleScriptUIBackend("ChatGPT", runner)

    backend.keystroke("v", (PRIMARY,))
    script, args = runner.scripts[-1]
    assert "keystroke (item 2 of argv) using {command down}" in script
    assert args == ("ChatGPT", "v")

    backend.keystroke("backspace")
    script, args = runner.scripts[-1]
    assert "key code 51" in script
    assert args == ("ChatGPT",)


def test_applescript_rejects_unknown_keys() -> None:
    backend = AppleScriptUIBackend("ChatGPT", FakeRunner())
    with pytest.raises(AutomationError):
        backend.keystroke("F13")
    with pytest.raises(AutomationError):
        backend.keystroke("a", ("hyper",))


def test_applescript_element_names_split_on_lines() -> None:
    class Runner(FakeRunner):
        def _osascript(self, script, args):
            return "New chat\nTrip planning, part 2\n\nEssay draft"

    names = AppleScriptUIBackend("ChatGPT", Runner()).element_names()
    assert names == ["New chat", "Trip planning, part 2", "Essay draft"]


def test_applescript_presence_check() -> None:
    class Runner(FakeRunner):
        def _osascript(self, script, args):
            return "true" if args[1] == "Stop generating" else "false"

    backend = AppleScriptUIBackend("ChatGPT", Runner())
    assert backend.is_present("Stop generating") is True
    assert backend.is_present("Regenerate") is False


def test_pywinauto_combos() -> None:
    assert _pywinauto_combo("a", (PRIMARY,)) == "^a"
    assert _pywinauto_combo("backspace", ()) == "{BACKSPACE}"
    assert _pywinauto_combo("return", ()) == "{ENTER}"
    assert _pywinauto_combo("+", ("shift",)) == "+{+}"


def test_keyboard_backend_has_no_element_access() -> None:
    backend = KeyboardUIBackend("ChatGPT")
    with pytest.raises(AutomationError):
        backend.click("Trip planning")
    with pytest.raises(AutomationError):
        backend.is_present("Stop generating")
    with pytest.raises(AutomationError):
        backend.element_names()


def test_keyboard_backend_cannot_activate() -> None:
    with pytest.raises(AutomationError, match="ChatGPT"):
        KeyboardUIBackend("ChatGPT").activate()


def test_keyboard_backend_ask_stops_before_any_key(monkeypatch, fast_settings, quiet_logger, clock) -> None:
    pressed = []

    class FakeController:
        def press(self, key) -> None:
            pressed.append(key)

        def release(self, key) -> None:
            pass

    class FakeKey:
        ctrl = "CTRL"
        backspace = "BACKSPACE"
        enter = "ENTER"

    monkeypatch.setattr(backends, "_get_pynput", lambda: (FakeController, FakeKey))
    clipboard = MemoryClipboard("user text")
    ctx = AutomationContext.create(
        fast_settings,
        quiet_logger,
        platform="linux",
        runner=FakeRunner(processes=[fast_settings.app_name]),
        clipboard_backend=clipboard,
        sleep_hook=clock.sleep,
        clock=clock.time,
    )

    with pytest.raises(AutomationError, match="to the front"):
        ctx.orchestrator.ask("hello")

    assert pressed == []
    assert clipboard.text == "user text"
