from __future__ import annotations

from chatgpt_desktop_mcp.automation.engine import AutomationEngine
from conftest import RecordingBackend
from chatgpt_desktop_mcp.ui_driver import UIAutomationDriver, filter_conversation_titles


def _driver(backend, settings, clock) -> UIAutomationDriver:
    engine = AutomationEngine(backend, sleep_hook=clock.sleep, clock=clock.time)
    return UIAutomationDriver(engine, settings)


def test_new_chat_is_filtered_and_order_kept(fast_settings, clock) -> None:
    backend = RecordingBackend(elements=["New chat", "Trip planning", "Essay draft"])
    titles = _driver(backend, fast_settings, clock).extract_conversation_titles()
    assert titles == ["Trip planning", "Essay draft"]
    assert backend.names() == ["activate", "element_names"]
    assert clock.sleeps == [fast_settings.activate_delay]


def test_no_conversations_gives_empty_list(fast_settings, clock) -> None:
    backend = RecordingBackend(elements=["New chat"])
    assert _driver(backend, fast_settings, clock).extract_conversation_titles() == []


def test_non_list_result_gives_empty_list() -> None:
    assert filter_conversation_titles(None) == []
    assert filter_conversation_titles("Trip planning") == []
    assert filter_conversation_titles(["", "  ", "Notes"]) == ["Notes"]


def test_select_happens_before_clear(fast_settings, clock) -> None:
    backend = RecordingBackend()
    _driver(backend, fast_settings, clock).perform_ask("hello", "Trip planning")

    click = backend.calls.index(("click", "Trip planning"))
    clear = backend.calls.index(("keystroke", "backspace", ()))
    assert click < clear


def test_no_select_without_conversation(fast_settings, clock) -> None:
    backend = RecordingBackend()
    _driver(backend, fast_settings, clock).perform_ask("hello")
    assert "click" not in backend.names()
    assert backend.calls[-1] == ("keystroke", "return", ())


def test_capture_polls_then_copies(fast_settings, clock) -> None:
    backend = RecordingBackend(generating=[True, False])
    _driver(backend, fast_settings, clock).capture_response()

    assert backend.names() == ["is_present", "is_present", "keystroke", "keystroke"]
    assert backend.calls[-1] == ("keystroke", "c", ("primary",))
    assert clock.sleeps == [0.5, 0.2, 0.2]
