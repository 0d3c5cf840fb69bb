from __future__ import annotations

import io

from chatgpt_desktop_mcp.logger import StatusLogger


def test_entries_are_echoed_and_bounded() -> None:
    stream = io.StringIO()
    logger = StatusLogger(max_entries=2, stream=stream)

    logger.log_info("one")
    logger.log_warning("two")
    logger.update_status("Asking")

    assert [e.message for e in logger.get_recent_logs(5)] == ["two", "Asking"]
    assert logger.get_current_status() == "Asking"
    lines = stream.getvalue().splitlines()
    assert len(lines) == 3
    assert lines[1].endswith("WARNING: two")


def test_echo_can_be_disabled(capsys) -> None:
    StatusLogger(echo=False).log_error("quiet")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
