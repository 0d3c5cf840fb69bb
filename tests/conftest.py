from __future__ import annotations

import subprocess
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from chatgpt_desktop_mcp.automation.backends import UIBackend
from chatgpt_desktop_mcp.automation.commands import CommandRunner
from chatgpt_desktop_mcp.clipboard_bridge import ClipboardBackend
from chatgpt_desktop_mcp.errors import AutomationError
from chatgpt_desktop_mcp.logger import StatusLogger
from chatgpt_desktop_mcp.models import AutomationSettings


class FakeClock:
    """Monotonic clock that only moves when something sleeps."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class MemoryClipboard(ClipboardBackend):
    name = "memory"

    def __init__(self, initial: str = "") -> None:
        self.text = initial
        self.writes: List[str] = []

    def set(self, text: str) -> None:
        self.writes.append(text)
        self.text = text

    def get(self) -> str:
        return self.text


class RecordingBackend(UIBackend):
    """UI backend that records every call and plays back a scripted UI."""

    name = "recording"

    def __init__(
        self,
        clipboard: Optional[MemoryClipboard] = None,
        generating: Sequence[bool] = (False,),
        elements: Sequence[str] = (),
        response: str = "response text",
        fail_on: Optional[str] = None,
    ) -> None:
        self.calls: List[Tuple] = []
        self.clipboard = clipboard
        self._generating = list(generating)
        self.elements = list(elements)
        self.response = response
        self.fail_on = fail_on
        self.poll_checks = 0

    def _record(self, *call) -> None:
        self.calls.append(call)
        if self.fail_on == call[0]:
            raise AutomationError(f"{call[0]} failed")

    def activate(self) -> None:
        self._record("activate")

    def click(self, element: str) -> None:
        self._record("click", element)

    def keystroke(self, key: str, modifiers: Sequence[str] = ()) -> None:
        self._record("keystroke", key, tuple(modifiers))
        if key == "c" and self.clipboard is not None:
            self.clipboard.set(self.response)

    def is_present(self, element: str) -> bool:
        self.poll_checks += 1
        self._record("is_present", element)
        if len(self._generating) > 1:
            return self._generating.pop(0)
        return self._generating[0]

    def element_names(self) -> List[str]:
        self._record("element_names")
        return list(self.elements)

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]


class FakeRunner(CommandRunner):
    """Simulates the helper programs; keeps one shared clipboard and a process table."""

    def __init__(self, processes: Sequence[str] = (), missing: Sequence[str] = ()) -> None:
        super().__init__(timeout=1.0)
        self.clipboard = ""
        self.processes = set(processes)
        self.missing = set(missing)
        self.commands: List[List[str]] = []
        self.scripts: List[Tuple[str, Tuple[str, ...]]] = []
        self.spawned: List[List[str]] = []

    def run(self, argv, input_text=None, check=True, env: Optional[Dict[str, str]] = None):
        argv = list(argv)
        self.commands.append(argv)
        program = argv[0]
        if program in self.missing:
            raise AutomationError(f"Command not found: {program}")

        stdout, code = "", 0
        if program in ("pbcopy", "wl-copy") or (program == "xclip" and "-o" not in argv):
            self.clipboard = input_text or ""
        elif program in ("pbpaste", "wl-paste") or program == "xclip":
            stdout = self.clipboard
        elif program == "powershell.exe":
            if "Set-Clipboard" in argv[-1]:
                self.clipboard = input_text or ""
            else:
                stdout = self.clipboard
        elif program == "pgrep":
            code = 0 if argv[-1] in self.processes else 1
        elif program == "tasklist":
            image = argv[2].split("eq ", 1)[1]
            stdout = f'"{image}","1234"\n' if image[:-4] in self.processes else "INFO: No tasks"
        elif program == "osascript":
            stdout = self._osascript(argv[2], argv[3:]) + "\n"
        if check and code != 0:
            raise AutomationError(f"{program} failed: exit status {code}")
        return subprocess.CompletedProcess(argv, code, stdout, "")

    def _osascript(self, script: str, args: List[str]) -> str:
        self.scripts.append((script, tuple(args)))
        if "set the clipboard to" in script:
            self.clipboard = args[0]
            return ""
        if script == "the clipboard as text":
            return self.clipboard
        if "exists application process" in script:
            return "true" if args[0] in self.processes else "false"
        if "to activate" in script:
            self.processes.add(args[0])
        return ""

    def spawn(self, argv: List[str]) -> None:
        self.spawned.append(list(argv))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def quiet_logger() -> StatusLogger:
    return StatusLogger(echo=False)


@pytest.fixture
def fast_settings() -> AutomationSettings:
    return AutomationSettings(
        activate_delay=1.0,
        step_delay=0.4,
        poll_interval=0.5,
        settle_delay=0.2,
        copy_delay=0.2,
        generation_timeout=30.0,
    )
