"""
Clipboard bridge - read and write the system clipboard on any platform.

The backend is probed once from the OS identity and kept for the lifetime
of the process:

- macOS:   pbcopy / pbpaste                     (NativePasteboardBackend)
- Linux:   xclip, or wl-copy / wl-paste         (X11ClipboardBackend)
- Windows: PowerShell Set-/Get-Clipboard        (NativeScriptingBackend)
- other:   osascript                            (ScriptingFallbackBackend)

Text always travels through stdin or as a script argument, so quotes,
backslashes and newlines reach the clipboard unchanged.
"""

from __future__ import annotations

import shutil
import sys
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from chatgpt_desktop_mcp.automation.commands import CommandRunner
from chatgpt_desktop_mcp.errors import AutomationError
from chatgpt_desktop_mcp.models import ClipboardSnapshot


class ClipboardBackend:
    """Common interface for clipboard backends."""

    name = "base"

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    def set(self, text: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def get(self) -> str:  # pragma: no cover - interface
        raise NotImplementedError


class NativePasteboardBackend(ClipboardBackend):
    name = "pbcopy"

    _ENV = {"LC_CTYPE": "UTF-8"}

    def set(self, text: str) -> None:
        self._runner.run(["pbcopy"], input_text=text, env=self._ENV)

    def get(self) -> str:
        return self._runner.run(["pbpaste"], env=self._ENV).stdout or ""


class X11ClipboardBackend(ClipboardBackend):
    """xclip on X11; wl-clipboard when that is the only utility installed."""

    def __init__(self, runner: CommandRunner, tool: str = "xclip"):
        super().__init__(runner)
        if tool not in ("xclip", "wl-clipboard"):
            raise ValueError(f"Unknown clipboard tool: {tool}")
        self.name = tool

    def set(self, text: str) -> None:
        if self.name == "wl-clipboard":
            self._runner.run(["wl-copy"], input_text=text)
        else:
            self._runner.run(["xclip", "-selection", "clipboard"], input_text=text)

    def get(self) -> str:
        if self.name == "wl-clipboard":
            argv = ["wl-paste", "--no-newline"]
        else:
            argv = ["xclip", "-selection", "clipboard", "-o"]
        return self._runner.run(argv).stdout or ""


_PS_SET = (
    "[Console]::InputEncoding = [System.Text.Encoding]::UTF8; "
    "Set-Clipboard -Value ([Console]::In.ReadToEnd())"
)
_PS_GET = (
    "[Console]::OutputEncoding = [System.Text.Encoding]::UTF8; "
    "[Console]::Out.Write((Get-Clipboard -Raw))"
)


class NativeScriptingBackend(ClipboardBackend):
    name = "powershell"

    def set(self, text: str) -> None:
        self._runner.run(["powershell.exe", "-NoLogo", "-NoProfile", "-Command", _PS_SET], input_text=text)

    def get(self) -> str:
        proc = self._runner.run(["powershell.exe", "-NoLogo", "-NoProfile", "-Command", _PS_GET])
        return proc.stdout or ""


_OSA_SET = """
on run argv
    set the clipboard to (item 1 of argv)
end run
"""


class ScriptingFallbackBackend(ClipboardBackend):
    name = "osascript"

    def set(self, text: str) -> None:
        self._runner.applescript(_OSA_SET, text)

    def get(self) -> str:
        return self._runner.applescript("the clipboard as text")


def probe_clipboard_backend(
    runner: CommandRunner,
    platform: Optional[str] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> ClipboardBackend:
    """Pick the clipboard backend for ``platform`` (defaults to the running OS)."""
    platform = platform or sys.platform
    if platform == "darwin":
        return NativePasteboardBackend(runner)
    if platform.startswith("linux"):
        if which("xclip") is None and which("wl-copy") is not None:
            return X11ClipboardBackend(runner, tool="wl-clipboard")
        return X11ClipboardBackend(runner, tool="xclip")
    if platform in ("win32", "cygwin"):
        return NativeScriptingBackend(runner)
    return ScriptingFallbackBackend(runner)


class ClipboardBridge:
    """
    Clipboard access for the orchestrator.

    ``preserved()`` is the only way an automation run should take over the
    clipboard: whatever was there before is put back on every exit path.
    """

    def __init__(self, backend: ClipboardBackend, logger: Optional[Callable[[str], None]] = None):
        self._backend = backend
        self._logger = logger

    def set(self, text: str) -> None:
        """Write ``text``; returns once the helper has exited."""
        self._backend.set(text)

    def get(self) -> str:
        return self._backend.get()

    def snapshot(self) -> ClipboardSnapshot:
        return ClipboardSnapshot(text=self.get())

    def restore(self, snapshot: ClipboardSnapshot) -> None:
        self.set(snapshot.text)

    @contextmanager
    def preserved(self) -> Iterator[ClipboardSnapshot]:
        """Snapshot the clipboard, yield, and restore it however the block exits.

        A failed restore after a failed block is logged; the block's own
        error is the one that propagates.
        """
        snapshot = self.snapshot()
        try:
            yield snapshot
        except BaseException:
            try:
                self.restore(snapshot)
            except AutomationError as restore_error:
                self._log(f"Clipboard restore failed: {restore_error}")
            raise
        self.restore(snapshot)

    def _log(self, msg: str) -> None:
        if self._logger:
            self._logger(msg)
