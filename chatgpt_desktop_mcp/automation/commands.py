"""
Thin wrapper around the helper programs the bridge shells out to.

Clipboard utilities, ``osascript``, ``tasklist`` and ``pgrep`` are all run
through ``CommandRunner`` so that failures surface as AutomationError and
tests can substitute a fake runner.
"""

from __future__ import annotations

import os
import subprocess
from typing import Dict, List, Optional, Sequence

from chatgpt_desktop_mcp.errors import AutomationError


class CommandRunner:
    """Runs external commands synchronously with UTF-8 I/O."""

    def __init__(self, timeout: float = 10.0):
        self._timeout = timeout

    def run(
        self,
        argv: Sequence[str],
        input_text: Optional[str] = None,
        check: bool = True,
        env: Optional[Dict[str, str]] = None,
    ) -> subprocess.CompletedProcess:
        """Run ``argv`` to completion and return the finished process.

        The pipes are read and written as UTF-8 bytes, so line endings
        (``\\r\\n``, lone ``\\r``) pass through untouched in both directions.
        ``stdout`` and ``stderr`` of the result are decoded strings.

        Raises:
            AutomationError: the program is missing, timed out, or (with
                ``check``) exited with a non-zero status
        """
        full_env = None
        if env:
            full_env = dict(os.environ)
            full_env.update(env)
        try:
            raw = subprocess.run(
                list(argv),
                input=None if input_text is None else input_text.encode("utf-8"),
                capture_output=True,
                env=full_env,
                timeout=self._timeout,
            )
        except FileNotFoundError:
            raise AutomationError(f"Command not found: {argv[0]}")
        except subprocess.TimeoutExpired:
            raise AutomationError(f"Command timed out after {self._timeout:g}s: {argv[0]}")
        except OSError as e:
            raise AutomationError(f"Failed to run '{argv[0]}': {e}")

        try:
            stdout = raw.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AutomationError(f"{argv[0]} produced output that is not UTF-8: {e}")
        proc = subprocess.CompletedProcess(
            raw.args, raw.returncode, stdout, raw.stderr.decode("utf-8", errors="replace")
        )

        if check and proc.returncode != 0:
            detail = (proc.stderr or "").strip() or f"exit status {proc.returncode}"
            raise AutomationError(f"{argv[0]} failed: {detail}")
        return proc

    def applescript(self, script: str, *args: str) -> str:
        """Run an AppleScript through ``osascript`` and return its result.

        ``args`` reach the script as ``item N of argv`` of its ``on run argv``
        handler; they are never spliced into the script source. The trailing
        newline osascript appends to the result is removed.
        """
        proc = self.run(["osascript", "-e", script, *args])
        out = proc.stdout or ""
        if out.endswith("\n"):
            out = out[:-1]
        return out

    def spawn(self, argv: List[str]) -> None:
        """Start a long-running program without waiting for it."""
        if not argv:
            raise AutomationError("No command to launch")
        try:
            # stdio is the MCP channel; the child must not inherit it
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise AutomationError(f"Failed to start process '{argv[0]}': {e}")
