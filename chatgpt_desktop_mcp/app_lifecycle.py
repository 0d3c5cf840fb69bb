"""Makes sure the chat application is running before it is automated."""

from __future__ import annotations

import sys
from typing import Callable, List, Optional

from chatgpt_desktop_mcp.automation.commands import CommandRunner
from chatgpt_desktop_mcp.errors import AutomationError


_MAC_IS_RUNNING = """
on run argv
    tell application "System Events"
        return (exists application process (item 1 of argv))
    end tell
end run
"""

_MAC_LAUNCH = """
on run argv
    tell application (item 1 of argv) to activate
end run
"""


class AppLifecycleManager:
    """
    Checks for the application's process and launches it when absent.

    Launching does not wait for the window; callers add their own settling
    delay before sending input.
    """

    def __init__(
        self,
        app_name: str,
        runner: CommandRunner,
        launch_command: Optional[List[str]] = None,
        platform: Optional[str] = None,
        logger: Optional[Callable[[str], None]] = None,
    ):
        self._app_name = app_name
        self._runner = runner
        self._launch_command = list(launch_command or [])
        self._platform = platform or sys.platform
        self._logger = logger

    def ensure_running(self) -> None:
        if self.is_running():
            return
        self._log(f"{self._app_name} not running - launching")
        self.launch()

    def is_running(self) -> bool:
        if self._platform == "darwin":
            return self._runner.applescript(_MAC_IS_RUNNING, self._app_name).strip() == "true"
        if self._platform.startswith("win"):
            image = self._app_name if self._app_name.lower().endswith(".exe") else f"{self._app_name}.exe"
            proc = self._runner.run(
                ["tasklist", "/FI", f"IMAGENAME eq {image}", "/NH", "/FO", "CSV"],
                check=False,
            )
            return image.lower() in (proc.stdout or "").lower()
        proc = self._runner.run(["pgrep", "-x", self._app_name], check=False)
        return proc.returncode == 0

    def launch(self) -> None:
        if self._platform == "darwin" and not self._launch_command:
            self._runner.applescript(_MAC_LAUNCH, self._app_name)
            return
        if not self._launch_command:
            raise AutomationError(
                f"{self._app_name} is not running and no launch_command is configured"
            )
        self._runner.spawn(self._launch_command)

    def _log(self, msg: str) -> None:
        if self._logger:
            self._logger(msg)
