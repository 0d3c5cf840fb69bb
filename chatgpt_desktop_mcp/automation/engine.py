"""
Automation engine that executes an AutomationScript step by step.

Scripts run synchronously on the calling thread; the MCP server already runs
each tool call off the event loop and never runs two at once.
"""

from __future__ import annotations

from typing import Callable, Optional

from chatgpt_desktop_mcp.errors import AutomationError
from .actions import RunContext
from .backends import UIBackend
from .script_model import AutomationScript


class AutomationEngine:
    def __init__(
        self,
        backend: UIBackend,
        on_log: Optional[Callable[[str], None]] = None,
        sleep_hook: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self._backend = backend
        self._on_log = on_log
        self._sleep_hook = sleep_hook
        self._clock = clock

    @property
    def backend(self) -> UIBackend:
        return self._backend

    def context(self) -> RunContext:
        return RunContext(
            backend=self._backend,
            logger=self._log,
            sleep_hook=self._sleep_hook,
            clock=self._clock,
        )

    def run(self, script: AutomationScript) -> None:
        """Execute every action of ``script`` in order; the first failure aborts the run."""
        ctx = self.context()
        total = len(script.actions)
        for idx, action in enumerate(script.actions):
            self._log(f"[{script.name} {idx+1}/{total}] {action.describe()}")
            try:
                action.run(ctx)
            except AutomationError:
                self._log(f"[{script.name}] aborted at step {idx+1}")
                raise

    def _log(self, msg: str) -> None:
        if self._on_log:
            self._on_log(msg)
