"""
Automation actions: small, composable building blocks.

Supported actions:
- Activate:        bring the target application to the foreground
- Click:           press a named UI element (e.g. a conversation in the sidebar)
- Keystroke:       send a key with optional modifiers
- Delay:           settle for a number of seconds
- PollUntilAbsent: wait until a named UI element disappears

Notes
-----
Actions never build script text themselves. Element names and keys are
handed to the UI backend as parameters, so user-supplied identifiers are
never interpreted as script source.
"""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Callable, Optional, Tuple, TYPE_CHECKING

from chatgpt_desktop_mcp.errors import AutomationError, GenerationTimeoutError

if TYPE_CHECKING:  # pragma: no cover
    from .backends import UIBackend


# Modifier understood by every backend: Command on macOS, Control elsewhere.
PRIMARY = "primary"


@dataclass(frozen=True)
class BaseAction:
    """Common interface for all actions."""

    def run(self, ctx: "RunContext") -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def describe(self) -> str:
        return self.__class__.__name__


@dataclass(frozen=True)
class Activate(BaseAction):

    def run(self, ctx: "RunContext") -> None:
        ctx.backend.activate()


@dataclass(frozen=True)
class Click(BaseAction):
    element: str

    def run(self, ctx: "RunContext") -> None:
        if not self.element:
            raise AutomationError("click: element name is required")
        ctx.backend.click(self.element)

    def describe(self) -> str:
        return f"Click({self.element!r})"


@dataclass(frozen=True)
class Keystroke(BaseAction):
    key: str
    modifiers: Tuple[str, ...] = ()

    def run(self, ctx: "RunContext") -> None:
        ctx.backend.keystroke(self.key, self.modifiers)

    def describe(self) -> str:
        combo = "+".join([*self.modifiers, self.key])
        return f"Keystroke({combo})"


@dataclass(frozen=True)
class Delay(BaseAction):
    seconds: float

    def run(self, ctx: "RunContext") -> None:
        ctx.sleep(self.seconds)

    def describe(self) -> str:
        return f"Delay({self.seconds:g}s)"


@dataclass(frozen=True)
class PollUntilAbsent(BaseAction):
    """Check ``indicator`` every ``interval`` seconds until it is gone.

    ``timeout`` of None waits forever; otherwise GenerationTimeoutError is
    raised once the indicator has been present for longer than ``timeout``.
    """

    indicator: str
    interval: float
    timeout: Optional[float] = None

    def run(self, ctx: "RunContext") -> None:
        started = ctx.now()
        checks = 0
        while True:
            checks += 1
            if not ctx.backend.is_present(self.indicator):
                ctx.log(f"'{self.indicator}' gone after {checks} check(s)")
                return
            if self.timeout is not None and ctx.now() - started >= self.timeout:
                raise GenerationTimeoutError(
                    f"'{self.indicator}' still present after {self.timeout:g}s"
                )
            ctx.sleep(self.interval)

    def describe(self) -> str:
        return f"PollUntilAbsent({self.indicator!r})"


# Keystrokes used by the chat scripts.
SELECT_ALL = Keystroke("a", (PRIMARY,))
CLEAR = Keystroke("backspace")
PASTE = Keystroke("v", (PRIMARY,))
COPY = Keystroke("c", (PRIMARY,))
SUBMIT = Keystroke("return")


class RunContext:
    """Small helper object passed to actions at runtime."""

    def __init__(
        self,
        backend: "UIBackend",
        logger: Optional[Callable[[str], None]] = None,
        sleep_hook: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.backend = backend
        self._logger = logger
        self._sleep = sleep_hook
        self._clock = clock or time.monotonic

    def log(self, msg: str) -> None:
        if self._logger:
            self._logger(msg)

    def sleep(self, seconds: float) -> None:
        if seconds <= 0:
            return
        if self._sleep:
            self._sleep(seconds)
        else:
            time.sleep(seconds)

    def now(self) -> float:
        return self._clock()
