"""
Automation context - everything a running server needs, built once at startup.

Dependency injection at the root: the clipboard and UI backends are probed
here and handed down; nothing below reads global state.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Optional

from chatgpt_desktop_mcp.app_lifecycle import AppLifecycleManager
from chatgpt_desktop_mcp.automation.backends import UIBackend, select_ui_backend
from chatgpt_desktop_mcp.automation.commands import CommandRunner
from chatgpt_desktop_mcp.automation.engine import AutomationEngine
from chatgpt_desktop_mcp.clipboard_bridge import ClipboardBackend, ClipboardBridge, probe_clipboard_backend
from chatgpt_desktop_mcp.dispatcher import RequestDispatcher
from chatgpt_desktop_mcp.logger import StatusLogger
from chatgpt_desktop_mcp.models import AutomationSettings
from chatgpt_desktop_mcp.orchestrator import AutomationOrchestrator
from chatgpt_desktop_mcp.ui_driver import UIAutomationDriver


@dataclass
class AutomationContext:
    settings: AutomationSettings
    logger: StatusLogger
    orchestrator: AutomationOrchestrator
    dispatcher: RequestDispatcher

    @staticmethod
    def create(
        settings: AutomationSettings,
        logger: StatusLogger,
        platform: Optional[str] = None,
        runner: Optional[CommandRunner] = None,
        clipboard_backend: Optional[ClipboardBackend] = None,
        ui_backend: Optional[UIBackend] = None,
        sleep_hook: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> "AutomationContext":
        """Wire up the components for ``platform`` (defaults to the running OS)."""
        platform = platform or sys.platform
        runner = runner or CommandRunner(timeout=settings.command_timeout)

        clipboard_backend = clipboard_backend or probe_clipboard_backend(runner, platform)
        ui_backend = ui_backend or select_ui_backend(settings, runner, platform)
        logger.log_info(f"Clipboard backend: {clipboard_backend.name}, UI backend: {ui_backend.name}")

        clipboard = ClipboardBridge(clipboard_backend, logger=logger.log_error)
        lifecycle = AppLifecycleManager(
            settings.app_name,
            runner,
            launch_command=settings.launch_command,
            platform=platform,
            logger=logger.log_info,
        )
        engine = AutomationEngine(ui_backend, on_log=logger.log_info, sleep_hook=sleep_hook, clock=clock)
        driver = UIAutomationDriver(engine, settings, logger=logger.log_info)
        orchestrator = AutomationOrchestrator(lifecycle, clipboard, driver, logger)

        return AutomationContext(
            settings=settings,
            logger=logger,
            orchestrator=orchestrator,
            dispatcher=RequestDispatcher(orchestrator, logger),
        )
