"""
Status Logger - tracks and reports what the bridge is doing.

SRP: This class has one responsibility - logging and status management.
Entries are kept in a bounded history and echoed to stderr; stdout belongs
to the MCP stdio transport and must never be written to.
"""

import sys
from datetime import datetime
from typing import List, Optional, TextIO
from dataclasses import dataclass


@dataclass
class LogEntry:
    """A single log entry."""
    timestamp: datetime
    message: str
    level: str = "INFO"

    def __str__(self) -> str:
        time_str = self.timestamp.strftime("%H:%M:%S")
        return f"[{time_str}] {self.level}: {self.message}"


class StatusLogger:
    """
    Manages status updates and maintains a log history.
    """

    def __init__(self, max_entries: int = 200, stream: Optional[TextIO] = None, echo: bool = True):
        """
        Initialize the logger.

        Args:
            max_entries: Maximum number of log entries to keep in memory
            stream: Where entries are echoed; defaults to stderr
            echo: Set to False to keep entries in memory only
        """
        self._log_entries: List[LogEntry] = []
        self._max_entries = max_entries
        self._stream = stream
        self._echo = echo
        self._current_status = "Ready"

    def log_info(self, message: str) -> None:
        self._add_entry(message, "INFO")

    def log_warning(self, message: str) -> None:
        """Log a warning message."""
        self._add_entry(message, "WARNING")

    def log_error(self, message: str) -> None:
        """Log an error message."""
        self._add_entry(message, "ERROR")

    def update_status(self, status: str) -> None:
        """
        Update the current status.

        Args:
            status: The new status message
        """
        self._current_status = status
        self.log_info(status)

    def get_current_status(self) -> str:
        """Returns the current status message."""
        return self._current_status

    def get_recent_logs(self, count: int = 10) -> List[LogEntry]:
        """
        Get the most recent log entries.

        Args:
            count: Number of recent entries to return

        Returns:
            List of recent log entries
        """
        return self._log_entries[-count:]

    def _add_entry(self, message: str, level: str) -> None:
        entry = LogEntry(
            timestamp=datetime.now(),
            message=message,
            level=level
        )

        self._log_entries.append(entry)

        # Trim old entries if we exceed max
        if len(self._log_entries) > self._max_entries:
            self._log_entries = self._log_entries[-self._max_entries:]

        if self._echo:
            print(entry, file=self._stream or sys.stderr, flush=True)
