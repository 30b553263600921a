"""Diagnostic log sink shared by the dispatcher and the executor.

Records always go to the standard ``logging`` tree (stderr).  Once a client
has connected over stdio, records at or above the client's chosen level are
also forwarded as MCP ``notifications/message``.
"""
from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Callable, Mapping

from applescript_mcp.contracts.mcp_types import MCPNotification


class LogLevel(str, Enum):
    """RFC 5424 syslog severities, as used by MCP logging."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"

    @property
    def severity(self) -> int:
        return _SEVERITY_ORDER.index(self)

    @property
    def python_level(self) -> int:
        return _PYTHON_LEVELS[self]


_SEVERITY_ORDER: list[LogLevel] = list(LogLevel)

_PYTHON_LEVELS: dict[LogLevel, int] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.NOTICE: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.ALERT: logging.CRITICAL,
    LogLevel.EMERGENCY: logging.CRITICAL,
}

Notifier = Callable[[MCPNotification], None]


class MCPLogSink:
    """Append-only log sink; ``log`` never raises."""

    def __init__(
        self,
        logger_name: str = "applescript_mcp",
        notifier: Notifier | None = None,
        min_level: LogLevel = LogLevel.INFO,
    ) -> None:
        self.logger_name = logger_name
        self._logger = logging.getLogger(logger_name)
        self._notifier = notifier
        self.min_level = min_level

    @property
    def connected(self) -> bool:
        return self._notifier is not None

    def attach(self, notifier: Notifier) -> None:
        """Start forwarding records to an MCP client."""
        self._notifier = notifier

    def detach(self) -> None:
        self._notifier = None

    def set_level(self, level: str) -> None:
        """Set the minimum level forwarded to the client.

        Raises ``ValueError`` for names outside the RFC 5424 set.
        """
        self.min_level = LogLevel(level)

    def log(
        self,
        level: LogLevel | str,
        message: str,
        data: Mapping[str, object] | None = None,
    ) -> None:
        try:
            lvl = LogLevel(level)
            suffix = f" {json.dumps(dict(data), default=str)}" if data else ""
            self._logger.log(lvl.python_level, f"{message}{suffix}")

            if self._notifier is not None and lvl.severity >= self.min_level.severity:
                payload: dict[str, object] = {"message": message}
                if data:
                    payload.update(data)
                self._notifier({
                    "jsonrpc": "2.0",
                    "method": "notifications/message",
                    "params": {
                        "level": lvl.value,
                        "logger": self.logger_name,
                        "data": json.loads(json.dumps(payload, default=str)),
                    },
                })
        except Exception:
            # Diagnostics never reach the caller.
            pass
