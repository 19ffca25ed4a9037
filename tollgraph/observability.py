"""Verbosity-gated logging for a single graph.

Each graph carries its own LoggingLevel. Events are forwarded to the
standard ``logging`` module only when the graph's verbosity admits them,
tagged with the graph name so several graphs can share one handler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from .domain.models import LoggingLevel

# Verbosity tier -> stdlib level
_STDLIB_LEVELS: Dict[LoggingLevel, int] = {
    LoggingLevel.MIN: logging.WARNING,
    LoggingLevel.STEPS: logging.INFO,
    LoggingLevel.ALL: logging.DEBUG,
}


@dataclass
class GraphLogger:
    """Logger bound to one graph and one verbosity level.

    Attributes:
        graph_name: Name attached to every record as ``extra["graph"]``
        level: Highest verbosity tier that is emitted
        logger_name: Name of the underlying stdlib logger
    """

    graph_name: str = ""
    level: LoggingLevel = LoggingLevel.NONE
    logger_name: str = "tollgraph"
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(self.logger_name)

    def enabled(self, level: LoggingLevel) -> bool:
        """Check if events of the given tier are emitted."""
        return LoggingLevel.NONE < level <= self.level

    def log(self, level: LoggingLevel, message: str, **context: Any) -> None:
        """Emit an event if the graph's verbosity admits it.

        Args:
            level: Verbosity tier of the event.
            message: Log message.
            **context: Structured fields added to the record.
        """
        if not self.enabled(level):
            return
        self._logger.log(
            _STDLIB_LEVELS[level],
            message,
            extra={"graph": self.graph_name, **context},
        )

    def error(self, message: str, **context: Any) -> None:
        self.log(LoggingLevel.MIN, message, **context)

    def step(self, message: str, **context: Any) -> None:
        self.log(LoggingLevel.STEPS, message, **context)

    def detail(self, message: str, **context: Any) -> None:
        self.log(LoggingLevel.ALL, message, **context)
