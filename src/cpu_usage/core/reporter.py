import logging
from typing import Optional, Protocol

REPORT_LOGGER = "cpu_usage"


class Reporter(Protocol):
    """Sink for leveled report lines."""

    def emit(self, level: int, message: str) -> None:
        ...


class LogReporter:
    """Deliver report lines through a standard logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(REPORT_LOGGER)

    def emit(self, level: int, message: str) -> None:
        self.logger.log(level, message)
