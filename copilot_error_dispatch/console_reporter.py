# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Console-based error reporter implementation."""

import logging
import traceback

from .config import DriverConfig_ErrorReporter_Console
from .context import ReportContext
from .error_reporter import ErrorReporter
from .errors import DeliveryError
from .metadata import ReportMetadata, classify_error

logger = logging.getLogger(__name__)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class ConsoleErrorReporter(ErrorReporter):
    """Console error reporter that logs errors through Python's logging system.

    Used as the default backup for the Bugsnag reporter: it only writes to
    log handlers, so it does not fail when the network does.
    """

    def __init__(self, logger_name: str | None = None):
        """Initialize console error reporter.

        Args:
            logger_name: Optional logger name to use (defaults to module logger)
        """
        self.logger = logging.getLogger(logger_name) if logger_name else logger

    @classmethod
    def from_config(cls, config: DriverConfig_ErrorReporter_Console) -> "ConsoleErrorReporter":
        return cls(logger_name=config.logger_name)

    def report(
        self,
        error: BaseException,
        metadata: ReportMetadata | None = None,
        ctx: ReportContext | None = None,
    ) -> None:
        """Log an exception with its metadata.

        The log level follows the metadata severity (ERROR when unset or
        unknown). The stack trace is logged separately at DEBUG.

        Args:
            error: The exception to report
            metadata: Optional per-report metadata
            ctx: Ignored
        """
        metadata = (metadata or ReportMetadata()).populated(error)

        log_message = f"Exception occurred: {metadata.error_class}: {error}"
        if isinstance(error, DeliveryError):
            log_message += f" | Failure: {error.kind.value}"
        if metadata.context:
            log_message += f" | Context: {metadata.context}"
        if metadata.has_event_metadata:
            details = ", ".join(f"{k}={v}" for k, v in metadata.event_metadata.items())
            log_message += f" | Metadata: {details}"

        self.logger.log(_LEVELS.get(metadata.severity.lower(), logging.ERROR), log_message)

        if error.__traceback__ is not None or error.__cause__ is not None:
            stack_trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            self.logger.debug(f"Stack trace:\n{stack_trace}")
