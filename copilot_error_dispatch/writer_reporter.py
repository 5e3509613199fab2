# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Stream writer error reporter implementation."""

import logging
import sys
import threading
from typing import TextIO

from .config import DriverConfig_ErrorReporter_Writer
from .context import ReportContext
from .error_reporter import ErrorReporter
from .metadata import ReportMetadata

logger = logging.getLogger(__name__)

_STREAMS = {
    "stdout": lambda: sys.stdout,
    "stderr": lambda: sys.stderr,
}


class WriterErrorReporter(ErrorReporter):
    """Error reporter that writes the error message as a line to a text stream.

    With no stream configured every report is discarded. Write failures are
    not surfaced to the caller.
    """

    def __init__(self, writer: TextIO | None = None):
        """Initialize writer error reporter.

        Args:
            writer: Stream to write to, or None to discard reports
        """
        self.writer = writer
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: DriverConfig_ErrorReporter_Writer) -> "WriterErrorReporter":
        """Create WriterErrorReporter from driver configuration.

        Args:
            config: Driver config naming the stream ("stdout", "stderr" or None)

        Returns:
            WriterErrorReporter instance

        Raises:
            ValueError: If the stream name is not recognized
        """
        if config.stream is None:
            return cls()
        try:
            return cls(writer=_STREAMS[config.stream.lower()]())
        except KeyError as exc:
            raise ValueError(
                f"Unknown writer stream: {config.stream}. Supported streams: stderr, stdout"
            ) from exc

    def report(
        self,
        error: BaseException,
        metadata: ReportMetadata | None = None,
        ctx: ReportContext | None = None,
    ) -> None:
        """Write ``str(error)`` followed by a newline.

        Args:
            error: The exception to report
            metadata: Ignored
            ctx: Ignored
        """
        if self.writer is None:
            return

        try:
            with self._lock:
                self.writer.write(f"{error}\n")
        except (OSError, ValueError) as e:
            logger.debug(f"WriterErrorReporter could not write report: {e}")
