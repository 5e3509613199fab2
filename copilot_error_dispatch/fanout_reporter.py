# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Fan-out error reporter that dispatches to several reporters concurrently."""

import logging
import threading
from collections.abc import Iterable

from .context import ReportContext
from .error_reporter import ErrorReporter
from .metadata import ReportMetadata

logger = logging.getLogger(__name__)


class FanOutErrorReporter(ErrorReporter):
    """Error reporter sending the same error to every underlying reporter.

    Each reporter runs in its own thread and ``report`` returns once all of
    them have finished. Only the error and the context are forwarded; the
    metadata stays with the caller's report.
    """

    def __init__(self, reporters: Iterable[ErrorReporter] = ()):
        """Initialize fan-out reporter.

        Args:
            reporters: Reporters to dispatch to
        """
        self.reporters: list[ErrorReporter] = list(reporters)

    def report(
        self,
        error: BaseException,
        metadata: ReportMetadata | None = None,
        ctx: ReportContext | None = None,
    ) -> None:
        """Report an exception to all reporters concurrently.

        Args:
            error: The exception to report
            metadata: Not forwarded to the underlying reporters
            ctx: Optional cancellation/timeout context, forwarded as is
        """
        if not self.reporters:
            return

        threads = [
            threading.Thread(
                target=self._report_one,
                args=(reporter, error, ctx),
                name=f"error-reporter-{index}",
                daemon=True,
            )
            for index, reporter in enumerate(self.reporters)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    @staticmethod
    def _report_one(reporter: ErrorReporter, error: BaseException, ctx: ReportContext | None) -> None:
        try:
            reporter.report(error, ctx=ctx)
        except Exception:
            # Reporters must not raise; contain it so the siblings still complete
            logger.exception(f"{type(reporter).__name__} raised while reporting {type(error).__name__}")
