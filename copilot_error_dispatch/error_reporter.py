# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Abstract error reporter interface."""

from abc import ABC, abstractmethod

from .context import ReportContext
from .metadata import ReportMetadata


class ErrorReporter(ABC):
    """Abstract base class for error reporters.

    Reporters are called from failure paths, so ``report`` must never raise:
    every delivery failure ends either in a backup reporter or in a silent
    discard chosen by the implementation.
    """

    @abstractmethod
    def report(
        self,
        error: BaseException,
        metadata: ReportMetadata | None = None,
        ctx: ReportContext | None = None,
    ) -> None:
        """Report an exception.

        Args:
            error: The exception to report
            metadata: Optional per-report metadata
            ctx: Optional cancellation/timeout context
        """
        pass
