# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Silent error reporter implementation for testing."""

import threading
from typing import Any

from .config import DriverConfig_ErrorReporter_Silent
from .context import ReportContext
from .error_reporter import ErrorReporter
from .metadata import ReportMetadata


class SilentErrorReporter(ErrorReporter):
    """Silent error reporter that stores errors in memory for testing.

    Safe to use as a backup or a fan-out target from several threads.
    """

    def __init__(self):
        """Initialize silent error reporter."""
        self.reported_errors: list[dict[str, Any]] = []
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: DriverConfig_ErrorReporter_Silent) -> "SilentErrorReporter":
        return cls()

    def report(
        self,
        error: BaseException,
        metadata: ReportMetadata | None = None,
        ctx: ReportContext | None = None,
    ) -> None:
        """Record an exception.

        Args:
            error: The exception to report
            metadata: Optional per-report metadata, stored as given
            ctx: Ignored
        """
        with self._lock:
            self.reported_errors.append({
                "error": error,
                "error_type": type(error).__name__,
                "error_message": str(error),
                "metadata": metadata,
            })

    def get_errors(self, error_type: str | None = None) -> list[dict[str, Any]]:
        """Get all reported errors, optionally filtered by type.

        Args:
            error_type: Optional error type name to filter by

        Returns:
            List of reported error dictionaries
        """
        with self._lock:
            if error_type:
                return [e for e in self.reported_errors if e["error_type"] == error_type]
            return list(self.reported_errors)

    def clear(self) -> None:
        """Clear all stored errors."""
        with self._lock:
            self.reported_errors.clear()

    def has_errors(self) -> bool:
        """Check if any errors have been reported."""
        with self._lock:
            return len(self.reported_errors) > 0
