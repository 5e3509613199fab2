# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Cancellation and timeout context threaded through a report call."""

import threading
import time
from dataclasses import dataclass, field

from .errors import ReportCancelledError


@dataclass
class ReportContext:
    """Cancellation and deadline for a single report call.

    A context may be shared by the reporters of one fan-out; cancelling it
    makes every pending HTTP delivery fail as a transport failure.

    Attributes:
        timeout: Seconds allowed for the whole report, None for no deadline
        cancel_event: Event set when the report is cancelled
    """

    timeout: float | None = None
    cancel_event: threading.Event = field(default_factory=threading.Event)
    started_at: float = field(default_factory=time.monotonic)

    @property
    def deadline(self) -> float | None:
        if self.timeout is None:
            return None
        return self.started_at + self.timeout

    def remaining(self) -> float | None:
        """Seconds left before the deadline, None when there is no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def cancel(self) -> None:
        self.cancel_event.set()

    def raise_if_done(self) -> None:
        """Raise ReportCancelledError if cancelled or past the deadline."""
        if self.cancelled:
            raise ReportCancelledError("report context cancelled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise ReportCancelledError("report context deadline exceeded")
