# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Exceptions raised and routed by the error dispatch layer."""

from enum import Enum


class FailureKind(str, Enum):
    """Stage at which a delivery to a sink failed."""

    ENCODING = "encoding"
    REQUEST = "request"
    TRANSPORT = "transport"
    DRAIN = "drain"
    CLOSE = "close"
    STATUS = "status"


class DeliveryError(Exception):
    """Error handed to a backup reporter when delivery to a sink fails.

    The underlying exception, if any, is available through ``__cause__``.
    """

    def __init__(self, kind: FailureKind, message: str, status_code: int | None = None):
        """Initialize delivery error.

        Args:
            kind: Stage at which delivery failed
            message: Human readable description
            status_code: HTTP status returned by the sink, for STATUS failures
        """
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class ReportCancelledError(Exception):
    """Raised when a report context is cancelled or past its deadline."""
    pass
