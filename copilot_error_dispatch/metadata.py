# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Per-report metadata attached to an error."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

DEFAULT_SEVERITY = "error"
UNKNOWN_ERROR_CLASS = "unknown"


def classify_error(error: BaseException) -> str:
    """Return the classification label for an error.

    An exception may name its own class by exposing a non-empty
    ``error_class`` string attribute. Otherwise the runtime type name is used.

    Args:
        error: The exception to classify

    Returns:
        Classification label, ``"unknown"`` if none can be determined
    """
    explicit = getattr(error, "error_class", None)
    if isinstance(explicit, str) and explicit:
        return explicit
    return type(error).__name__ or UNKNOWN_ERROR_CLASS


@dataclass
class ReportMetadata:
    """Descriptor attached to a single report request.

    Attributes:
        error_class: Classification label (defaults to the error's type name)
        context: Free-form location hint
        grouping_hash: Key used by the sink to cluster related events
        severity: Severity level (defaults to "error")
        event_metadata: Structured values attached verbatim to the event
    """

    error_class: str = ""
    context: str = ""
    grouping_hash: str = ""
    severity: str = ""
    event_metadata: Mapping[str, Any] | None = None

    def populated(self, error: BaseException) -> "ReportMetadata":
        """Return a copy with the defaulting rules applied for ``error``."""
        return replace(
            self,
            error_class=self.error_class or classify_error(error),
            severity=self.severity or DEFAULT_SEVERITY,
        )

    @property
    def has_event_metadata(self) -> bool:
        return bool(self.event_metadata)
