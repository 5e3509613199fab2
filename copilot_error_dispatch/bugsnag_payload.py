# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Bugsnag notify API payload construction."""

import logging
import socket
from typing import Any

from .config import BUGSNAG_PAYLOAD_VERSION, DEFAULT_NOTIFIER, BugsnagNotifier
from .metadata import ReportMetadata
from .stack import TracedError, format_stack

logger = logging.getLogger(__name__)


def get_hostname() -> str:
    """Return the local hostname, or an empty string if it cannot be resolved."""
    try:
        return socket.gethostname()
    except OSError as e:
        logger.debug(f"Hostname lookup failed: {e}")
        return ""


def build_event(
    traced: TracedError,
    metadata: ReportMetadata,
    release_stage: str,
    hostname: str,
) -> dict[str, Any]:
    """Build a single event for the ``events`` list.

    ``metadata`` must already be populated. Optional keys are left out
    entirely when empty instead of being sent as empty values.
    """
    event: dict[str, Any] = {
        "PayloadVersion": BUGSNAG_PAYLOAD_VERSION,
        "exceptions": [
            {
                "errorClass": metadata.error_class,
                "message": str(traced.error),
                "stacktrace": format_stack(traced),
            }
        ],
        "severity": metadata.severity,
        "app": {
            "releaseStage": release_stage,
        },
        "device": {
            "hostname": hostname,
        },
    }

    if metadata.grouping_hash:
        event["groupingHash"] = metadata.grouping_hash

    if metadata.context:
        event["context"] = metadata.context

    if metadata.has_event_metadata:
        event["metaData"] = dict(metadata.event_metadata)

    return event


def build_payload(
    traced: TracedError,
    metadata: ReportMetadata,
    api_key: str,
    release_stage: str,
    notifier: BugsnagNotifier = DEFAULT_NOTIFIER,
    hostname: str | None = None,
) -> dict[str, Any]:
    """Build the full notify payload for one error.

    Args:
        traced: Error wrapped with its stack
        metadata: Report metadata; defaulting rules are applied here
        api_key: Project API key
        release_stage: Release stage reported under ``app``
        notifier: Notifier descriptor
        hostname: Hostname override, looked up when None

    Returns:
        Payload dictionary ready to be serialized as JSON
    """
    metadata = metadata.populated(traced.error)
    if hostname is None:
        hostname = get_hostname()

    return {
        "apiKey": api_key,
        "notifier": notifier.to_dict(),
        "events": [
            build_event(traced, metadata, release_stage, hostname),
        ],
    }
