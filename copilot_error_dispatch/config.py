# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Constants and typed configuration for error reporters.

The driver config dataclasses follow the ``AdapterConfig_*`` /
``DriverConfig_*`` naming used by the other adapters so an
``AdapterConfig_ErrorReporter`` can be handed straight to
``create_error_reporter``.
"""

from dataclasses import dataclass, field
from typing import TypeAlias

CLIENT_VERSION = "0.1.0"

BUGSNAG_NOTIFY_ENDPOINT = "https://notify.bugsnag.com"
BUGSNAG_PAYLOAD_VERSION = "2"

# Bytes of response body read before closing, so the connection can be reused
RESPONSE_DRAIN_LIMIT = 1024


@dataclass(frozen=True)
class BugsnagNotifier:
    """Notifier descriptor sent with every payload."""

    name: str = "copilot-error-dispatch"
    url: str = "https://github.com/Alan-Jowett/CoPilot-For-Consensus"
    version: str = CLIENT_VERSION

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "url": self.url, "version": self.version}


DEFAULT_NOTIFIER = BugsnagNotifier()


@dataclass
class DriverConfig_ErrorReporter_Console:
    """Configuration for error_reporter adapter using console driver."""

    logger_name: str | None = None


@dataclass
class DriverConfig_ErrorReporter_Silent:
    """Configuration for error_reporter adapter using silent driver."""

    pass


@dataclass
class DriverConfig_ErrorReporter_Writer:
    """Configuration for error_reporter adapter using writer driver."""

    # One of "stdout", "stderr", or None to discard
    stream: str | None = "stderr"


@dataclass
class DriverConfig_ErrorReporter_Bugsnag:
    """Configuration for error_reporter adapter using bugsnag driver."""

    api_key: str
    release_stage: str = "production"
    endpoint: str = BUGSNAG_NOTIFY_ENDPOINT
    # Reporter used when delivery fails; None means a console reporter
    backup: "AdapterConfig_ErrorReporter | None" = None


@dataclass
class DriverConfig_ErrorReporter_Fanout:
    """Configuration for error_reporter adapter using fanout driver."""

    reporters: "list[AdapterConfig_ErrorReporter]" = field(default_factory=list)


DriverConfig_ErrorReporter: TypeAlias = (
    DriverConfig_ErrorReporter_Bugsnag
    | DriverConfig_ErrorReporter_Console
    | DriverConfig_ErrorReporter_Fanout
    | DriverConfig_ErrorReporter_Silent
    | DriverConfig_ErrorReporter_Writer
)


@dataclass
class AdapterConfig_ErrorReporter:
    """Configuration for the error_reporter adapter."""

    error_reporter_type: str
    driver: DriverConfig_ErrorReporter
