# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Copilot-for-Consensus Error Dispatch Adapter.

Delivers application errors to one or more error-tracking sinks. Delivery
failures never propagate to the caller: they are routed to a backup
reporter instead.
"""

from .bugsnag_reporter import BugsnagErrorReporter
from .config import (
    CLIENT_VERSION,
    AdapterConfig_ErrorReporter,
    BugsnagNotifier,
    DriverConfig_ErrorReporter_Bugsnag,
    DriverConfig_ErrorReporter_Console,
    DriverConfig_ErrorReporter_Fanout,
    DriverConfig_ErrorReporter_Silent,
    DriverConfig_ErrorReporter_Writer,
)
from .console_reporter import ConsoleErrorReporter
from .context import ReportContext
from .error_reporter import ErrorReporter
from .errors import DeliveryError, FailureKind, ReportCancelledError
from .factory import create_error_reporter
from .fanout_reporter import FanOutErrorReporter
from .metadata import ReportMetadata
from .silent_reporter import SilentErrorReporter
from .stack import StackFrame, TracedError, with_stack
from .writer_reporter import WriterErrorReporter

__version__ = CLIENT_VERSION

__all__ = [
    # Version
    "__version__",
    # Error Reporters
    "ErrorReporter",
    "BugsnagErrorReporter",
    "ConsoleErrorReporter",
    "FanOutErrorReporter",
    "SilentErrorReporter",
    "WriterErrorReporter",
    "create_error_reporter",
    # Report inputs
    "ReportContext",
    "ReportMetadata",
    "StackFrame",
    "TracedError",
    "with_stack",
    # Errors
    "DeliveryError",
    "FailureKind",
    "ReportCancelledError",
    # Configuration
    "AdapterConfig_ErrorReporter",
    "BugsnagNotifier",
    "DriverConfig_ErrorReporter_Bugsnag",
    "DriverConfig_ErrorReporter_Console",
    "DriverConfig_ErrorReporter_Fanout",
    "DriverConfig_ErrorReporter_Silent",
    "DriverConfig_ErrorReporter_Writer",
]
