# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Factory for creating error reporters from typed configuration."""

from collections.abc import Callable

from .config import (
    AdapterConfig_ErrorReporter,
    DriverConfig_ErrorReporter,
    DriverConfig_ErrorReporter_Bugsnag,
    DriverConfig_ErrorReporter_Console,
    DriverConfig_ErrorReporter_Fanout,
    DriverConfig_ErrorReporter_Silent,
    DriverConfig_ErrorReporter_Writer,
)
from .error_reporter import ErrorReporter


def _build_console(config: DriverConfig_ErrorReporter) -> ErrorReporter:
    from .console_reporter import ConsoleErrorReporter

    if not isinstance(config, DriverConfig_ErrorReporter_Console):
        raise TypeError("driver config must be DriverConfig_ErrorReporter_Console")
    return ConsoleErrorReporter.from_config(config)


def _build_silent(config: DriverConfig_ErrorReporter) -> ErrorReporter:
    from .silent_reporter import SilentErrorReporter

    if not isinstance(config, DriverConfig_ErrorReporter_Silent):
        raise TypeError("driver config must be DriverConfig_ErrorReporter_Silent")
    return SilentErrorReporter.from_config(config)


def _build_writer(config: DriverConfig_ErrorReporter) -> ErrorReporter:
    from .writer_reporter import WriterErrorReporter

    if not isinstance(config, DriverConfig_ErrorReporter_Writer):
        raise TypeError("driver config must be DriverConfig_ErrorReporter_Writer")
    return WriterErrorReporter.from_config(config)


def _build_bugsnag(config: DriverConfig_ErrorReporter) -> ErrorReporter:
    from .bugsnag_reporter import BugsnagErrorReporter
    from .console_reporter import ConsoleErrorReporter

    if not isinstance(config, DriverConfig_ErrorReporter_Bugsnag):
        raise TypeError("driver config must be DriverConfig_ErrorReporter_Bugsnag")
    if config.backup is None:
        backup = ConsoleErrorReporter()
    else:
        backup = create_error_reporter(config.backup)
    return BugsnagErrorReporter.from_config(config, backup=backup)


def _build_fanout(config: DriverConfig_ErrorReporter) -> ErrorReporter:
    from .fanout_reporter import FanOutErrorReporter

    if not isinstance(config, DriverConfig_ErrorReporter_Fanout):
        raise TypeError("driver config must be DriverConfig_ErrorReporter_Fanout")
    return FanOutErrorReporter(create_error_reporter(c) for c in config.reporters)


_DRIVERS: dict[str, Callable[[DriverConfig_ErrorReporter], ErrorReporter]] = {
    "bugsnag": _build_bugsnag,
    "console": _build_console,
    "fanout": _build_fanout,
    "silent": _build_silent,
    "writer": _build_writer,
}


def create_error_reporter(config: AdapterConfig_ErrorReporter) -> ErrorReporter:
    """Create an error reporter from typed configuration.

    Nested configs (a Bugsnag backup, fan-out targets) are built recursively.

    Args:
        config: Typed adapter configuration for error_reporter.

    Returns:
        ErrorReporter instance.

    Raises:
        ValueError: If config is missing or error_reporter_type is not recognized.
        TypeError: If the driver config does not match error_reporter_type.
    """
    if config is None:
        raise ValueError("error_reporter config is required")

    driver_type = str(config.error_reporter_type).lower()
    try:
        build = _DRIVERS[driver_type]
    except KeyError as exc:
        supported = ", ".join(sorted(_DRIVERS))
        raise ValueError(
            f"Unknown error_reporter driver: {driver_type}. Supported drivers: {supported}"
        ) from exc

    return build(config.driver)
