# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for the fan-out error reporter."""

import threading
from unittest.mock import MagicMock, patch

import httpx

from copilot_error_dispatch import (
    BugsnagErrorReporter,
    ErrorReporter,
    FailureKind,
    FanOutErrorReporter,
    ReportContext,
    ReportMetadata,
    SilentErrorReporter,
)


class BarrierReporter(ErrorReporter):
    """Reporter that only completes once every sibling has started."""

    def __init__(self, barrier: threading.Barrier):
        self.barrier = barrier
        self.reported = []

    def report(self, error, metadata=None, ctx=None):
        self.barrier.wait()
        self.reported.append(error)


class RaisingReporter(ErrorReporter):
    """Reporter that breaks the never-raise contract."""

    def report(self, error, metadata=None, ctx=None):
        raise RuntimeError("reporter bug")


def failing_bugsnag_reporter(backup, mock_client):
    def handler(request):
        raise httpx.ConnectError("sink unreachable")

    return BugsnagErrorReporter(api_key="k", backup=backup, transport=mock_client(handler))


class TestFanOutErrorReporter:
    """Tests for FanOutErrorReporter."""

    def test_all_reporters_receive_error(self, mock_client):
        """Test that an internally handled failure does not affect siblings."""
        first, third, r2_backup = SilentErrorReporter(), SilentErrorReporter(), SilentErrorReporter()
        fanout = FanOutErrorReporter([first, failing_bugsnag_reporter(r2_backup, mock_client), third])
        error = ValueError("fan-out test")

        fanout.report(error)

        for reporter in (first, third):
            errors = reporter.get_errors()
            assert len(errors) == 1
            assert errors[0]["error"] is error
        assert [e["error"].kind for e in r2_backup.get_errors()] == [FailureKind.TRANSPORT]

    def test_no_reporters(self):
        """Test that an empty fan-out returns without starting threads."""
        with patch("copilot_error_dispatch.fanout_reporter.threading.Thread") as thread_cls:
            FanOutErrorReporter().report(ValueError("x"))

        thread_cls.assert_not_called()

    def test_reporters_run_concurrently(self):
        """Test that every reporter is in flight at the same time."""
        barrier = threading.Barrier(3, timeout=5)
        reporters = [BarrierReporter(barrier) for _ in range(3)]
        error = ValueError("x")

        FanOutErrorReporter(reporters).report(error)

        assert all(r.reported == [error] for r in reporters)
        assert not barrier.broken

    def test_metadata_not_forwarded(self):
        """Test that sub-reporters get the error and context only."""
        reporter = MagicMock()
        error = ValueError("x")
        ctx = ReportContext()

        FanOutErrorReporter([reporter]).report(error, ReportMetadata(context="ingestion"), ctx=ctx)

        reporter.report.assert_called_once_with(error, ctx=ctx)

    def test_raising_reporter_contained(self):
        """Test that a raising sub-reporter neither escapes nor blocks siblings."""
        first, last = SilentErrorReporter(), SilentErrorReporter()
        error = ValueError("x")

        FanOutErrorReporter([first, RaisingReporter(), last]).report(error)

        assert first.get_errors()[0]["error"] is error
        assert last.get_errors()[0]["error"] is error

    def test_reporters_materialized(self):
        """Test that a generator of reporters can be reported to more than once."""
        silent = SilentErrorReporter()
        fanout = FanOutErrorReporter(r for r in [silent])

        fanout.report(ValueError("one"))
        fanout.report(ValueError("two"))

        assert [e["error_message"] for e in silent.get_errors()] == ["one", "two"]
