# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for the writer, console and silent error reporters."""

import io
import logging

import pytest

from copilot_error_dispatch import (
    ConsoleErrorReporter,
    DeliveryError,
    FailureKind,
    ReportMetadata,
    SilentErrorReporter,
    WriterErrorReporter,
)


class TestWriterErrorReporter:
    """Tests for WriterErrorReporter."""

    def test_writes_message_and_newline(self):
        """Test that exactly the message plus a newline is written."""
        stream = io.StringIO()

        WriterErrorReporter(stream).report(ValueError("disk full"))

        assert stream.getvalue() == "disk full\n"

    def test_metadata_ignored(self):
        """Test that metadata does not change the output."""
        stream = io.StringIO()

        WriterErrorReporter(stream).report(ValueError("x"), ReportMetadata(context="c", severity="info"))

        assert stream.getvalue() == "x\n"

    def test_no_stream_is_noop(self):
        """Test that a reporter without a stream does nothing."""
        WriterErrorReporter().report(ValueError("x"))

    def test_write_failure_not_surfaced(self):
        """Test that writing to a closed stream does not raise."""
        stream = io.StringIO()
        stream.close()

        WriterErrorReporter(stream).report(ValueError("x"))


class TestConsoleErrorReporter:
    """Tests for ConsoleErrorReporter."""

    def test_logs_error_with_context(self, caplog):
        """Test the logged line for an error with context and metadata."""
        caplog.set_level(logging.DEBUG, logger="test.console")
        reporter = ConsoleErrorReporter(logger_name="test.console")

        reporter.report(
            ValueError("bad input"),
            ReportMetadata(context="parsing", event_metadata={"thread_id": "t-1"}),
        )

        records = [r for r in caplog.records if r.name == "test.console"]
        assert records[0].levelno == logging.ERROR
        assert "ValueError: bad input" in records[0].getMessage()
        assert "Context: parsing" in records[0].getMessage()
        assert "thread_id=t-1" in records[0].getMessage()

    def test_severity_maps_to_level(self, caplog):
        """Test that the metadata severity selects the log level."""
        caplog.set_level(logging.DEBUG, logger="test.console")
        reporter = ConsoleErrorReporter(logger_name="test.console")

        reporter.report(ValueError("x"), ReportMetadata(severity="warning"))

        assert caplog.records[0].levelno == logging.WARNING

    def test_delivery_error_includes_failure_kind(self, caplog):
        """Test that delivery failures show the failing stage."""
        caplog.set_level(logging.DEBUG, logger="test.console")
        reporter = ConsoleErrorReporter(logger_name="test.console")
        failure = DeliveryError(FailureKind.STATUS, "could not report to bugsnag", status_code=500)

        reporter.report(failure)

        assert "Failure: status" in caplog.records[0].getMessage()

    def test_stack_trace_logged_at_debug(self, caplog):
        """Test that a raised error's traceback is logged at DEBUG."""
        caplog.set_level(logging.DEBUG, logger="test.console")
        reporter = ConsoleErrorReporter(logger_name="test.console")

        try:
            raise KeyError("missing")
        except KeyError as e:
            reporter.report(e)

        debug = [r for r in caplog.records if r.levelno == logging.DEBUG]
        assert len(debug) == 1
        assert "Traceback" in debug[0].getMessage()


class TestSilentErrorReporter:
    """Tests for SilentErrorReporter."""

    def test_records_errors(self):
        """Test that reported errors are stored with their metadata."""
        reporter = SilentErrorReporter()
        metadata = ReportMetadata(context="c")

        reporter.report(ValueError("a"), metadata)
        reporter.report(KeyError("b"))

        assert reporter.has_errors()
        errors = reporter.get_errors()
        assert len(errors) == 2
        assert errors[0]["metadata"] is metadata
        assert errors[1]["metadata"] is None

    def test_filter_by_type(self):
        """Test filtering by error type name."""
        reporter = SilentErrorReporter()
        reporter.report(ValueError("a"))
        reporter.report(KeyError("b"))

        assert [e["error_message"] for e in reporter.get_errors("ValueError")] == ["a"]

    def test_clear(self):
        """Test that clear removes every recorded error."""
        reporter = SilentErrorReporter()
        reporter.report(ValueError("a"))

        reporter.clear()

        assert not reporter.has_errors()


@pytest.mark.parametrize("error", [ValueError("v"), DeliveryError(FailureKind.DRAIN, "d")])
def test_reporters_never_raise(error):
    """Test that every local reporter accepts any error."""
    for reporter in (WriterErrorReporter(io.StringIO()), ConsoleErrorReporter(), SilentErrorReporter()):
        reporter.report(error)
