# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Bugsnag error reporter implementation."""

import json
import logging
from typing import Any, Protocol

import httpx

from .bugsnag_payload import build_payload
from .config import (
    BUGSNAG_NOTIFY_ENDPOINT,
    DEFAULT_NOTIFIER,
    RESPONSE_DRAIN_LIMIT,
    BugsnagNotifier,
    DriverConfig_ErrorReporter_Bugsnag,
)
from .context import ReportContext
from .error_reporter import ErrorReporter
from .errors import DeliveryError, FailureKind, ReportCancelledError
from .metadata import ReportMetadata
from .stack import TracedError, with_stack

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything able to send a prepared request, e.g. ``httpx.Client``."""

    def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response: ...


def _delivery_error(kind: FailureKind, cause: BaseException) -> DeliveryError:
    error = DeliveryError(kind, f"bugsnag {kind.value} failure: {cause}")
    error.__cause__ = cause
    return error


class BugsnagErrorReporter(ErrorReporter):
    """Error reporter that posts events to the Bugsnag notify API.

    Delivery happens synchronously in the calling thread. Any failure along
    the way (encoding, request construction, transport, reading or closing
    the response, non-200 status) is handed to the backup reporter as a
    ``DeliveryError`` instead of being raised. Nothing is retried.

    Example:
        reporter = BugsnagErrorReporter(
            api_key="...",
            release_stage="production",
            backup=ConsoleErrorReporter(),
        )
        reporter.report(exception, ReportMetadata(context="ingestion"))
    """

    def __init__(
        self,
        api_key: str,
        backup: ErrorReporter,
        release_stage: str = "production",
        transport: Transport | None = None,
        endpoint: str = BUGSNAG_NOTIFY_ENDPOINT,
        notifier: BugsnagNotifier = DEFAULT_NOTIFIER,
    ):
        """Initialize Bugsnag reporter.

        Args:
            api_key: Bugsnag project API key
            backup: Reporter receiving every delivery failure (required)
            release_stage: Release stage attached to each event
            transport: HTTP client used to send requests (defaults to a new httpx.Client)
            endpoint: Notify endpoint URL
            notifier: Notifier descriptor sent with every payload

        Raises:
            ValueError: If no backup reporter is given
        """
        if backup is None:
            raise ValueError("BugsnagErrorReporter requires a backup reporter")

        self.api_key = api_key
        self.backup = backup
        self.release_stage = release_stage
        self.endpoint = endpoint
        self.notifier = notifier
        self._owns_transport = transport is None
        self.transport: Transport = transport if transport is not None else httpx.Client()

    @classmethod
    def from_config(
        cls,
        config: DriverConfig_ErrorReporter_Bugsnag,
        backup: ErrorReporter,
    ) -> "BugsnagErrorReporter":
        """Create a BugsnagErrorReporter from driver configuration.

        Args:
            config: Driver config with api_key, release_stage and endpoint
            backup: Reporter built from ``config.backup``

        Returns:
            Configured BugsnagErrorReporter instance
        """
        return cls(
            api_key=config.api_key,
            backup=backup,
            release_stage=config.release_stage,
            endpoint=config.endpoint,
        )

    def close(self) -> None:
        """Close the HTTP client if this reporter created it."""
        if self._owns_transport and isinstance(self.transport, httpx.Client):
            self.transport.close()

    def __enter__(self) -> "BugsnagErrorReporter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def report(
        self,
        error: BaseException | TracedError,
        metadata: ReportMetadata | None = None,
        ctx: ReportContext | None = None,
    ) -> None:
        """Report an exception to Bugsnag, falling back to the backup on failure.

        Args:
            error: The exception to report
            metadata: Optional per-report metadata
            ctx: Optional cancellation/timeout context, also passed to the backup
        """
        traced = with_stack(error)

        try:
            body = self._encode(traced, metadata or ReportMetadata())
            request = self._build_request(body, ctx)
            response = self._send(request, ctx)
        except DeliveryError as failure:
            self._fallback(failure, ctx)
            return

        for failure in self._drain_and_close(response):
            self._fallback(failure, ctx)

        if response.status_code != httpx.codes.OK:
            self._fallback(
                DeliveryError(
                    FailureKind.STATUS,
                    "could not report to bugsnag",
                    status_code=response.status_code,
                ),
                ctx,
            )
            return

        logger.debug(f"Reported {type(traced.error).__name__} to Bugsnag")

    def build_payload(self, traced: TracedError, metadata: ReportMetadata) -> dict[str, Any]:
        return build_payload(
            traced,
            metadata,
            api_key=self.api_key,
            release_stage=self.release_stage,
            notifier=self.notifier,
        )

    def _encode(self, traced: TracedError, metadata: ReportMetadata) -> bytes:
        try:
            return json.dumps(self.build_payload(traced, metadata), allow_nan=False).encode("utf-8")
        except Exception as e:
            raise _delivery_error(FailureKind.ENCODING, e) from e

    def _build_request(self, body: bytes, ctx: ReportContext | None) -> httpx.Request:
        extensions = {}
        if ctx is not None and ctx.timeout is not None:
            extensions["timeout"] = httpx.Timeout(ctx.remaining()).as_dict()

        try:
            return httpx.Request(
                "POST",
                self.endpoint,
                content=body,
                headers={"Content-Type": "application/json"},
                extensions=extensions,
            )
        except Exception as e:
            raise _delivery_error(FailureKind.REQUEST, e) from e

    def _send(self, request: httpx.Request, ctx: ReportContext | None) -> httpx.Response:
        try:
            if ctx is not None:
                ctx.raise_if_done()
            response = self.transport.send(request, stream=True)
        except Exception as e:
            raise _delivery_error(FailureKind.TRANSPORT, e) from e

        # httpx timeouts are per phase; recheck for the overall deadline and
        # for a cancellation that arrived in flight
        if ctx is not None:
            try:
                ctx.raise_if_done()
            except ReportCancelledError as e:
                self._abandon(response)
                raise _delivery_error(FailureKind.TRANSPORT, e) from e

        return response

    def _abandon(self, response: httpx.Response) -> None:
        try:
            response.close()
        except Exception:
            logger.debug("Failed to close abandoned Bugsnag response", exc_info=True)

    def _drain_and_close(self, response: httpx.Response) -> list[DeliveryError]:
        """Discard a bounded prefix of the body, then close the response.

        Read and close failures are returned separately, never merged.
        """
        failures = []

        try:
            remaining = RESPONSE_DRAIN_LIMIT
            for chunk in response.iter_bytes(chunk_size=RESPONSE_DRAIN_LIMIT):
                remaining -= len(chunk)
                if remaining <= 0:
                    break
        except Exception as e:
            failures.append(_delivery_error(FailureKind.DRAIN, e))

        try:
            response.close()
        except Exception as e:
            failures.append(_delivery_error(FailureKind.CLOSE, e))

        return failures

    def _fallback(self, failure: DeliveryError, ctx: ReportContext | None) -> None:
        logger.warning(f"Bugsnag delivery failed ({failure.kind.value}), using backup reporter: {failure}")
        try:
            self.backup.report(failure, ctx=ctx)
        except Exception:
            logger.exception("Backup reporter raised while handling a Bugsnag delivery failure")
