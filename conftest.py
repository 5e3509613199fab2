# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Shared pytest fixtures; living at the repo root also puts the package on sys.path."""

import httpx
import pytest

from copilot_error_dispatch import SilentErrorReporter


@pytest.fixture
def backup():
    """In-memory reporter used as the backup of the reporter under test."""
    return SilentErrorReporter()


@pytest.fixture
def mock_client():
    """Factory for httpx clients served by a MockTransport handler.

    Every client created through the factory is closed at teardown.
    """
    clients = []

    def _make(handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
