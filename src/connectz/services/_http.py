"""Shared outbound HTTP plumbing for the service glue."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx

from connectz.config import AppConfig


@asynccontextmanager
async def http_client(
    config: AppConfig, client: httpx.AsyncClient | None = None
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield *client* if given, otherwise a short-lived client owned here.

    Callers that make many requests pass their own client to reuse
    connections; tests pass one backed by ``httpx.MockTransport``.
    """
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=config.request_timeout) as owned:
        yield owned


def iso_timestamp(moment: datetime | None = None) -> str:
    """UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = moment or datetime.now(UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
