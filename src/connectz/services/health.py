"""Health report for load balancers and uptime checks."""

import time
from typing import Any

from connectz.config import AppConfig
from connectz.services._http import iso_timestamp

_STARTED = time.monotonic()


def health(config: AppConfig, *, started: float | None = None) -> dict[str, Any]:
    """Status, current time, seconds since start, and environment."""
    since = _STARTED if started is None else started
    return {
        "status": "ok",
        "timestamp": iso_timestamp(),
        "uptime": round(time.monotonic() - since, 3),
        "environment": config.environment,
    }
