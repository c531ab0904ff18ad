"""Tests for connectz.services.health."""

import re
import time

from connectz.config import AppConfig
from connectz.services.health import health


class TestHealth:
    def test_report(self) -> None:
        body = health(AppConfig(environment="production"))
        assert body["status"] == "ok"
        assert body["environment"] == "production"
        assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", body["timestamp"])

    def test_uptime_counts_from_start(self) -> None:
        body = health(AppConfig(), started=time.monotonic() - 5)
        assert 5 <= body["uptime"] < 60
