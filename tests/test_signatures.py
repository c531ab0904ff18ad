"""Tests for connectz.security.signatures — webhook signature checks."""

import json

import pytest

from connectz.errors import WebhookSignatureError
from connectz.security.signatures import (
    compute_signature,
    sign_header,
    verify_signature,
    verify_webhook,
)

SECRET = "whsec_test"
NOW = 1_700_000_000
PAYLOAD = json.dumps({"id": "evt_1", "type": "payment_intent.succeeded"}).encode()


class TestVerifySignature:
    def test_valid(self) -> None:
        header = sign_header(PAYLOAD, SECRET, timestamp=NOW)
        verify_signature(PAYLOAD, header, SECRET, now=NOW)

    def test_header_format(self) -> None:
        header = sign_header(PAYLOAD, SECRET, timestamp=NOW)
        assert header == f"t={NOW},v1={compute_signature(PAYLOAD, NOW, SECRET)}"

    def test_any_v1_signature_may_match(self) -> None:
        good = compute_signature(PAYLOAD, NOW, SECRET)
        header = f"t={NOW},v1=deadbeef,v1={good},v0=ignored"
        verify_signature(PAYLOAD, header, SECRET, now=NOW)

    def test_tampered_payload(self) -> None:
        header = sign_header(PAYLOAD, SECRET, timestamp=NOW)
        with pytest.raises(WebhookSignatureError, match="No signatures"):
            verify_signature(PAYLOAD + b" ", header, SECRET, now=NOW)

    def test_wrong_secret(self) -> None:
        header = sign_header(PAYLOAD, "other", timestamp=NOW)
        with pytest.raises(WebhookSignatureError):
            verify_signature(PAYLOAD, header, SECRET, now=NOW)

    def test_missing_header(self) -> None:
        with pytest.raises(WebhookSignatureError):
            verify_signature(PAYLOAD, None, SECRET, now=NOW)

    def test_missing_secret(self) -> None:
        header = sign_header(PAYLOAD, SECRET, timestamp=NOW)
        with pytest.raises(WebhookSignatureError, match="not configured"):
            verify_signature(PAYLOAD, header, "", now=NOW)

    @pytest.mark.parametrize("header", ["garbage", "t=abc,v1=00", f"t={NOW}", "v1=00"])
    def test_malformed_header(self, header: str) -> None:
        with pytest.raises(WebhookSignatureError, match="Unable to extract"):
            verify_signature(PAYLOAD, header, SECRET, now=NOW)

    def test_stale_timestamp(self) -> None:
        header = sign_header(PAYLOAD, SECRET, timestamp=NOW - 301)
        with pytest.raises(WebhookSignatureError, match="tolerance"):
            verify_signature(PAYLOAD, header, SECRET, now=NOW)

    def test_tolerance_disabled(self) -> None:
        header = sign_header(PAYLOAD, SECRET, timestamp=NOW - 10_000)
        verify_signature(PAYLOAD, header, SECRET, tolerance=0, now=NOW)


class TestVerifyWebhook:
    def test_returns_event(self) -> None:
        header = sign_header(PAYLOAD, SECRET, timestamp=NOW)
        event = verify_webhook(PAYLOAD, header, SECRET, now=NOW)
        assert event["type"] == "payment_intent.succeeded"

    def test_invalid_json(self) -> None:
        body = b"not json"
        header = sign_header(body, SECRET, timestamp=NOW)
        with pytest.raises(WebhookSignatureError, match="Invalid payload"):
            verify_webhook(body, header, SECRET, now=NOW)

    def test_non_object_json(self) -> None:
        body = b"[1, 2]"
        header = sign_header(body, SECRET, timestamp=NOW)
        with pytest.raises(WebhookSignatureError, match="JSON object"):
            verify_webhook(body, header, SECRET, now=NOW)
