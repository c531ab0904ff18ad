"""Webhook signature verification for Stripe-style signed payloads.

The signature header carries a timestamp and one or more HMAC-SHA256
signatures of ``"{timestamp}.{payload}"``::

    Stripe-Signature: t=1700000000,v1=5257a869e7...,v0=...

Only ``v1`` signatures are checked. A timestamp older than the tolerance
is rejected so captured requests cannot be replayed later.

Usage::

    event = verify_webhook(body, request.headers["stripe-signature"], secret)
"""

import hashlib
import hmac
import json
import time
from typing import Any

from connectz.errors import WebhookSignatureError

SIGNATURE_SCHEME = "v1"
DEFAULT_TOLERANCE = 300  # seconds


def compute_signature(payload: bytes, timestamp: int, secret: str) -> str:
    """Hex HMAC-SHA256 of ``"{timestamp}.{payload}"`` keyed by *secret*."""
    signed = f"{timestamp}.".encode() + payload
    return hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()


def sign_header(payload: bytes, secret: str, timestamp: int | None = None) -> str:
    """Build a signature header for *payload*. Used to sign test fixtures."""
    ts = int(time.time()) if timestamp is None else timestamp
    return f"t={ts},{SIGNATURE_SCHEME}={compute_signature(payload, ts, secret)}"


def _parse_header(header: str) -> tuple[int, list[str]]:
    timestamp: int | None = None
    signatures: list[str] = []
    for item in header.split(","):
        key, sep, value = item.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                msg = "Unable to extract timestamp and signatures from header"
                raise WebhookSignatureError(msg) from None
        elif key == SIGNATURE_SCHEME:
            signatures.append(value)

    if timestamp is None or not signatures:
        msg = "Unable to extract timestamp and signatures from header"
        raise WebhookSignatureError(msg)
    return timestamp, signatures


def verify_signature(
    payload: bytes,
    header: str | None,
    secret: str,
    *,
    tolerance: int = DEFAULT_TOLERANCE,
    now: float | None = None,
) -> None:
    """Raise ``WebhookSignatureError`` unless *header* signs *payload*.

    Args:
        payload: The raw request body, exactly as received.
        header: The signature header value.
        secret: The endpoint's signing secret.
        tolerance: Maximum age of the timestamp in seconds; ``0`` disables
            the check.
        now: Current UNIX time, for tests.
    """
    if not header:
        msg = "No signatures found matching the expected signature for payload"
        raise WebhookSignatureError(msg)
    if not secret:
        msg = "Webhook signing secret is not configured"
        raise WebhookSignatureError(msg)

    timestamp, signatures = _parse_header(header)
    expected = compute_signature(payload, timestamp, secret)
    if not any(hmac.compare_digest(expected, candidate) for candidate in signatures):
        msg = "No signatures found matching the expected signature for payload"
        raise WebhookSignatureError(msg)

    current = time.time() if now is None else now
    if tolerance > 0 and timestamp < current - tolerance:
        msg = "Timestamp outside the tolerance zone"
        raise WebhookSignatureError(msg)


def verify_webhook(
    payload: bytes,
    header: str | None,
    secret: str,
    *,
    tolerance: int = DEFAULT_TOLERANCE,
    now: float | None = None,
) -> dict[str, Any]:
    """Verify the signature, then decode the JSON event."""
    verify_signature(payload, header, secret, tolerance=tolerance, now=now)
    try:
        event = json.loads(payload)
    except ValueError as e:
        msg = f"Invalid payload: {e}"
        raise WebhookSignatureError(msg) from None
    if not isinstance(event, dict):
        msg = "Invalid payload: expected a JSON object"
        raise WebhookSignatureError(msg)
    return event
