"""Wallet payments — Stripe Checkout glue.

The wallet screen is backed by:

- ``create_checkout_session`` starts a hosted Checkout for a wallet top-up.
- ``handle_webhook`` verifies and acknowledges Stripe events.
- ``transaction_history`` returns sample transactions (there is no store).
- ``validate_amount`` checks a top-up amount before checkout.
- ``net_income`` splits gross earnings into tax and net.

Stripe is called over its REST API with httpx; no SDK is required.
"""

import logging
import math
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx

from connectz.config import AppConfig
from connectz.errors import BadRequest, HTTPError, IntegrationError, WebhookSignatureError
from connectz.validation.result import ValidationResult
from connectz.security.sanitize import escape
from connectz.security.signatures import verify_webhook
from connectz.services._http import http_client, iso_timestamp

logger = logging.getLogger("connectz.payments")

PRODUCT_NAME = "Music ConnectZ Wallet Funds"
PRODUCT_DESCRIPTION = "Add funds to your wallet"

MIN_TOP_UP = 1
MAX_TOP_UP = 10_000
DEFAULT_TAX_RATE = 0.25


def _parse_amount(amount: object) -> float:
    try:
        value = float(amount)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise BadRequest("Invalid amount") from None
    if not math.isfinite(value) or value <= 0:
        raise BadRequest("Invalid amount")
    return value


def checkout_form(
    config: AppConfig, *, amount: float, currency: str, user_id: str
) -> dict[str, str]:
    """Form-encoded Checkout Session parameters for a wallet top-up."""
    return {
        "payment_method_types[0]": "card",
        "line_items[0][price_data][currency]": currency,
        "line_items[0][price_data][product_data][name]": PRODUCT_NAME,
        "line_items[0][price_data][product_data][description]": PRODUCT_DESCRIPTION,
        "line_items[0][price_data][unit_amount]": str(round(amount * 100)),
        "line_items[0][quantity]": "1",
        "mode": "payment",
        "success_url": (
            f"{config.frontend_url}?payment=success&session_id={{CHECKOUT_SESSION_ID}}"
        ),
        "cancel_url": f"{config.frontend_url}?payment=cancelled",
        "client_reference_id": user_id,
        "metadata[userId]": user_id,
        "metadata[type]": "wallet_topup",
    }


async def create_checkout_session(
    config: AppConfig,
    *,
    amount: object,
    user_id: str | None,
    currency: str = "usd",
    client: httpx.AsyncClient | None = None,
) -> dict[str, str]:
    """Create a Checkout Session and return ``{"sessionId", "url"}``.

    Raises:
        BadRequest: ``amount`` is not a positive number or ``user_id`` is
            missing.
        HTTPError: Stripe could not be reached or rejected the request.
    """
    value = _parse_amount(amount)
    if not user_id:
        raise BadRequest("User ID is required")

    form = checkout_form(
        config,
        amount=value,
        currency=escape(currency),
        user_id=escape(str(user_id)),
    )

    try:
        async with http_client(config, client) as http:
            response = await http.post(
                f"{config.stripe_api_base}/v1/checkout/sessions",
                data=form,
                headers={"Authorization": f"Bearer {config.stripe_secret_key}"},
            )
        if response.status_code != 200:
            raise IntegrationError("stripe", response.status_code, response.text)
        session = response.json()
        return {"sessionId": session["id"], "url": session["url"]}
    except (httpx.HTTPError, IntegrationError, ValueError, KeyError) as e:
        logger.error("Stripe checkout error: %s", e)
        raise HTTPError(500, "Failed to create checkout session") from e


def handle_webhook(
    config: AppConfig,
    payload: bytes,
    signature: str | None,
    *,
    now: float | None = None,
) -> dict[str, bool]:
    """Verify a Stripe event and log it by type.

    Args:
        payload: The raw request body, exactly as received.
        signature: The ``Stripe-Signature`` header.

    Raises:
        BadRequest: The signature does not verify.
    """
    try:
        event = verify_webhook(
            payload,
            signature,
            config.stripe_webhook_secret,
            tolerance=config.webhook_tolerance,
            now=now,
        )
    except WebhookSignatureError as e:
        logger.error("Webhook signature verification failed: %s", e)
        raise BadRequest(f"Webhook Error: {e}") from e

    event_type = event.get("type")
    obj: dict[str, Any] = (event.get("data") or {}).get("object") or {}

    match event_type:
        case "checkout.session.completed":
            # client_reference_id and amount_total identify the top-up
            logger.info("Payment successful: %s", obj.get("id"))
        case "payment_intent.succeeded":
            logger.info("PaymentIntent succeeded: %s", obj.get("id"))
        case "payment_intent.payment_failed":
            logger.error("Payment failed: %s", obj.get("id"))
        case _:
            logger.info("Unhandled event type: %s", event_type)

    return {"received": True}


def _sample_transactions(now: datetime) -> list[dict[str, Any]]:
    return [
        {
            "id": "txn_1",
            "date": iso_timestamp(now),
            "amount": 100.00,
            "currency": "usd",
            "status": "succeeded",
            "description": "Wallet top-up",
            "paymentMethod": "card",
            "last4": "4242",
        },
        {
            "id": "txn_2",
            "date": iso_timestamp(now - timedelta(days=1)),
            "amount": 50.00,
            "currency": "usd",
            "status": "succeeded",
            "description": "Wallet top-up",
            "paymentMethod": "card",
            "last4": "4242",
        },
    ]


def transaction_history(
    user_id: str | None, limit: object = 10, *, now: datetime | None = None
) -> dict[str, Any]:
    """Sample wallet transactions, newest first.

    *limit* may be a query-string value. ``total`` counts every
    transaction, not just the ``limit`` returned.
    """
    if not user_id:
        raise BadRequest("User ID is required")
    try:
        count = int(limit)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        raise BadRequest("Invalid limit") from None
    if count < 0:
        raise BadRequest("Invalid limit")
    transactions = _sample_transactions(now or datetime.now(UTC))
    return {"transactions": transactions[:count], "total": len(transactions)}


def _dollars(n: float) -> str:
    return str(int(n)) if float(n).is_integer() else str(n)


def validate_amount(
    amount: object, minimum: float = MIN_TOP_UP, maximum: float = MAX_TOP_UP
) -> ValidationResult:
    """Check a top-up amount entered on the wallet screen."""
    try:
        value = float(amount)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return ValidationResult.fail("Please enter a valid amount")
    if math.isnan(value):
        return ValidationResult.fail("Please enter a valid amount")
    if value < minimum:
        return ValidationResult.fail(f"Amount must be at least ${_dollars(minimum)}")
    if value > maximum:
        return ValidationResult.fail(f"Amount cannot exceed ${_dollars(maximum)}")
    return ValidationResult.ok()


def net_income(gross: float, tax_rate: float = DEFAULT_TAX_RATE) -> dict[str, float]:
    """Split *gross* earnings into tax withheld and net income.

    ``taxRate`` is reported as a percentage::

        net_income(1000)
        # {"gross": 1000, "tax": 250.0, "net": 750.0, "taxRate": 25.0}
    """
    tax = gross * tax_rate
    return {"gross": gross, "tax": tax, "net": gross - tax, "taxRate": tax_rate * 100}
