"""Thin glue over third-party APIs and sample data.

Every operation returns a JSON-ready ``dict`` and raises
``connectz.errors.HTTPError`` (or ``BadRequest``) for failures a caller
should see, so any web layer can expose them as-is::

    try:
        body = await create_checkout_session(config, amount=25, user_id="u_1")
    except HTTPError as e:
        return e.to_payload(), e.status
"""

from connectz.services.collaborations import haversine_km, nearby_collaborations
from connectz.services.health import health
from connectz.services.locations import autocomplete, parse_coordinates, reverse_geocode
from connectz.services.payments import (
    create_checkout_session,
    handle_webhook,
    net_income,
    transaction_history,
    validate_amount,
)

__all__ = [
    "autocomplete",
    "create_checkout_session",
    "handle_webhook",
    "haversine_km",
    "health",
    "nearby_collaborations",
    "net_income",
    "parse_coordinates",
    "reverse_geocode",
    "transaction_history",
    "validate_amount",
]
