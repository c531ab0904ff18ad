"""Location lookups — Google Places autocomplete and reverse geocoding.

Both calls go straight to the Google Maps web services with httpx and
reshape the answer into the fields the profile and board screens use.
"""

import logging
import math
from typing import Any

import httpx

from connectz.config import AppConfig
from connectz.errors import BadRequest, HTTPError, IntegrationError
from connectz.services._http import http_client

logger = logging.getLogger("connectz.locations")

MIN_AUTOCOMPLETE_LENGTH = 3

# Raised while reshaping a response that is not the documented shape
_MALFORMED = (ValueError, KeyError, TypeError, AttributeError)


def parse_coordinates(latitude: object, longitude: object) -> tuple[float, float]:
    """Validate a latitude/longitude pair given as numbers or strings.

    Raises:
        BadRequest: Either value is missing, not a number, or out of range.
    """
    if latitude in (None, "") or longitude in (None, ""):
        raise BadRequest("Latitude and longitude are required")
    try:
        lat = float(latitude)  # type: ignore[arg-type]
        lng = float(longitude)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise BadRequest("Invalid coordinates") from None
    if math.isnan(lat) or math.isnan(lng) or not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise BadRequest("Invalid coordinates")
    return lat, lng


def _require_key(config: AppConfig) -> str:
    if not config.google_maps_api_key:
        raise HTTPError(500, "Google Maps API key not configured")
    return config.google_maps_api_key


async def _get_json(
    config: AppConfig,
    client: httpx.AsyncClient | None,
    path: str,
    params: dict[str, str],
) -> dict[str, Any]:
    async with http_client(config, client) as http:
        response = await http.get(f"{config.google_maps_api_base}{path}", params=params)
    if response.status_code != 200:
        raise IntegrationError("google-maps", response.status_code, response.text)
    return response.json()


async def autocomplete(
    config: AppConfig,
    text: str | None,
    *,
    client: httpx.AsyncClient | None = None,
) -> dict[str, list[dict[str, str]]]:
    """City suggestions for *text*.

    Returns ``{"predictions": [{description, placeId, mainText,
    secondaryText}, ...]}``.

    Raises:
        BadRequest: *text* is shorter than three characters, or Google
            answered with a non-OK status (the status is the detail).
        HTTPError: The API key is missing or the request failed.
    """
    if not text or len(text) < MIN_AUTOCOMPLETE_LENGTH:
        raise BadRequest(f"Input must be at least {MIN_AUTOCOMPLETE_LENGTH} characters")
    key = _require_key(config)

    try:
        data = await _get_json(
            config,
            client,
            "/maps/api/place/autocomplete/json",
            {"input": text, "key": key, "types": "(cities)"},
        )
        return _predictions(data)
    except (httpx.HTTPError, IntegrationError, *_MALFORMED) as e:
        logger.error("Autocomplete error: %s", e)
        raise HTTPError(500, "Failed to fetch autocomplete suggestions") from e


def _predictions(data: dict[str, Any]) -> dict[str, list[dict[str, str]]]:
    if data.get("status") != "OK":
        raise BadRequest(str(data.get("status")))

    predictions = []
    for p in data.get("predictions") or []:
        formatting = p.get("structured_formatting") or {}
        predictions.append(
            {
                "description": p.get("description", ""),
                "placeId": p.get("place_id", ""),
                "mainText": formatting.get("main_text", ""),
                "secondaryText": formatting.get("secondary_text", ""),
            }
        )
    return {"predictions": predictions}


def _component(components: list[dict[str, Any]], kind: str) -> str:
    for component in components:
        if kind in component.get("types", ()):
            return component.get("long_name", "")
    return ""


async def reverse_geocode(
    config: AppConfig,
    latitude: object,
    longitude: object,
    *,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Turn GPS coordinates into an address broken down by component.

    Raises:
        BadRequest: Bad coordinates, or Google found nothing there.
        HTTPError: The API key is missing or the request failed.
    """
    lat, lng = parse_coordinates(latitude, longitude)
    key = _require_key(config)

    try:
        data = await _get_json(
            config,
            client,
            "/maps/api/geocode/json",
            {"latlng": f"{lat},{lng}", "key": key},
        )
        return _address(data)
    except (httpx.HTTPError, IntegrationError, *_MALFORMED) as e:
        logger.error("Reverse geocode error: %s", e)
        raise HTTPError(500, "Failed to reverse geocode location") from e


def _address(data: dict[str, Any]) -> dict[str, Any]:
    results = data.get("results") or []
    if data.get("status") != "OK" or not results:
        raise BadRequest("Location not found")

    result = results[0]
    components = result.get("address_components", [])
    location = result["geometry"]["location"]
    return {
        "formattedAddress": result.get("formatted_address", ""),
        "city": _component(components, "locality")
        or _component(components, "administrative_area_level_2"),
        "state": _component(components, "administrative_area_level_1"),
        "country": _component(components, "country"),
        "postalCode": _component(components, "postal_code"),
        "coordinates": {"latitude": location["lat"], "longitude": location["lng"]},
    }
