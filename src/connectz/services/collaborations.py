"""Collaboration board — sample postings filtered by distance.

There is no store behind the board; postings are fixed samples. Distance
from the searcher is great-circle distance by the Haversine formula.
"""

import math
from datetime import UTC, datetime, timedelta
from typing import Any

from connectz.errors import BadRequest
from connectz.services._http import iso_timestamp
from connectz.services.locations import parse_coordinates

EARTH_RADIUS_KM = 6371.0
DEFAULT_RADIUS_KM = 50.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points, in kilometres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def _sample_postings(now: datetime) -> list[dict[str, Any]]:
    return [
        {
            "id": "collab_1",
            "title": "Looking for Beat Producer",
            "description": "Need a beat producer for hip-hop project",
            "skills": ["Beat Production", "Hip-Hop"],
            "budget": 500,
            "location": {
                "city": "Los Angeles",
                "state": "CA",
                "latitude": 34.0522,
                "longitude": -118.2437,
            },
            "user": {"name": "John Doe", "persona": "Indie Artist"},
            "createdAt": iso_timestamp(now),
        },
        {
            "id": "collab_2",
            "title": "Mix Engineer Needed",
            "description": "Looking for experienced mix engineer",
            "skills": ["Mixing", "Mastering"],
            "budget": 800,
            "location": {
                "city": "Los Angeles",
                "state": "CA",
                "latitude": 34.0689,
                "longitude": -118.4452,
            },
            "user": {"name": "Jane Smith", "persona": "Beat Producer"},
            "createdAt": iso_timestamp(now - timedelta(days=1)),
        },
    ]


def nearby_collaborations(
    latitude: object,
    longitude: object,
    radius: object = DEFAULT_RADIUS_KM,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Postings within *radius* km of the given point, nearest first.

    Each posting's ``location.distance`` is its distance in km, rounded to
    one decimal.

    Raises:
        BadRequest: Bad coordinates or radius.
    """
    lat, lng = parse_coordinates(latitude, longitude)
    try:
        radius_km = float(radius)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise BadRequest("Invalid radius") from None
    if math.isnan(radius_km) or radius_km < 0:
        raise BadRequest("Invalid radius")

    nearby = []
    for posting in _sample_postings(now or datetime.now(UTC)):
        where = posting["location"]
        distance = round(haversine_km(lat, lng, where["latitude"], where["longitude"]), 1)
        if distance <= radius_km:
            where["distance"] = distance
            nearby.append(posting)
    nearby.sort(key=lambda p: p["location"]["distance"])

    return {
        "collaborations": nearby,
        "total": len(nearby),
        "radius": radius_km,
        "center": {"latitude": lat, "longitude": lng},
    }
