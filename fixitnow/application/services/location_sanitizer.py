"""
Location point sanitization applied before every job write.
"""

from typing import Any, Dict, Optional

from fixitnow.domain.value_objects.location import LocationPoint

LOCATION_POINT_FIELD = "location_point"


def sanitize_location_point(raw: Any) -> Optional[Dict[str, Any]]:
    """Return the storable form of a point, or None when it is malformed."""
    point = LocationPoint.from_raw(raw)
    return point.to_dict() if point else None


def sanitize_job_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sanitize the location point of a partial job update.

    A point that is present in ``changes`` but malformed is turned into an
    explicit ``None`` so the stored value is cleared. A point absent from
    ``changes`` is left untouched.
    """
    sanitized = dict(changes)
    if LOCATION_POINT_FIELD in sanitized:
        sanitized[LOCATION_POINT_FIELD] = sanitize_location_point(
            sanitized[LOCATION_POINT_FIELD]
        )
    return sanitized
