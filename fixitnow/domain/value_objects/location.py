"""
Location value objects.
"""

from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional

from fixitnow.domain.exceptions.validation_error import ValidationError


@dataclass(frozen=True)
class LocationPoint:
    """Normalized geospatial point, coordinates are ``(longitude, latitude)``."""

    type: str
    coordinates: tuple[float, float]

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["LocationPoint"]:
        """
        Build a point from a raw mapping, or ``None`` when it is malformed.

        A point is well formed only when it carries a ``type`` and a
        ``coordinates`` list of exactly two numbers. Anything else (empty
        mapping, missing keys, wrong arity, non-numeric values) counts as
        absent.
        """
        if isinstance(raw, LocationPoint):
            return raw
        if not isinstance(raw, dict) or not raw:
            return None

        point_type = raw.get("type")
        coordinates = raw.get("coordinates")
        if not point_type or not isinstance(coordinates, (list, tuple)):
            return None
        if len(coordinates) != 2:
            return None
        if not all(
            isinstance(value, Real) and not isinstance(value, bool)
            for value in coordinates
        ):
            return None

        return cls(
            type=str(point_type),
            coordinates=(float(coordinates[0]), float(coordinates[1])),
        )

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]

    def to_dict(self) -> dict:
        return {"type": self.type, "coordinates": list(self.coordinates)}


@dataclass(frozen=True)
class JobLocation:
    """Free-text address where the service is performed."""

    address: str
    city: str
    state: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def __post_init__(self):
        """Validate address fields."""
        if not self.address or not self.address.strip():
            raise ValidationError("Job address is required")
        if not self.city or not self.city.strip():
            raise ValidationError("City is required")

    @property
    def full_address(self) -> str:
        """Get formatted full address."""
        parts = [self.address, self.city]
        if self.state:
            parts.append(self.state)
        formatted = ", ".join(parts)
        if self.zip_code:
            formatted += f" {self.zip_code}"
        return formatted

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JobLocation":
        return cls(
            address=data.get("address"),
            city=data.get("city"),
            state=data.get("state"),
            zip_code=data.get("zip_code"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
