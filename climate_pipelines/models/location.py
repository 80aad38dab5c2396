"""Location model for geocoded cities."""
from attrs import define
from typing import Optional


@define
class Location:
    """A geocoded city."""

    name: str
    latitude: float
    longitude: float
    location_id: Optional[int] = None
    country: Optional[str] = None
    admin1: Optional[str] = None  # State / region

    @classmethod
    def from_geocoding_result(cls, result: dict) -> "Location":
        """Create a Location from one entry of the geocoding API `results` list."""
        return cls(
            name=result["name"],
            latitude=float(result["latitude"]),
            longitude=float(result["longitude"]),
            location_id=result.get("id"),
            country=result.get("country"),
            admin1=result.get("admin1"),
        )

    @property
    def cache_key(self) -> str:
        """Stable identifier used to key cached normals."""
        if self.location_id:
            return f"city_{self.location_id}"
        return f"{self.name}_{self.country}_{self.latitude}_{self.longitude}"

    @property
    def label(self) -> str:
        return ", ".join(part for part in (self.name, self.admin1, self.country) if part)

    def to_dict(self) -> dict:
        return {
            "location_id": self.location_id,
            "name": self.name,
            "country": self.country,
            "admin1": self.admin1,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
