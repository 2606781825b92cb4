from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class Stop:
    """Transit stop entity - a named location served by one or more lines."""

    id: int
    name: str
    lat: float
    lon: float
    served_lines: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_dict(cls, row: dict) -> "Stop":
        """Create Stop from a catalog record.

        Accepts both the catalog keys (lat/lon/lines) and the long
        form (latitude/longitude/served_lines).
        """
        lines = row.get("served_lines", row.get("lines")) or ()
        return cls(
            id=int(row["id"]),
            name=str(row.get("name", "")),
            lat=float(row.get("lat", row.get("latitude", 0))),
            lon=float(row.get("lon", row.get("lng", row.get("longitude", 0)))),
            served_lines=frozenset(str(line_id) for line_id in lines),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "lines": sorted(self.served_lines),
        }
