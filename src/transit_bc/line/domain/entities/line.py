from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Line:
    """Transit line entity - an ordered sequence of stops with a total travel time.

    The total duration is spread evenly over the segments, so every
    consecutive stop pair of the line costs `segment_minutes`.
    """

    id: str
    stop_ids: Tuple[int, ...]
    duration_minutes: float

    @classmethod
    def from_dict(cls, row: dict) -> "Line":
        """Create Line from a catalog record (line/stops/duration keys)."""
        line_id = row.get("id", row.get("line"))
        if line_id is None:
            raise KeyError("id")
        stops = row.get("stop_ids", row.get("stops")) or ()
        duration = row.get("duration_minutes", row.get("duration", 0))
        return cls(
            id=str(line_id),
            stop_ids=tuple(int(stop_id) for stop_id in stops),
            duration_minutes=float(duration),
        )

    @property
    def segment_count(self) -> int:
        return max(len(self.stop_ids) - 1, 0)

    @property
    def segment_minutes(self) -> float:
        """Travel time assigned to each consecutive stop pair."""
        if self.segment_count == 0:
            raise ValueError(f"Line {self.id} has no segments")
        return self.duration_minutes / self.segment_count

    def segments(self) -> Iterator[Tuple[int, int]]:
        """Yield consecutive (from_stop_id, to_stop_id) pairs in line order."""
        for i in range(len(self.stop_ids) - 1):
            yield self.stop_ids[i], self.stop_ids[i + 1]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "stops": list(self.stop_ids),
            "duration": self.duration_minutes,
        }
