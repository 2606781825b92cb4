"""StopCatalog - in-memory singleton holding the stops and lines of the network.

The catalog is loaded once at server startup (or by the CLI) and is
read-only afterwards, so any number of routing queries can read it
concurrently without locking. Reloads swap the data under a lock.

Every record is validated at load time: a line that references a stop
missing from the catalog is rejected up front instead of surfacing later
as an internal consistency failure during routing.
"""

import json
import logging
import threading
import time
from pathlib import Path
from typing import Dict, Iterable, List, NamedTuple, Optional, Union

from src.transit_bc.line.domain.entities.line import Line
from src.transit_bc.routing.exceptions import CatalogNotLoadedError, CatalogValidationError
from src.transit_bc.stop.domain.entities.stop import Stop

logger = logging.getLogger(__name__)


StopRecord = Union[Stop, dict]
LineRecord = Union[Line, dict]


class CatalogSnapshot(NamedTuple):
    """Stops and lines of one load, swapped in as a unit."""
    # {stop_id: Stop}
    stops: Dict[int, Stop]
    # {line_id: Line} - insertion order is catalog order
    lines: Dict[str, Line]
    # Incremented by every successful load
    generation: int


def _to_stop(record: StopRecord) -> Stop:
    return record if isinstance(record, Stop) else Stop.from_dict(record)


def _to_line(record: LineRecord) -> Line:
    return record if isinstance(record, Line) else Line.from_dict(record)


def validate_catalog(stops: List[Stop], lines: List[Line]) -> List[str]:
    """Return the list of consistency errors (empty when valid)."""
    errors = []

    stop_ids = set()
    for stop in stops:
        if stop.id <= 0:
            errors.append(f"Stop id must be a positive integer, got {stop.id}")
        if stop.id in stop_ids:
            errors.append(f"Duplicate stop id {stop.id}")
        stop_ids.add(stop.id)

    line_ids = set()
    for line in lines:
        if line.id in line_ids:
            errors.append(f"Duplicate line id {line.id}")
        line_ids.add(line.id)

        if len(line.stop_ids) < 2:
            errors.append(f"Line {line.id} must have at least 2 stops")
        if not line.duration_minutes > 0:
            errors.append(f"Line {line.id} must have a positive duration, got {line.duration_minutes}")

        missing = [stop_id for stop_id in line.stop_ids if stop_id not in stop_ids]
        if missing:
            errors.append(f"Line {line.id} references unknown stops {missing}")

        for from_stop_id, to_stop_id in line.segments():
            if from_stop_id == to_stop_id:
                errors.append(f"Line {line.id} repeats stop {from_stop_id} consecutively")

    return errors


class StopCatalog:
    """Singleton store of Stop and Line records.

    Use `get_instance()` in application code; tests may build a private
    instance directly or call `reset_instance()`.
    """

    _instance: Optional['StopCatalog'] = None
    _lock = threading.Lock()

    def __init__(self):
        self._snapshot = CatalogSnapshot(stops={}, lines={}, generation=0)

        self.is_loaded = False
        self.load_time_seconds = 0.0
        self.stats: Dict[str, int] = {}
        self._reload_lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> 'StopCatalog':
        """Get the singleton instance (thread-safe)."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton (tests or full reload)."""
        with cls._lock:
            cls._instance = None

    # ----- Loading -----

    def load_data(self, stops: Iterable[StopRecord], lines: Iterable[LineRecord]) -> None:
        """Load stops and lines. No-op when the catalog is already loaded.

        Raises:
            CatalogValidationError: if the records are inconsistent
        """
        if self.is_loaded:
            return

        with self._reload_lock:
            if self.is_loaded:
                return
            self._do_load(stops, lines)

    def reload_data(self, stops: Iterable[StopRecord], lines: Iterable[LineRecord]) -> None:
        """Replace the catalog contents. The old data stays in place if validation fails."""
        with self._reload_lock:
            self._do_load(stops, lines)

    def load_from_file(self, path: Union[str, Path]) -> None:
        """Load a JSON document of the form {"stops": [...], "lines": [...]}."""
        path = Path(path)
        logger.info(f"Loading stop catalog from {path}")
        with path.open(encoding="utf-8") as f:
            document = json.load(f)

        if not isinstance(document, dict) or "stops" not in document or "lines" not in document:
            raise CatalogValidationError([f"{path} must contain 'stops' and 'lines' arrays"])

        self.load_data(document["stops"], document["lines"])

    def load_default(self) -> None:
        """Load the bundled Niš network."""
        from src.transit_bc.catalog.default_network import STOPS, LINES

        self.load_data(STOPS, LINES)

    def _do_load(self, stops: Iterable[StopRecord], lines: Iterable[LineRecord]) -> None:
        start = time.time()

        try:
            stop_list = [_to_stop(record) for record in stops]
            line_list = [_to_line(record) for record in lines]
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogValidationError([f"Malformed catalog record: {e}"]) from e

        errors = validate_catalog(stop_list, line_list)
        if errors:
            logger.error(f"Stop catalog rejected with {len(errors)} errors")
            raise CatalogValidationError(errors)

        line_ids = {line.id for line in line_list}
        unlisted = sorted({
            line_id for stop in stop_list for line_id in stop.served_lines if line_id not in line_ids
        })
        if unlisted:
            logger.warning(f"Stops list lines with no route data (ignored for routing): {unlisted}")

        snapshot = CatalogSnapshot(
            stops={stop.id: stop for stop in stop_list},
            lines={line.id: line for line in line_list},
            generation=self._snapshot.generation + 1,
        )
        # Single assignment so readers never mix stops and lines of two loads
        self._snapshot = snapshot

        self.stats = {
            'stops': len(snapshot.stops),
            'lines': len(snapshot.lines),
            'segments': sum(line.segment_count for line in line_list),
        }
        self.load_time_seconds = time.time() - start
        self.is_loaded = True

        logger.info(
            f"Stop catalog loaded: {self.stats['stops']} stops, {self.stats['lines']} lines, "
            f"{self.stats['segments']} segments in {self.load_time_seconds * 1000:.1f} ms"
        )

    def _require_loaded(self) -> None:
        if not self.is_loaded:
            raise CatalogNotLoadedError()

    # ----- Queries -----

    @property
    def generation(self) -> int:
        """Number of successful loads; changes whenever the data is replaced."""
        return self._snapshot.generation

    def snapshot(self) -> CatalogSnapshot:
        """Current stops and lines, consistent with each other."""
        self._require_loaded()
        return self._snapshot

    def list_stops(self) -> List[Stop]:
        self._require_loaded()
        return sorted(self._snapshot.stops.values(), key=lambda stop: stop.id)

    def list_lines(self) -> List[Line]:
        self._require_loaded()
        return list(self._snapshot.lines.values())

    def get_stop(self, stop_id: int) -> Optional[Stop]:
        self._require_loaded()
        return self._snapshot.stops.get(stop_id)

    def get_line(self, line_id: str) -> Optional[Line]:
        self._require_loaded()
        return self._snapshot.lines.get(line_id)

    def has_stop(self, stop_id: int) -> bool:
        self._require_loaded()
        return stop_id in self._snapshot.stops

    def search_stops(self, query: str) -> List[Stop]:
        """Case-insensitive substring match on stop names."""
        needle = query.strip().casefold()
        if not needle:
            return self.list_stops()
        return [stop for stop in self.list_stops() if needle in stop.name.casefold()]


def get_stop_catalog() -> StopCatalog:
    """Dependency provider for the loaded singleton."""
    return StopCatalog.get_instance()
