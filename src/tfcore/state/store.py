"""Session store for per part-type flight data.

This is the only durable owner of flight data.  The master status table is
derived from live telemetry and is never persisted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from tfcore._constants import PART_NODE, check_part_name
from tfcore.config_node import ConfigNode
from tfcore.models.flight_data import FlightDataRecord
from tfcore.state.part_data import PartFlightData

_logger = logging.getLogger(__name__)


class FlightDataStore:
    """Part flight data indexed by part type name, in insertion order."""

    def __init__(self) -> None:
        self._parts: dict[str, PartFlightData] = {}

    def __len__(self) -> int:
        return len(self._parts)

    def __contains__(self, part_name: object) -> bool:
        return part_name in self._parts

    def __iter__(self) -> Iterator[PartFlightData]:
        return iter(list(self._parts.values()))

    def part_names(self) -> list[str]:
        return list(self._parts)

    def get(self, part_name: str) -> PartFlightData | None:
        return self._parts.get(part_name)

    def set(self, part_name: str, data: PartFlightData) -> None:
        """Insert or replace the set for *part_name*, keeping its position."""
        self._parts[check_part_name(part_name)] = data

    def add_flight_data(self, part_name: str, data: FlightDataRecord) -> PartFlightData:
        """Merge an observed record, creating the part's set when absent.

        Raises ``ValueError`` if *part_name* holds a name separator.
        """
        part_data = self._parts.get(part_name)
        if part_data is None:
            part_data = PartFlightData(part_name)
            self._parts[part_name] = part_data
            _logger.debug("Created flight data for part %s", part_name)
        part_data.add_flight_data(part_name, data)
        return part_data

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self, node: ConfigNode) -> list[str]:
        """Hydrate from every part node under *node*.

        Returns the packed form of each loaded set, in node order, for the
        fast-reload cache.
        """
        packed: list[str] = []
        for part_node in node.get_nodes(PART_NODE):
            try:
                part_data = PartFlightData.from_node(part_node)
            except ValueError as exc:
                _logger.debug("Skipping %s node: %s", PART_NODE, exc)
                continue
            if part_data.part_name in self._parts:
                _logger.debug("Duplicate flight data for part %s; last one wins", part_data.part_name)
            self.set(part_data.part_name, part_data)
            packed.append(part_data.to_packed())
        _logger.debug("Loaded flight data for %d part(s) from config", len(packed))
        return packed

    def save(self, node: ConfigNode) -> None:
        for part_data in self._parts.values():
            part_data.save(node.add_node(PART_NODE))

    def load_packed(self, strings: Iterable[str]) -> int:
        """Hydrate from packed strings; undecodable strings are skipped."""
        loaded = 0
        for text in strings:
            part_data = PartFlightData.from_packed(text)
            if part_data is None:
                _logger.debug("Skipping undecodable packed string %r", text)
                continue
            self.set(part_data.part_name, part_data)
            loaded += 1
        return loaded

    def packed_strings(self) -> list[str]:
        return [part_data.to_packed() for part_data in self._parts.values()]
