"""Per part-type flight data and its persisted forms.

Packed form, one string per part type::

    <partName>:<scope>,<flightData>,0 <scope>,<flightData>,0

Every record is followed by a single space.  The third field is reserved,
always written as ``0`` and ignored on read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pydantic import ValidationError

from tfcore._constants import (
    DATA_NODE,
    FIELD_SEPARATOR,
    FLIGHT_DATA_KEY,
    NAME_SEPARATOR,
    PACKED_FIELD_COUNT,
    PART_NAME_KEY,
    RECORD_SEPARATOR,
    RESERVED_FIELD,
    SCOPE_KEY,
    check_part_name,
    format_number,
)
from tfcore.config_node import ConfigNode
from tfcore.ingestion.normalize import safe_float
from tfcore.models.flight_data import FlightDataRecord

_logger = logging.getLogger(__name__)


class PartFlightData:
    """Flight data records for one part type, unique by scope."""

    def __init__(self, part_name: str = "", records: list[FlightDataRecord] | None = None) -> None:
        self._part_name = check_part_name(part_name)
        self._records: list[FlightDataRecord] = []
        for record in records or []:
            self._merge(record)

    @property
    def part_name(self) -> str:
        return self._part_name

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FlightDataRecord]:
        return iter(list(self._records))

    def __repr__(self) -> str:
        return f"PartFlightData(part_name={self._part_name!r}, records={len(self._records)})"

    def __str__(self) -> str:
        return self.to_packed()

    def get_flight_data(self) -> list[FlightDataRecord]:
        return list(self._records)

    def get_record(self, scope: str) -> FlightDataRecord | None:
        index = self._index_of(scope)
        return None if index < 0 else self._records[index]

    def _index_of(self, scope: str) -> int:
        for index, record in enumerate(self._records):
            if record.scope == scope:
                return index
        return -1

    def _merge(self, data: FlightDataRecord) -> None:
        index = self._index_of(data.scope)
        if index < 0:
            self._records.append(data.stored())
            return
        current = self._records[index]
        # Only ever move forward; flight time is never accumulated.
        flight_data = max(current.flight_data, data.flight_data)
        self._records[index] = current.model_copy(update={"flight_data": flight_data, "flight_time": 0.0})

    def add_flight_data(self, part_name: str, data: FlightDataRecord) -> None:
        """Merge an observed record into this set.

        An unseen scope is appended as-is.  A known scope keeps the larger of
        the stored and observed values.
        """
        if not self._part_name:
            self._part_name = check_part_name(part_name)
        self._merge(data)

    # ------------------------------------------------------------------
    # Packed string form
    # ------------------------------------------------------------------

    def to_packed(self) -> str:
        parts = [self._part_name, NAME_SEPARATOR]
        for record in self._records:
            fields = (record.scope, format_number(record.flight_data), RESERVED_FIELD)
            parts.append(FIELD_SEPARATOR.join(fields) + RECORD_SEPARATOR)
        return "".join(parts)

    @classmethod
    def from_packed(cls, text: str) -> PartFlightData | None:
        """Decode a packed string.

        Returns ``None`` when *text* has no name separator.  Records with the
        wrong field count or an unreadable value are dropped.
        """
        if NAME_SEPARATOR not in text:
            return None
        part_name, _, body = text.partition(NAME_SEPARATOR)
        data = cls(part_name)
        for chunk in body.split(RECORD_SEPARATOR):
            if not chunk.strip():
                continue
            fields = chunk.split(FIELD_SEPARATOR)
            if len(fields) != PACKED_FIELD_COUNT:
                _logger.debug("Skipping packed record %r for %s: %d fields", chunk, part_name, len(fields))
                continue
            value = safe_float(fields[1])
            if value is None:
                _logger.debug("Skipping packed record %r for %s: bad value", chunk, part_name)
                continue
            try:
                record = FlightDataRecord(scope=fields[0], flight_data=value)
            except ValidationError:
                _logger.debug("Skipping packed record %r for %s: bad scope", chunk, part_name)
                continue
            data._merge(record)
        return data

    # ------------------------------------------------------------------
    # Config node form
    # ------------------------------------------------------------------

    def load(self, node: ConfigNode) -> None:
        """Replace this set's contents with the records stored in *node*.

        Raises ``ValueError`` if the stored part name holds a name separator.
        Records with a blank or unpackable scope are dropped.
        """
        self._part_name = check_part_name(node.get_value(PART_NAME_KEY) or "")
        self._records = []
        for data_node in node.get_nodes(DATA_NODE):
            scope = data_node.get_value(SCOPE_KEY)
            if scope is None or not scope.strip():
                _logger.debug("Skipping %s node without scope for %s", DATA_NODE, self._part_name)
                continue
            value = 0.0
            if data_node.has_value(FLIGHT_DATA_KEY):
                parsed = safe_float(data_node.get_value(FLIGHT_DATA_KEY))
                if parsed is None:
                    _logger.debug("Skipping %s scope=%s: unreadable flight data", self._part_name, scope)
                    continue
                value = parsed
            try:
                record = FlightDataRecord(scope=scope, flight_data=value)
            except ValidationError:
                _logger.debug("Skipping %s scope=%r: scope not storable", self._part_name, scope)
                continue
            self._merge(record)

    def save(self, node: ConfigNode) -> None:
        node.add_value(PART_NAME_KEY, self._part_name)
        for record in self._records:
            data_node = node.add_node(DATA_NODE)
            data_node.add_value(SCOPE_KEY, record.scope)
            data_node.add_value(FLIGHT_DATA_KEY, record.flight_data)

    @classmethod
    def from_node(cls, node: ConfigNode) -> PartFlightData:
        data = cls()
        data.load(node)
        return data
