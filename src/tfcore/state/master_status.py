"""Master status table.

A transient per-vessel view of every polled part, rebuilt from live telemetry
each tick and pruned periodically.  It is never a source of truth for
persistence.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator

from tfcore.host import FlightHost, HostVessel, find_part, find_vessel, is_debris
from tfcore.models.status import MasterStatusItem, PartStatus

_logger = logging.getLogger(__name__)


class MasterStatusTable:
    def __init__(self) -> None:
        self._items: dict[Hashable, MasterStatusItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, vessel_id: object) -> bool:
        return vessel_id in self._items

    def __iter__(self) -> Iterator[MasterStatusItem]:
        return iter(list(self._items.values()))

    def get(self, vessel_id: Hashable) -> MasterStatusItem | None:
        return self._items.get(vessel_id)

    def items(self) -> list[tuple[Hashable, MasterStatusItem]]:
        return list(self._items.items())

    def snapshot(self) -> dict[Hashable, MasterStatusItem]:
        """Copy of the table for display layers.

        Part status lists are copied; flight cores and failure references
        still point at the live objects.
        """
        return {
            vessel_id: MasterStatusItem(
                vessel_id=item.vessel_id,
                vessel_name=item.vessel_name,
                all_parts_status=list(item.all_parts_status),
            )
            for vessel_id, item in self._items.items()
        }

    def upsert(self, vessel: HostVessel, status: PartStatus) -> None:
        """Insert or replace the entry for ``status.part_id`` on *vessel*.

        Entries are matched purely by part id.  More than one match means the
        table is corrupt: the first match is replaced, the extras dropped,
        and a warning logged.
        """
        item = self._items.get(vessel.id)
        if item is None:
            _logger.debug("Adding new vessel %s and part %s to master status", vessel.name, status.part_id)
            self._items[vessel.id] = MasterStatusItem(
                vessel_id=vessel.id,
                vessel_name=vessel.name,
                all_parts_status=[status],
            )
            return

        matches = [i for i, existing in enumerate(item.all_parts_status) if existing.part_id == status.part_id]
        if not matches:
            _logger.debug("Adding new part %s to master status for %s", status.part_id, vessel.name)
            item.all_parts_status.append(status)
            return

        item.all_parts_status[matches[0]] = status
        if len(matches) > 1:
            _logger.warning(
                "Found %d matching entries for part %s on vessel %s in master status",
                len(matches),
                status.part_id,
                vessel.name,
            )
            for index in reversed(matches[1:]):
                del item.all_parts_status[index]

    def verify(self, host: FlightHost) -> int:
        """Drop vessels and parts that no longer exist on the host.

        Vessels that vanished or turned into debris are removed whole; for
        the rest, parts no longer on the vessel are removed.  Returns the
        number of vessel and part entries removed.
        """
        stale_vessels: list[Hashable] = []
        for vessel_id in self._items:
            vessel = find_vessel(host, vessel_id)
            if vessel is None:
                _logger.debug("Vessel %s no longer exists; removing from master status", vessel_id)
                stale_vessels.append(vessel_id)
            elif is_debris(vessel):
                _logger.debug("Vessel %s is debris now; removing from master status", vessel.name)
                stale_vessels.append(vessel_id)
        if stale_vessels:
            _logger.debug("Removing %d vessel(s) from master status", len(stale_vessels))
        for vessel_id in stale_vessels:
            del self._items[vessel_id]

        removed_parts = 0
        for vessel_id, item in self._items.items():
            vessel = find_vessel(host, vessel_id)
            if vessel is None:
                continue
            kept: list[PartStatus] = []
            for status in item.all_parts_status:
                if find_part(vessel, status.part_id) is None:
                    _logger.debug("Could not find part %s(%s); removing", status.part_name, status.part_id)
                    continue
                kept.append(status)
            dropped = len(item.all_parts_status) - len(kept)
            if dropped:
                _logger.debug("Deleting %d part(s) from vessel %s", dropped, vessel.name)
                item.all_parts_status[:] = kept
                removed_parts += dropped

        return len(stale_vessels) + removed_parts
