"""Master status display models.

These are transient views rebuilt every tick; nothing here is persisted.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tfcore.host import FlightCore

_logger = logging.getLogger(__name__)


def _weak(target: Any) -> weakref.ReferenceType[Any] | None:
    if target is None:
        return None
    try:
        return weakref.ref(target)
    except TypeError:
        _logger.debug("Cannot weakly reference failure module %r; not keeping it", target)
        return None


@dataclass(slots=True)
class PartStatus:
    """Live status of one part, as last polled from its flight core."""

    part_name: str
    part_id: int
    part_status: int = 0
    flight_time: float = 0.0
    flight_data: float = 0.0
    reliability: float = 0.0
    momentary_reliability: float = 0.0
    flight_core: FlightCore | None = None
    active_failure: weakref.ReferenceType[Any] | None = None
    highlight_part: bool = False
    repair_requirements: str = ""
    acknowledged: bool = False

    @classmethod
    def with_failure(cls, failure: Any, **kwargs: Any) -> PartStatus:
        """Build a status holding a weak reference to *failure*."""
        return cls(active_failure=_weak(failure), **kwargs)

    @property
    def failure(self) -> Any:
        """The active failure module, or ``None`` when none or collected."""
        if self.active_failure is None:
            return None
        return self.active_failure()

    @property
    def has_failure(self) -> bool:
        return self.part_status > 0


@dataclass(slots=True)
class MasterStatusItem:
    """All polled part statuses for one vessel, in first-seen order."""

    vessel_id: Hashable
    vessel_name: str
    all_parts_status: list[PartStatus] = field(default_factory=list)

    def part_ids(self) -> list[int]:
        return [status.part_id for status in self.all_parts_status]
