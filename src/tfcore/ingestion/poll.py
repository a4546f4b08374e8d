"""Poll a part's flight core into normalized records."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from tfcore.host import FlightCore, HostPart
from tfcore.ingestion.normalize import non_negative_or_zero, safe_float, safe_int, safe_str
from tfcore.models.flight_data import FlightDataRecord
from tfcore.models.status import PartStatus

_logger = logging.getLogger(__name__)


def read_flight_data(core: FlightCore) -> FlightDataRecord | None:
    """Read the core's current scope and cumulative metric.

    Returns ``None`` while the core reports no scope (e.g. before its first
    situation update), or a scope the packed form cannot carry, since such a
    sample cannot be stored.
    """
    scope = safe_str(core.get_scope())
    if not scope.strip():
        return None
    try:
        return FlightDataRecord(
            scope=scope,
            flight_data=non_negative_or_zero(core.get_flight_data()),
            flight_time=non_negative_or_zero(core.get_flight_time()),
        )
    except ValidationError:
        _logger.debug("Ignoring unstorable scope %r", scope)
        return None


def build_part_status(
    part: HostPart,
    core: FlightCore,
    *,
    reliability_modifier: float,
) -> PartStatus:
    """Build the master status entry for one polled part.

    The failure module is captured only while the core reports a failure.
    """
    status_code = safe_int(core.get_part_status()) or 0
    failure = core.get_failure_module() if status_code > 0 else None
    return PartStatus.with_failure(
        failure,
        part_name=safe_str(part.title),
        part_id=part.flight_id,
        part_status=status_code,
        flight_time=non_negative_or_zero(core.get_flight_time()),
        flight_data=non_negative_or_zero(core.get_flight_data()),
        reliability=safe_float(core.get_current_reliability(reliability_modifier)) or 0.0,
        momentary_reliability=safe_float(core.get_momentary_reliability(reliability_modifier)) or 0.0,
        flight_core=core,
        repair_requirements=safe_str(core.get_requirements_tooltip()),
        acknowledged=bool(core.is_failure_acknowledged()),
    )
