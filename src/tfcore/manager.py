"""Per-step flight manager.

Each simulation step the host calls :meth:`FlightManager.update`, which:

1. refreshes the known-vessel cache (admitting and seeding new vessels),
2. sweeps the master status table when its cooldown has elapsed,
3. polls every flight core on every loaded tracked vessel, updating the
   master status table and merging flight data into the store.

All state is mutated only from the tick, which runs to completion on one
thread.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable

from tfcore.config import FlightSettings
from tfcore.exceptions import TfNotReadyError
from tfcore.host import FlightHost, HostVessel, find_vessel, flight_cores
from tfcore.ingestion.poll import build_part_status, read_flight_data
from tfcore.models.status import MasterStatusItem
from tfcore.scenario import FlightScenario
from tfcore.state.master_status import MasterStatusTable
from tfcore.state.tracker import VesselTracker

_logger = logging.getLogger(__name__)


class FlightManager:
    """Drives tracking, master status and flight data for one flight session."""

    def __init__(self, host: FlightHost) -> None:
        self._host = host
        self._scenario: FlightScenario | None = None
        self._tracker: VesselTracker | None = None
        self.master_status = MasterStatusTable()
        self.is_ready = False

        self.current_utc = 0.0
        self.last_data_poll = 0.0
        self.last_failure_poll = 0.0
        self.last_master_status_update = 0.0

    @property
    def scenario(self) -> FlightScenario:
        if self._scenario is None:
            raise TfNotReadyError("flight manager has no scenario yet")
        return self._scenario

    @property
    def tracker(self) -> VesselTracker:
        if self._tracker is None:
            raise TfNotReadyError("flight manager has no scenario yet")
        return self._tracker

    @property
    def settings(self) -> FlightSettings:
        return self.scenario.settings

    async def connect_to_scenario(self, provider: Callable[[], FlightScenario | None]) -> None:
        """Wait until *provider* yields a ready scenario, then start up.

        Control goes back to the event loop after every check.  There is no
        timeout: the wait ends only when the scenario becomes ready.
        """
        scenario = provider()
        while scenario is None:
            await asyncio.sleep(0)
            scenario = provider()

        while not scenario.is_ready:
            await asyncio.sleep(0)
        self.startup(scenario)

    def startup(self, scenario: FlightScenario) -> None:
        self._scenario = scenario
        self._tracker = VesselTracker(
            scenario.store,
            reliability_modifier=scenario.settings.global_reliability_modifier,
        )
        self.is_ready = True
        _logger.debug("Flight manager ready")

    def get_master_status(self) -> dict[Hashable, MasterStatusItem]:
        return self.master_status.snapshot()

    def update(self) -> None:
        """Run one tick."""
        if not self.is_ready:
            raise TfNotReadyError("update() called before the scenario is ready")

        settings = self.settings
        tracker = self.tracker
        tracker.reliability_modifier = settings.global_reliability_modifier

        self.current_utc = self._host.universal_time()
        tracker.cache_vessels(self._host, process_all_vessels=settings.process_all_vessels)

        if self.current_utc >= self.last_master_status_update + settings.master_status_update_frequency:
            self.last_master_status_update = self.current_utc
            self.master_status.verify(self._host)

        for vessel_id in list(tracker.known_vessels):
            vessel = find_vessel(self._host, vessel_id)
            if vessel is None or not vessel.loaded:
                continue
            self._poll_vessel(vessel, settings)

        if self.current_utc >= self.last_data_poll + settings.min_time_between_data_poll:
            self.last_data_poll = self.current_utc
        if self.current_utc >= self.last_failure_poll + settings.min_time_between_failure_poll:
            self.last_failure_poll = self.current_utc

    def _poll_vessel(self, vessel: HostVessel, settings: FlightSettings) -> None:
        store = self.scenario.store
        for part in vessel.parts:
            for core in flight_cores(part):
                status = build_part_status(part, core, reliability_modifier=settings.global_reliability_modifier)
                self.master_status.upsert(vessel, status)

                data = read_flight_data(core)
                if data is None:
                    _logger.debug("No storable scope for part %s(%s)", part.name, part.flight_id)
                    continue
                _logger.debug("Getting flight data for %s: %s", data.scope, data.flight_data)
                try:
                    store.add_flight_data(part.name, data)
                except ValueError as exc:
                    _logger.debug("Not storing flight data for part %s(%s): %s", part.name, part.flight_id, exc)

    async def run(self, step: Callable[[], Awaitable[bool]]) -> None:
        """Tick once after every ``await step()`` until it returns ``False``."""
        while await step():
            self.update()
