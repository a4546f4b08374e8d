from __future__ import annotations

import asyncio

import pytest

from tfcore.config import FlightSettings
from tfcore.exceptions import TfNotReadyError
from tfcore.manager import FlightManager
from tfcore.models.vessel import VesselType
from tfcore.scenario import FlightScenario

from tests.helpers.fake_host import FakeFailure, FakeHost, make_vessel


def _ready_manager(host: FakeHost, **settings: object) -> tuple[FlightManager, FlightScenario]:
    scenario = FlightScenario(settings=FlightSettings(**settings))  # type: ignore[arg-type]
    scenario.start()
    manager = FlightManager(host)
    manager.startup(scenario)
    return manager, scenario


def test_update_before_ready_raises() -> None:
    with pytest.raises(TfNotReadyError):
        FlightManager(FakeHost()).update()


def test_tick_populates_master_status_and_store() -> None:
    ship = make_vessel("Ship", 1, 2)
    ship.parts[0].cores[0].flight_data = 12.0
    ship.parts[1].cores[0].flight_data = 30.0
    host = FakeHost(vessels=[ship], active_vessel=ship, now=1.0)
    manager, scenario = _ready_manager(host)

    manager.update()

    item = manager.get_master_status()[ship.id]
    assert item.vessel_name == "Ship"
    assert item.part_ids() == [1, 2]
    engine = scenario.store.get("liquidEngine")
    assert engine is not None
    assert engine.get_record("kerbin_atmosphere").flight_data == 30.0  # type: ignore[union-attr]


def test_status_entry_reflects_core_readings() -> None:
    failure = FakeFailure()
    ship = make_vessel("Ship", 1)
    core = ship.parts[0].cores[0]
    core.status = 3
    core.failure = failure
    core.reliability = 0.8
    core.tooltip = "Needs an engineer"
    core.acknowledged = True
    core.flight_time = 12.5
    host = FakeHost(vessels=[ship], active_vessel=ship)
    manager, _ = _ready_manager(host, global_reliability_modifier=0.5)

    manager.update()

    status = manager.master_status.get(ship.id).all_parts_status[0]  # type: ignore[union-attr]
    assert status.part_name == "liquidEngine #1"
    assert status.part_status == 3
    assert status.failure is failure
    assert status.reliability == pytest.approx(0.4)
    assert status.repair_requirements == "Needs an engineer"
    assert status.acknowledged is True
    assert status.flight_time == 12.5
    assert status.flight_core is core


def test_nominal_part_has_no_failure_reference() -> None:
    ship = make_vessel("Ship", 1)
    ship.parts[0].cores[0].failure = FakeFailure()
    host = FakeHost(vessels=[ship], active_vessel=ship)
    manager, _ = _ready_manager(host)

    manager.update()

    status = manager.master_status.get(ship.id).all_parts_status[0]  # type: ignore[union-attr]
    assert status.active_failure is None


def test_store_never_decreases_across_ticks() -> None:
    ship = make_vessel("Ship", 1)
    core = ship.parts[0].cores[0]
    host = FakeHost(vessels=[ship], active_vessel=ship)
    manager, scenario = _ready_manager(host)

    for value in (10.0, 15.0, 5.0):
        core.flight_data = value
        manager.update()

    assert scenario.store.packed_strings() == ["liquidEngine:kerbin_atmosphere,15,0 "]


def test_new_vessel_seeded_from_store_once() -> None:
    ship = make_vessel("Ship", 1)
    host = FakeHost(vessels=[ship], active_vessel=ship)
    scenario = FlightScenario(packed_strings=["liquidEngine:kerbin_atmosphere,40,0"])
    scenario.on_awake()
    scenario.start()
    manager = FlightManager(host)
    manager.startup(scenario)

    manager.update()
    manager.update()

    initialized = ship.parts[0].cores[0].initialized
    assert len(initialized) == 1
    assert [(r.scope, r.flight_data) for r in initialized[0][0]] == [("kerbin_atmosphere", 40.0)]


def test_unloaded_vessel_skipped() -> None:
    ship = make_vessel("Ship", 1, loaded=False)
    host = FakeHost(vessels=[ship], active_vessel=ship)
    manager, scenario = _ready_manager(host)

    manager.update()

    assert ship.id in manager.tracker
    assert ship.id not in manager.master_status
    assert len(scenario.store) == 0


def test_part_without_scope_updates_status_only() -> None:
    ship = make_vessel("Ship", 1)
    ship.parts[0].cores[0].scope = ""
    host = FakeHost(vessels=[ship], active_vessel=ship)
    manager, scenario = _ready_manager(host)

    manager.update()

    assert manager.master_status.get(ship.id).part_ids() == [1]  # type: ignore[union-attr]
    assert len(scenario.store) == 0


@pytest.mark.parametrize("scope", ["low orbit", "kerbin,orbit", "mod:orbit"])
def test_unstorable_scope_updates_status_only(scope: str) -> None:
    ship = make_vessel("Ship", 1)
    ship.parts[0].cores[0].scope = scope
    host = FakeHost(vessels=[ship], active_vessel=ship)
    manager, scenario = _ready_manager(host)

    manager.update()

    assert manager.master_status.get(ship.id).part_ids() == [1]  # type: ignore[union-attr]
    assert len(scenario.store) == 0


def test_part_name_with_colon_updates_status_only() -> None:
    ship = make_vessel("Ship", 1)
    ship.parts[0].name = "mod:Engine"
    host = FakeHost(vessels=[ship], active_vessel=ship)
    manager, scenario = _ready_manager(host)

    manager.update()

    assert manager.master_status.get(ship.id).part_ids() == [1]  # type: ignore[union-attr]
    assert len(scenario.store) == 0


def test_verify_runs_on_cooldown() -> None:
    a = make_vessel("A", 1)
    b = make_vessel("B", 2)
    host = FakeHost(vessels=[a, b], now=0.0)
    manager, _ = _ready_manager(host, process_all_vessels=True, master_status_update_frequency=10.0)
    manager.update()
    assert manager.last_master_status_update == 0.0

    host.remove(a)
    host.now = 5.0
    manager.update()
    # Cooldown not elapsed: the stale entry is still present.
    assert a.id in manager.master_status

    host.now = 10.0
    manager.update()
    assert a.id not in manager.master_status
    assert b.id in manager.master_status
    assert manager.last_master_status_update == 10.0


def test_debris_vessel_dropped_from_tracking_and_status() -> None:
    ship = make_vessel("Ship", 1)
    host = FakeHost(vessels=[ship], now=0.0)
    manager, _ = _ready_manager(host, process_all_vessels=True, master_status_update_frequency=0.0)
    manager.update()

    ship.vessel_type = VesselType.DEBRIS
    host.now = 1.0
    manager.update()

    assert ship.id not in manager.tracker
    assert ship.id not in manager.master_status


def test_poll_bookkeeping_advances() -> None:
    host = FakeHost(now=0.0)
    manager, _ = _ready_manager(host, min_time_between_data_poll=1.0, min_time_between_failure_poll=60.0)

    host.now = 2.0
    manager.update()

    assert manager.last_data_poll == 2.0
    assert manager.last_failure_poll == 0.0


@pytest.mark.asyncio
async def test_connect_waits_for_scenario_then_ready() -> None:
    manager = FlightManager(FakeHost())
    scenario = FlightScenario()
    provided: list[FlightScenario | None] = [None]

    task = asyncio.create_task(manager.connect_to_scenario(lambda: provided[0]))
    for _ in range(3):
        await asyncio.sleep(0)
    assert not manager.is_ready

    provided[0] = scenario
    for _ in range(3):
        await asyncio.sleep(0)
    assert not manager.is_ready

    scenario.start()
    await asyncio.wait_for(task, timeout=1.0)

    assert manager.is_ready
    assert manager.scenario is scenario


@pytest.mark.asyncio
async def test_run_ticks_until_step_returns_false() -> None:
    ship = make_vessel("Ship", 1)
    host = FakeHost(vessels=[ship], active_vessel=ship)
    manager, scenario = _ready_manager(host)
    core = ship.parts[0].cores[0]
    values = iter([1.0, 2.0, 3.0])

    async def step() -> bool:
        value = next(values, None)
        if value is None:
            return False
        core.flight_data = value
        host.now += 1.0
        return True

    await manager.run(step)

    assert scenario.store.packed_strings() == ["liquidEngine:kerbin_atmosphere,3,0 "]
