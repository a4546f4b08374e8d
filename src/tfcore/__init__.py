"""tfcore - flight data tracking and master status for simulated vessels."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tfcore")
except PackageNotFoundError:
    __version__ = "0+local"
from tfcore.config import FlightSettings
from tfcore.config_node import ConfigNode
from tfcore.exceptions import TfConfigError, TfError, TfNodeParseError, TfNotReadyError
from tfcore.host import FlightCore, FlightHost, HostPart, HostVessel
from tfcore.manager import FlightManager
from tfcore.models import (
    TRACKABLE_VESSEL_TYPES,
    FlightDataRecord,
    MasterStatusItem,
    PartStatus,
    TrackedVessel,
    VesselType,
)
from tfcore.scenario import FlightScenario
from tfcore.state.master_status import MasterStatusTable
from tfcore.state.part_data import PartFlightData
from tfcore.state.store import FlightDataStore
from tfcore.state.tracker import VesselTracker

__all__ = [
    "__version__",
    "TRACKABLE_VESSEL_TYPES",
    "ConfigNode",
    "FlightCore",
    "FlightDataRecord",
    "FlightDataStore",
    "FlightHost",
    "FlightManager",
    "FlightScenario",
    "FlightSettings",
    "HostPart",
    "HostVessel",
    "MasterStatusItem",
    "MasterStatusTable",
    "PartFlightData",
    "PartStatus",
    "TfConfigError",
    "TfError",
    "TfNodeParseError",
    "TfNotReadyError",
    "TrackedVessel",
    "VesselTracker",
    "VesselType",
]
