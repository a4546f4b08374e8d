"""Data models for tracked vessels, flight data and part status."""

from tfcore.models.flight_data import FlightDataRecord
from tfcore.models.status import MasterStatusItem, PartStatus
from tfcore.models.vessel import TRACKABLE_VESSEL_TYPES, TrackedVessel, VesselType

__all__ = [
    "FlightDataRecord",
    "MasterStatusItem",
    "PartStatus",
    "TRACKABLE_VESSEL_TYPES",
    "TrackedVessel",
    "VesselType",
]
