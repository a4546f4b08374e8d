"""Flight data record model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tfcore._constants import SCOPE_RESERVED_CHARS


class FlightDataRecord(BaseModel):
    """Cumulative flight data for one part type within one scope.

    ``flight_time`` is carried so part modules can report it, but the store
    never accumulates it: every stored record has ``flight_time == 0``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    scope: str = Field(..., description="Measurement context, e.g. a body/situation pair")
    flight_data: float = Field(default=0.0, description="Cumulative, non-decreasing metric")
    flight_time: float = Field(default=0.0, description="Elapsed flight time; not persisted")

    @field_validator("scope")
    @classmethod
    def _check_scope(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("scope must be non-empty")
        reserved = sorted(SCOPE_RESERVED_CHARS.intersection(value))
        if reserved:
            raise ValueError(f"scope must not contain {reserved!r}: {value!r}")
        return value

    def stored(self) -> FlightDataRecord:
        """Return this record as the store keeps it (flight time zeroed)."""
        if self.flight_time == 0:
            return self
        return self.model_copy(update={"flight_time": 0.0})
