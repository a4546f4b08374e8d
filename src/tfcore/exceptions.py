"""Custom exception hierarchy for tfcore."""

from __future__ import annotations


class TfError(Exception):
    """Base exception for all tfcore errors."""


class TfConfigError(TfError):
    """Invalid or missing configuration."""


class TfNodeParseError(TfError):
    """Config node text could not be parsed."""

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
    ) -> None:
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class TfNotReadyError(TfError):
    """The manager was ticked before its scenario became ready.

    Hosts should await :meth:`tfcore.manager.FlightManager.connect_to_scenario`
    before driving :meth:`~tfcore.manager.FlightManager.update`.
    """
