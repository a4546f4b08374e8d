"""Runtime settings for tfcore."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from tfcore._constants import SETTINGS_NODE
from tfcore.config_node import ConfigNode
from tfcore.exceptions import TfConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_float(value: str, source: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise TfConfigError(f"{source} must be a number, got {value!r}") from exc


# Field name -> cfg key used inside the TESTFLIGHT_SETTINGS node.
_NODE_KEYS: dict[str, str] = {
    "polling_interval": "pollingInterval",
    "process_inactive_vessels": "processInactiveVessels",
    "process_all_vessels": "processAllVessels",
    "master_status_update_frequency": "masterStatusUpdateFrequency",
    "min_time_between_data_poll": "minTimeBetweenDataPoll",
    "min_time_between_failure_poll": "minTimeBetweenFailurePoll",
    "global_reliability_modifier": "globalReliabilityModifier",
}


@dataclasses.dataclass(frozen=True)
class FlightSettings:
    """Tunable thresholds for the tracker and tick loop.

    Parameters
    ----------
    polling_interval : float
        Seconds between flight data polls requested by part modules.
    process_inactive_vessels : bool
        Whether part modules keep accumulating data on unfocused vessels.
    process_all_vessels : bool
        Track every vessel of a trackable type instead of only the
        active one.
    master_status_update_frequency : float
        Minimum simulation seconds between master status sweeps.
    min_time_between_data_poll : float
        Minimum simulation seconds between data poll bookkeeping updates.
    min_time_between_failure_poll : float
        Minimum simulation seconds between failure poll bookkeeping updates.
    global_reliability_modifier : float
        Multiplier handed to every part module when computing reliability.
    """

    polling_interval: float = 5.0
    process_inactive_vessels: bool = True
    process_all_vessels: bool = False
    master_status_update_frequency: float = 10.0
    min_time_between_data_poll: float = 0.5
    min_time_between_failure_poll: float = 60.0
    global_reliability_modifier: float = 1.0

    def __post_init__(self) -> None:
        for name in (
            "polling_interval",
            "master_status_update_frequency",
            "min_time_between_data_poll",
            "min_time_between_failure_poll",
        ):
            if getattr(self, name) < 0:
                raise TfConfigError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.global_reliability_modifier <= 0:
            raise TfConfigError(
                f"global_reliability_modifier must be positive, got {self.global_reliability_modifier}"
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> FlightSettings:
        """Create settings from ``TF_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        kwargs: dict[str, Any] = {}

        _ENV_FLOAT_MAP = {
            "TF_POLLING_INTERVAL": "polling_interval",
            "TF_MASTER_STATUS_UPDATE_FREQUENCY": "master_status_update_frequency",
            "TF_MIN_TIME_BETWEEN_DATA_POLL": "min_time_between_data_poll",
            "TF_MIN_TIME_BETWEEN_FAILURE_POLL": "min_time_between_failure_poll",
            "TF_GLOBAL_RELIABILITY_MODIFIER": "global_reliability_modifier",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                kwargs[field_name] = _parse_float(val, env_key)

        if "process_all_vessels" not in overrides:
            kwargs["process_all_vessels"] = _env_bool(env.get("TF_PROCESS_ALL_VESSELS"), False)
        if "process_inactive_vessels" not in overrides:
            kwargs["process_inactive_vessels"] = _env_bool(env.get("TF_PROCESS_INACTIVE_VESSELS"), True)

        kwargs.update(overrides)
        return cls(**kwargs)

    @classmethod
    def from_node(cls, node: ConfigNode) -> FlightSettings:
        """Read settings from a cfg node, keeping defaults for absent keys."""
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(cls):
            key = _NODE_KEYS[field.name]
            value = node.get_value(key)
            if value is None:
                continue
            if field.type in ("bool", bool):
                kwargs[field.name] = _env_bool(value, field.default)  # type: ignore[arg-type]
            else:
                kwargs[field.name] = _parse_float(value, key)
        return cls(**kwargs)

    def to_node(self, node: ConfigNode) -> None:
        for field in dataclasses.fields(self):
            node.set_value(_NODE_KEYS[field.name], getattr(self, field.name))

    @classmethod
    def load(cls, path: Path | str) -> FlightSettings:
        """Load settings from a cfg file; a missing file yields defaults."""
        target = Path(path)
        if not target.exists():
            return cls()
        root = ConfigNode.load(target)
        node = root.get_node(SETTINGS_NODE)
        return cls.from_node(node if node is not None else root)

    def save(self, path: Path | str) -> None:
        root = ConfigNode()
        self.to_node(root.add_node(SETTINGS_NODE))
        root.save(path)
