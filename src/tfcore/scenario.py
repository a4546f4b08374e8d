"""Scenario persistence boundary.

A :class:`FlightScenario` is created once per session.  It owns the flight
data store and the packed-string cache, hydrates them when a save is loaded
and flushes them at save points.  Nothing here runs during a tick.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from tfcore._constants import PACKED_STRING_KEY, PART_NODE
from tfcore.config import FlightSettings
from tfcore.config_node import ConfigNode
from tfcore.state.store import FlightDataStore

_logger = logging.getLogger(__name__)


class FlightScenario:
    """Owns settings, the flight data store and its packed cache.

    Parameters
    ----------
    settings : FlightSettings or None
        Initial settings.  Defaults to :class:`FlightSettings` defaults.
    settings_path : Path or str or None
        When set, settings are re-read from this cfg file on every load and
        written back on every save.
    packed_strings : iterable of str or None
        Packed cache carried over from a previous session.
    """

    def __init__(
        self,
        *,
        settings: FlightSettings | None = None,
        settings_path: Path | str | None = None,
        packed_strings: Iterable[str] | None = None,
    ) -> None:
        self.settings = settings or FlightSettings()
        self.settings_path = Path(settings_path) if settings_path is not None else None
        self.store = FlightDataStore()
        self.packed_strings: list[str] = list(packed_strings or [])
        self.is_ready = False

    def on_awake(self) -> None:
        """Hydrate the store from the packed cache when it is still empty."""
        self._reload_settings()
        if len(self.store) == 0 and self.packed_strings:
            loaded = self.store.load_packed(self.packed_strings)
            _logger.debug("Loaded %d part(s) from packed cache", loaded)

    def start(self) -> None:
        _logger.debug("Scenario start")
        self.is_ready = True

    def on_load(self, node: ConfigNode) -> None:
        """Hydrate from a saved scenario node.

        Part nodes are authoritative and regenerate the packed cache.  A node
        with no part nodes falls back to its packed values.
        """
        self._reload_settings()
        if node.has_node(PART_NODE):
            self.packed_strings = self.store.load(node)
            return
        packed = node.get_values(PACKED_STRING_KEY)
        if packed:
            self.store.load_packed(packed)
            self.packed_strings = self.store.packed_strings()

    def on_save(self, node: ConfigNode) -> None:
        """Write part nodes and a freshly regenerated packed cache."""
        if self.settings_path is not None:
            self.settings.save(self.settings_path)
        self.store.save(node)
        self.packed_strings = self.store.packed_strings()
        for text in self.packed_strings:
            node.add_value(PACKED_STRING_KEY, text)

    def load_file(self, path: Path | str) -> None:
        """Load a checkpoint written by :meth:`save_file`; a missing file is a no-op."""
        target = Path(path)
        if not target.exists():
            _logger.debug("No checkpoint at %s", target)
            return
        self.on_load(ConfigNode.load(target))

    def save_file(self, path: Path | str) -> None:
        root = ConfigNode()
        self.on_save(root)
        root.save(path)
        _logger.debug("Saved flight data for %d part(s) to %s", len(self.store), path)

    def _reload_settings(self) -> None:
        if self.settings_path is not None:
            self.settings = FlightSettings.load(self.settings_path)
