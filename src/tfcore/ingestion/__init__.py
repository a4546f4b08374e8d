"""Ingestion layer.

Adapters that read live values from part modules and turn them into
normalized records for the flight data store and the master status table.
"""

__all__: list[str] = []
