"""State layer.

Owns the durable flight data store and the transient views derived from
live telemetry: the known-vessel cache and the master status table.
"""
