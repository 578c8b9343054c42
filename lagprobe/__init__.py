"""Probe a database instance for replication lag or a custom metric."""
