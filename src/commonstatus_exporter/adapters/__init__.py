"""Adapters binding the core to HTTP, storage and logging."""
