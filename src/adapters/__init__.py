"""Adapters: HTTP and filesystem I/O used by the core."""
