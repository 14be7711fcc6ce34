"""Core: configuration, domain models and the sync workflow (no terminal I/O)."""
