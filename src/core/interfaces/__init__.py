"""Protocols the core talks to (progress observers)."""
