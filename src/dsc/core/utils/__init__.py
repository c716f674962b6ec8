"""Shared utilities (I/O, paths, password manager)."""
