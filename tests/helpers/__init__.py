"""Test helper modules for the dsc test suite.

- cache_utils: cache reset utilities for test isolation
- timeouts: configurable waits for lock and thread coordination
- session: builders for tokens and session records
"""
from __future__ import annotations
