"""Core library for dsc: configuration, I/O, HTTP and session management."""
