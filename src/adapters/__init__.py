"""Adaptadores de I/O (HTTP, exportación JSON)."""
