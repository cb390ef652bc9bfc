"""Pydantic models used by persistconf."""
