"""Tick-driven grid maze simulation engine."""

__version__ = "0.1.0"
