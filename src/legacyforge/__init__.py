"""LegacyForge: rulebook compiler and board topology engine."""

__version__ = "0.1.0"
