"""Deterministic evidence packs for incidents, clinical notes and contract review."""

__version__ = "0.1.0"