"""Derive TypeScript declarations, unions and import-aware export files from type descriptions."""

__version__ = "0.1.0"