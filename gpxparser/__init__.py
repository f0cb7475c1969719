"""Typed parsing of GPS Exchange (GPX) documents."""

__version__ = "1.0"
