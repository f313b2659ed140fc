"""Rack layout planning: place equipment in server racks and export the result."""

__version__ = "1.0.0"
