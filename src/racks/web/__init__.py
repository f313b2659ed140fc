"""FastAPI REST API for rack layout planning.

This module exposes the layout core to a browser editor: configuration
import and validation, placement checks, moves, distances and exports.

Usage:
    uvicorn racks.web:app --reload
"""

from racks.web.app import app, create_app

__all__ = ["app", "create_app"]
