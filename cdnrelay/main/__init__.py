"""
Main module - Main/Composition Root Layer

This module wires the layers together and provides the entry points:
- ``cdnrelay.main.app``: the FastAPI relay server (health monitor,
  origin selection, status stream, asset storage and manifest)
- ``cdnrelay.main.server``: uvicorn launcher for the relay server
- ``cdnrelay.main.loader``: one-shot loader client session
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
]
