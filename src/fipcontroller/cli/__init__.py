# src/fipcontroller/cli/__init__.py
"""
fipcontroller CLI Package

Exposes the top-level Typer `app` used by the console entrypoint.
"""

from .main import app

__all__ = ["app"]
