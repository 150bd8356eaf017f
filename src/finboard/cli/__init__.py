"""Command line interface for Finboard."""

from .main import app, main

__all__ = ["app", "main"]
