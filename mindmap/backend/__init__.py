"""HTTP API for the mind map tool."""

from .main import create_app, run

__all__ = ["create_app", "run"]
