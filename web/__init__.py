"""HTTP front for the tic-tac-toe session (JSON state projection)."""

from .app import create_app

__all__ = ["create_app"]
