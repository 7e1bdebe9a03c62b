"""Service mode exposing the component registry over HTTP."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
