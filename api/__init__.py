"""
Splitwise API package.

Provides the FastAPI application for the account and session service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
