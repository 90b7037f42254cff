"""
HTTP API for the provider gateway.
"""

from .routes import router

__all__ = ["router"]
