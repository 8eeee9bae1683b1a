"""Rooms domain - Room catalog"""

from .router import router

__all__ = ["router"]
