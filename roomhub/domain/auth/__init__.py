"""Auth domain - Local credentials, password reset and OAuth sign-in"""

from .router import router

__all__ = ["router"]
