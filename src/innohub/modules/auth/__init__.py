"""Authentication module."""

from innohub.modules.auth.router import router
from innohub.modules.auth.schemas import LoginRequest, LoginResponse, RegisterRequest

__all__ = ["router", "LoginRequest", "LoginResponse", "RegisterRequest"]
