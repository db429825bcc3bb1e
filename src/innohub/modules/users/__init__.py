"""
Users module - User accounts and roles.
"""

from innohub.modules.users.models import User, UserRole
from innohub.modules.users.repository import UserRepository

__all__ = ["User", "UserRole", "UserRepository"]
