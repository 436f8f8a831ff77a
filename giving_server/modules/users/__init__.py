"""User domain exports"""

from .models import UserCreateInput
from .service import UserService

__all__ = ["UserCreateInput", "UserService"]
