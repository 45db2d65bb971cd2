from models.users import User
from models.sessions import UserSession

__all__ = ["User", "UserSession"]
