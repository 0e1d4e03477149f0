from .user import IUserRepository
from .song import ISongRepository

__all__ = ["IUserRepository", "ISongRepository"]
