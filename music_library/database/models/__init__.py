from .user import User
from .song import Song

__all__ = ["User", "Song"]
