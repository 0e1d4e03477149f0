from .sqlalchemy_user_repository import SqlalchemyUserRepository
from .sqlalchemy_song_repository import SqlalchemySongRepository

__all__ = ["SqlalchemyUserRepository", "SqlalchemySongRepository"]
