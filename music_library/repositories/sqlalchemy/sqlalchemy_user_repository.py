from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from music_library.database import models
from music_library.repositories.interfaces import IUserRepository

class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            # 공유 세션이므로 실패한 트랜잭션을 남겨두지 않음
            self.db.rollback()
            raise

    def create(self, user_model: models.User) -> models.User:
        self.db.add(user_model)
        self._commit()
        self.db.refresh(user_model)
        return user_model

    def find_by_id(self, user_id: int) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.id == user_id).first()

    def find_by_username(self, username: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.username == username).first()

    def update_password_hash(self, user: models.User, password_hash: str) -> models.User:
        user.password_hash = password_hash
        self._commit()
        self.db.refresh(user)
        return user
