from abc import ABC, abstractmethod
from typing import Optional
from music_library.database import models

class IUserRepository(ABC):
    @abstractmethod
    def create(self, user_model: models.User) -> models.User:
        """새로운 사용자를 데이터베이스에 생성합니다. 사용자 이름이 중복되면 IntegrityError가 발생합니다."""
        pass

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[models.User]:
        """고유 ID로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[models.User]:
        """사용자 이름으로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def update_password_hash(self, user: models.User, password_hash: str) -> models.User:
        """이미 해시된 비밀번호로 사용자의 비밀번호를 교체합니다."""
        pass
