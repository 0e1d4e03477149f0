from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any
from music_library.database import models

class ISongRepository(ABC):
    """
    곡 데이터에 접근하는 리포지토리입니다.
    조회 메서드는 모두 user_id를 함께 받아, 해당 사용자가 소유한 곡만 반환합니다.
    """

    @abstractmethod
    def create(self, song_model: models.Song) -> models.Song:
        """새로운 곡을 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def find_by_id_and_user_id(self, song_id: int, user_id: int) -> Optional[models.Song]:
        """
        사용자가 소유한 곡을 ID로 조회합니다.

        곡이 없거나 다른 사용자의 곡이면 None을 반환합니다.
        """
        pass

    @abstractmethod
    def list_by_user_id(self, user_id: int) -> List[models.Song]:
        """사용자의 모든 곡을 최신순(created_at 내림차순)으로 조회합니다."""
        pass

    @abstractmethod
    def search_by_user_id(self, user_id: int, query: str) -> List[models.Song]:
        """
        제목, 앨범, 아티스트 중 하나에 query가 포함된 곡을 조회합니다.

        Args:
            user_id: 곡을 소유한 사용자의 ID.
            query: 대소문자를 구분하지 않는 부분 문자열.

        Returns:
            list_by_user_id와 같은 순서로 정렬된 곡 목록.
        """
        pass

    @abstractmethod
    def update(self, song: models.Song, changes: Dict[str, Any]) -> models.Song:
        """곡의 필드를 변경하고 저장합니다."""
        pass

    @abstractmethod
    def delete(self, song: models.Song) -> bool:
        """특정 곡을 데이터베이스에서 삭제합니다."""
        pass
