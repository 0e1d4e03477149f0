import functools
import logging
from typing import Any, Dict, Optional

from music_library.database import models
from music_library.repositories.interfaces import ISongRepository
from music_library.services.auth_service import AuthService, NOT_AUTHENTICATED
from music_library.services.exceptions import (
    DATABASE_UNAVAILABLE, DatabaseError, NotFoundError, ValidationError
)
from music_library.services.results import success, failure
from music_library.services.serializers import serialize_song
from music_library.services.validation import SONG_FIELDS, normalize_song_data, validate_song_data

logger = logging.getLogger(__name__)

SONG_NOT_FOUND = "Song not found"


def owner_scoped(error_message: str):
    """
    MusicService의 공개 메서드를 감싸는 데코레이터입니다.

    1. 로그인한 사용자가 없으면 저장소에 접근하지 않고 즉시 실패합니다.
    2. 저장소가 연결되지 않았으면 DatabaseError 메시지로 실패합니다.
    3. 감싼 메서드에는 (songs 리포지토리, 현재 user_id)가 앞쪽 인자로 주입됩니다.
    4. 서비스 예외는 그 메시지로, 그 외 예외는 error_message로 변환되어
       {"success": False, "error": ...} 형태로 반환됩니다.
    """
    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            current_user = self.auth_service.get_current_user()
            if not current_user:
                return failure(NOT_AUTHENTICATED)
            try:
                return method(self, self._songs(), current_user["id"], *args, **kwargs)
            except (ValidationError, NotFoundError, DatabaseError) as e:
                return failure(str(e))
            except Exception:
                logger.exception("MusicService.%s failed", method.__name__)
                return failure(error_message)
        return wrapper
    return decorator


class MusicService:
    """현재 로그인한 사용자의 곡에 대한 CRUD와 검색 기능을 제공합니다."""

    def __init__(self, auth_service: AuthService, song_repo: Optional[ISongRepository] = None):
        """
        MusicService를 초기화합니다.

        Args:
            auth_service: 모든 작업에서 현재 사용자를 확인하기 위한 인증 서비스.
            song_repo: 곡 데이터에 접근하기 위한 리포지토리. 나중에 bind_repository()로 연결할 수 있습니다.
        """
        self.auth_service = auth_service
        self.song_repo = song_repo

    @property
    def is_bound(self) -> bool:
        return self.song_repo is not None

    def bind_repository(self, song_repo: ISongRepository) -> None:
        self.song_repo = song_repo
        logger.info("MusicService: song repository bound")

    def unbind_repository(self) -> None:
        self.song_repo = None
        logger.info("MusicService: song repository unbound")

    def _songs(self) -> ISongRepository:
        if self.song_repo is None:
            raise DatabaseError(DATABASE_UNAVAILABLE)
        return self.song_repo

    @staticmethod
    def _find_owned(songs: ISongRepository, user_id: int, song_id: int) -> models.Song:
        # 곡이 없는 경우와 다른 사용자의 곡인 경우를 같은 오류로 처리
        song = songs.find_by_id_and_user_id(song_id, user_id)
        if not song:
            raise NotFoundError(SONG_NOT_FOUND)
        return song

    @owner_scoped("Error fetching songs")
    def get_all_songs(self, songs: ISongRepository, user_id: int) -> Dict[str, Any]:
        """현재 사용자의 모든 곡을 최신순으로 조회합니다."""
        return success(data=[serialize_song(song) for song in songs.list_by_user_id(user_id)])

    @owner_scoped("Error fetching song")
    def get_song_by_id(self, songs: ISongRepository, user_id: int, song_id: int) -> Dict[str, Any]:
        return success(data=serialize_song(self._find_owned(songs, user_id, song_id)))

    @owner_scoped("Error creating song")
    def create_song(self, songs: ISongRepository, user_id: int, song_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        새로운 곡을 현재 사용자의 라이브러리에 추가합니다.

        유효성 검사에 실패하면 모든 오류 메시지를 ", "로 이어 붙여 반환하며, 저장은 일어나지 않습니다.
        """
        if not isinstance(song_data, dict):
            raise ValidationError("Song data required")
        errors = validate_song_data(song_data)
        if errors:
            raise ValidationError(errors)

        new_song = models.Song(user_id=user_id, **normalize_song_data(song_data))
        created_song = songs.create(new_song)
        logger.info("Song %s created for user %s", created_song.id, user_id)
        return success(data=serialize_song(created_song))

    @owner_scoped("Error updating song")
    def update_song(self, songs: ISongRepository, user_id: int, song_id: int, updates: Dict[str, Any]) -> Dict[str, Any]:
        """
        곡의 일부 필드를 변경합니다.

        전달된 필드만 변경되며(id, user_id 등 곡 필드가 아닌 키는 무시), 기존 값과 합친 결과를
        다시 검증한 뒤 저장합니다.
        """
        song = self._find_owned(songs, user_id, song_id)
        changes = {field: value for field, value in (updates or {}).items() if field in SONG_FIELDS}

        merged = {field: getattr(song, field) for field in SONG_FIELDS}
        merged.update(changes)
        errors = validate_song_data(merged)
        if errors:
            raise ValidationError(errors)

        updated_song = songs.update(song, normalize_song_data(changes))
        logger.info("Song %s updated (%s)", song_id, ", ".join(sorted(changes)) or "no changes")
        return success(data=serialize_song(updated_song))

    @owner_scoped("Error deleting song")
    def delete_song(self, songs: ISongRepository, user_id: int, song_id: int) -> Dict[str, Any]:
        song = self._find_owned(songs, user_id, song_id)
        songs.delete(song)
        logger.info("Song %s deleted", song_id)
        return success()

    @owner_scoped("Error searching songs")
    def search_songs(self, songs: ISongRepository, user_id: int, query: str) -> Dict[str, Any]:
        """
        제목, 앨범, 아티스트에서 대소문자를 구분하지 않고 부분 문자열을 검색합니다.

        검색어가 비어 있거나 공백뿐이면 get_all_songs()와 같은 결과를 반환합니다.
        """
        term = query.strip() if isinstance(query, str) else ""
        if not term:
            found = songs.list_by_user_id(user_id)
        else:
            found = songs.search_by_user_id(user_id, term)
        return success(data=[serialize_song(song) for song in found])
