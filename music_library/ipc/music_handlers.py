from typing import Any, Dict, Optional

from music_library.ipc.router import IpcRouter
from music_library.services.music_service import MusicService
from music_library.services.results import failure

SONG_ID_REQUIRED = "Song ID required"

# 기존 데스크톱 렌더러가 보내는 필드 이름
LEGACY_FIELD_NAMES = {
    "titulo": "title",
    "artista": "artist",
    "duracion": "duration",
    "portadaAlbum": "cover_url",
    "previewMusica": "preview_url",
}


def coerce_song_id(value: Any) -> Optional[int]:
    """양의 정수 또는 숫자로만 된 문자열을 곡 ID로 변환합니다. 그 외에는 None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        song_id = int(value.strip())
        return song_id if song_id > 0 else None
    return None


def translate_song_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """레거시 필드 이름을 변환합니다. 같은 필드가 두 이름으로 오면 새 이름의 값을 사용합니다."""
    translated = {LEGACY_FIELD_NAMES[key]: value for key, value in data.items() if key in LEGACY_FIELD_NAMES}
    translated.update({key: value for key, value in data.items() if key not in LEGACY_FIELD_NAMES})
    return translated


def register_music_handlers(router: IpcRouter, music_service: MusicService) -> None:
    """music:* 채널을 등록합니다."""

    @router.handle("music:getAllSongs", fallback=lambda: failure("Error fetching songs"))
    def get_all_songs():
        return music_service.get_all_songs()

    @router.handle("music:getSongById", fallback=lambda: failure("Error fetching song"))
    def get_song_by_id(song_id=None):
        song_id = coerce_song_id(song_id)
        if song_id is None:
            return failure(SONG_ID_REQUIRED)
        return music_service.get_song_by_id(song_id)

    @router.handle("music:createSong", fallback=lambda: failure("Error creating song"))
    def create_song(song_data=None):
        if not isinstance(song_data, dict) or not song_data:
            return failure("Song data required")
        return music_service.create_song(translate_song_fields(song_data))

    @router.handle("music:updateSong", fallback=lambda: failure("Error updating song"))
    def update_song(song_id=None, updates=None):
        song_id = coerce_song_id(song_id)
        if song_id is None:
            return failure(SONG_ID_REQUIRED)
        if not isinstance(updates, dict) or not updates:
            return failure("Update data required")
        return music_service.update_song(song_id, translate_song_fields(updates))

    @router.handle("music:deleteSong", fallback=lambda: failure("Error deleting song"))
    def delete_song(song_id=None):
        song_id = coerce_song_id(song_id)
        if song_id is None:
            return failure(SONG_ID_REQUIRED)
        return music_service.delete_song(song_id)

    @router.handle("music:searchSongs", fallback=lambda: failure("Error searching songs"))
    def search_songs(query=None):
        return music_service.search_songs(query if isinstance(query, str) else "")
