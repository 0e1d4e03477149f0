from datetime import datetime
from typing import Any, Dict, Optional

from music_library.database import models


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_user(user: models.User) -> Dict[str, Any]:
    """비밀번호 해시를 제외한 사용자 정보만 반환합니다."""
    return {
        "id": user.id,
        "username": user.username,
        "created_at": _isoformat(user.created_at),
        "updated_at": _isoformat(user.updated_at),
    }


def serialize_song(song: models.Song) -> Dict[str, Any]:
    return {
        "id": song.id,
        "title": song.title,
        "album": song.album,
        "artist": song.artist,
        "duration": song.duration,
        "cover_url": song.cover_url,
        "preview_url": song.preview_url,
        "user_id": song.user_id,
        "created_at": _isoformat(song.created_at),
        "updated_at": _isoformat(song.updated_at),
    }
