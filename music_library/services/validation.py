import math
from numbers import Real
from typing import Any, Dict, List

TEXT_MAX_LENGTH = 255
URL_MAX_LENGTH = 500

SONG_FIELDS = ("title", "album", "artist", "duration", "cover_url", "preview_url")
URL_FIELDS = ("cover_url", "preview_url")

# (필드 이름, 오류 메시지에 쓰이는 라벨)
_REQUIRED_TEXT_FIELDS = (("title", "Title"), ("album", "Album"), ("artist", "Artist"))
_OPTIONAL_URL_FIELDS = (("cover_url", "Cover URL"), ("preview_url", "Preview URL"))


def validate_song_data(data: Dict[str, Any]) -> List[str]:
    """
    곡 데이터를 검사하고 발견된 모든 오류 메시지를 반환합니다. (오류가 없으면 빈 리스트)

    - title, album, artist: 공백이 아닌 문자열, 최대 255자
    - duration: 0보다 큰 실수 (0 이하, bool, NaN, 무한대는 허용하지 않음)
    - cover_url, preview_url: 선택 사항, 최대 500자
    """
    errors = []

    for field, label in _REQUIRED_TEXT_FIELDS:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{label} is required")
        elif len(value) > TEXT_MAX_LENGTH:
            errors.append(f"{label} cannot exceed {TEXT_MAX_LENGTH} characters")

    duration = data.get("duration")
    if (
        isinstance(duration, bool)
        or not isinstance(duration, Real)
        or not math.isfinite(duration)
        or duration <= 0
    ):
        errors.append("Duration must be a positive number")

    for field, label in _OPTIONAL_URL_FIELDS:
        value = data.get(field)
        if value is None:
            continue
        if not isinstance(value, str):
            errors.append(f"{label} must be a string")
        elif len(value) > URL_MAX_LENGTH:
            errors.append(f"{label} cannot exceed {URL_MAX_LENGTH} characters")

    return errors


def normalize_song_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    검증을 통과한 곡 데이터를 저장 형태로 정리합니다.

    문자열은 앞뒤 공백을 제거하고, 비어 있는 URL은 None으로 바꿉니다.
    """
    normalized = {}
    for field in SONG_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if field == "duration":
            normalized[field] = float(value)
        elif isinstance(value, str):
            value = value.strip()
            if not value and field in URL_FIELDS:
                value = None
            normalized[field] = value
        else:
            normalized[field] = value
    return normalized
