# music_library/services/exceptions.py

class MusicLibraryError(Exception):
    """서비스 계층에서 발생하는 모든 예외의 기반 클래스"""
    pass


# --- Validation Exceptions ---
class ValidationError(MusicLibraryError):
    """필드 값이 유효하지 않거나 사용자 이름이 중복될 때"""

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


# --- Auth Exceptions ---
class AuthenticationError(MusicLibraryError):
    """자격 증명이 틀렸거나 로그인된 사용자가 없을 때"""
    pass


# --- General Exceptions ---
class NotFoundError(MusicLibraryError):
    """곡이 없거나 현재 사용자의 소유가 아닐 때 (두 경우를 구분하지 않음)"""
    pass


class DatabaseError(MusicLibraryError):
    """저장소가 아직 초기화/바인딩되지 않았거나 DB 작업이 실패했을 때"""
    pass


DATABASE_UNAVAILABLE = "Database connection not available"
