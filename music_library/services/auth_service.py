import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from music_library.database import models
from music_library.repositories.interfaces import IUserRepository
from music_library.services.exceptions import (
    DATABASE_UNAVAILABLE, AuthenticationError, DatabaseError, ValidationError
)
from music_library.services.results import success, failure
from music_library.services.security import PASSWORD_TOO_LONG, hash_password, is_password_too_long, verify_password
from music_library.services.serializers import serialize_user
from music_library.services.session import SessionHolder

logger = logging.getLogger(__name__)

CREDENTIALS_REQUIRED = "Username and password are required"
INVALID_CREDENTIALS = "Invalid username or password"
NOT_AUTHENTICATED = "User not authenticated"


class AuthService:
    """사용자 생성, 로그인/로그아웃, 현재 세션 조회 등 인증 서비스를 제공합니다."""

    def __init__(self, user_repo: Optional[IUserRepository] = None, session: Optional[SessionHolder] = None):
        """
        AuthService를 초기화합니다.

        저장소가 준비되기 전에 생성할 수 있도록 user_repo는 생략할 수 있으며,
        이후 bind_repository()로 연결합니다. 그 전에 호출된 작업은 DatabaseError로 실패합니다.

        Args:
            user_repo: 사용자 데이터에 접근하기 위한 리포지토리.
            session: 현재 로그인한 사용자를 담는 세션 슬롯.
        """
        self.user_repo = user_repo
        self.session = session or SessionHolder()
        self._timing_hash = None

    @property
    def is_bound(self) -> bool:
        return self.user_repo is not None

    def bind_repository(self, user_repo: IUserRepository) -> None:
        """저장소를 (다시) 연결합니다. 현재 세션은 유지됩니다."""
        self.user_repo = user_repo
        logger.info("AuthService: user repository bound")

    def unbind_repository(self) -> None:
        """저장소 연결을 해제합니다. 이후 호출은 DatabaseError 메시지로 실패합니다."""
        self.user_repo = None
        logger.info("AuthService: user repository unbound")

    def _users(self) -> IUserRepository:
        if self.user_repo is None:
            raise DatabaseError(DATABASE_UNAVAILABLE)
        return self.user_repo

    def _placeholder_hash(self) -> str:
        # 존재하지 않는 사용자도 bcrypt 비교를 거치도록 하여 응답 시간 차이를 줄임
        if self._timing_hash is None:
            self._timing_hash = hash_password("placeholder-password")
        return self._timing_hash

    def create_user(self, username: str, password: str) -> Dict[str, Any]:
        """
        새로운 사용자를 생성합니다. 비밀번호는 bcrypt로 해시하여 저장합니다.

        Returns:
            생성된 사용자의 id, username, 생성/수정 시각 (비밀번호 해시 제외).

        Raises:
            ValidationError: 입력이 비어 있거나 비밀번호가 너무 길거나 동일한 이름의 사용자가 이미 존재할 때.
            DatabaseError: 저장소가 연결되지 않았거나 저장에 실패했을 때.
        """
        if not isinstance(username, str) or not username.strip() or not isinstance(password, str) or not password:
            raise ValidationError(CREDENTIALS_REQUIRED)
        if is_password_too_long(password):
            raise ValidationError(PASSWORD_TOO_LONG)

        users = self._users()
        duplicate = f"User with username '{username}' already exists."
        try:
            if users.find_by_username(username):
                raise ValidationError(duplicate)
            new_user = models.User(username=username, password_hash=hash_password(password))
            created_user = users.create(new_user)
        except IntegrityError as e:
            # find_by_username 이후에 같은 이름이 저장된 경우 (unique 제약 위반)
            raise ValidationError(duplicate) from e
        except SQLAlchemyError as e:
            logger.exception("Failed to create user '%s'", username)
            raise DatabaseError("Failed to create user") from e

        logger.info("User created: %s", created_user.username)
        return serialize_user(created_user)

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """
        자격 증명을 검증하고, 성공하면 세션에 사용자를 설정합니다.

        존재하지 않는 사용자와 틀린 비밀번호는 같은 메시지로 실패하여
        사용자 이름이 존재하는지 추측할 수 없도록 합니다.

        Returns:
            {"success": True, "user": {...}} 또는 {"success": False, "error": "..."}
        """
        logger.debug("Login attempt for '%s' (password provided: %s)", username, bool(password))
        if not username or not password:
            return failure(CREDENTIALS_REQUIRED)

        try:
            user = self._users().find_by_username(username)
            stored_hash = user.password_hash if user else self._placeholder_hash()
            if not verify_password(password, stored_hash) or not user:
                raise AuthenticationError(INVALID_CREDENTIALS)
        except (AuthenticationError, DatabaseError) as e:
            logger.info("Login failed for '%s': %s", username, e)
            return failure(str(e))
        except Exception:
            logger.exception("Unexpected error during login")
            return failure("An error occurred during login")

        user_data = serialize_user(user)
        self.session.set(user_data)
        logger.info("User logged in: %s", user.username)
        return success(user=user_data)

    def logout(self) -> None:
        """현재 세션을 비웁니다. 로그인하지 않은 상태에서 호출해도 안전합니다."""
        current = self.session.get()
        self.session.clear()
        if current:
            logger.info("User logged out: %s", current["username"])

    def get_current_user(self) -> Optional[Dict[str, Any]]:
        return self.session.get()

    def is_authenticated(self) -> bool:
        return self.session.is_set

    def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        """
        로그인한 사용자의 비밀번호를 변경합니다.

        현재 비밀번호를 확인한 뒤 새 비밀번호를 한 번만 해시하여 저장합니다.
        """
        current = self.session.get()
        if not current:
            return failure(NOT_AUTHENTICATED)
        if not current_password or not new_password:
            return failure("Current and new password are required")
        if is_password_too_long(new_password):
            return failure(PASSWORD_TOO_LONG)

        try:
            users = self._users()
            user = users.find_by_id(current["id"])
            if not user or not verify_password(current_password, user.password_hash):
                raise AuthenticationError("Current password is incorrect")
            updated_user = users.update_password_hash(user, hash_password(new_password))
        except (AuthenticationError, DatabaseError) as e:
            return failure(str(e))
        except Exception:
            logger.exception("Unexpected error while changing password")
            return failure("An error occurred while changing the password")

        self.session.set(serialize_user(updated_user))
        logger.info("Password changed for user: %s", updated_user.username)
        return success()
