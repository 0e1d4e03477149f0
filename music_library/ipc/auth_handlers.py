from music_library.ipc.router import IpcRouter
from music_library.services.auth_service import AuthService, CREDENTIALS_REQUIRED
from music_library.services.results import success, failure


def _is_text(value) -> bool:
    return isinstance(value, str) and bool(value)


def register_auth_handlers(router: IpcRouter, auth_service: AuthService) -> None:
    """auth:* 채널을 등록합니다. 자격 증명 형태는 서비스에 넘기기 전에 여기서 검사합니다."""

    @router.handle("auth:login", fallback=lambda: failure("An error occurred during login"))
    def login(credentials=None):
        if (
            not isinstance(credentials, dict)
            or not _is_text(credentials.get("username"))
            or not _is_text(credentials.get("password"))
        ):
            return failure(CREDENTIALS_REQUIRED)
        return auth_service.login(credentials["username"], credentials["password"])

    @router.handle("auth:logout", fallback=lambda: failure("An error occurred during logout"))
    def logout():
        auth_service.logout()
        return success()

    @router.handle("auth:getCurrentUser", fallback=lambda: None)
    def get_current_user():
        return auth_service.get_current_user()

    @router.handle("auth:isAuthenticated", fallback=lambda: False)
    def is_authenticated():
        return auth_service.is_authenticated()

    @router.handle("auth:changePassword", fallback=lambda: failure("An error occurred while changing the password"))
    def change_password(passwords=None):
        if (
            not isinstance(passwords, dict)
            or not _is_text(passwords.get("current_password"))
            or not _is_text(passwords.get("new_password"))
        ):
            return failure("Current and new password are required")
        return auth_service.change_password(passwords["current_password"], passwords["new_password"])
