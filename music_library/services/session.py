import threading
from typing import Any, Dict, Optional


class SessionHolder:
    """
    현재 로그인한 사용자를 담는 프로세스 단위의 단일 슬롯입니다.

    데스크톱 앱이므로 동시에 하나의 세션만 존재합니다. 저장되는 값은 비밀번호 해시가
    제거된 사용자 정보(dict)이며, DB에는 저장되지 않습니다.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._user: Optional[Dict[str, Any]] = None

    def get(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            return dict(self._user) if self._user else None

    def set(self, user: Dict[str, Any]) -> None:
        with self._lock:
            self._user = dict(user)

    def clear(self) -> None:
        with self._lock:
            self._user = None

    @property
    def is_set(self) -> bool:
        with self._lock:
            return self._user is not None
