import logging
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)

UNKNOWN_CHANNEL = "Unknown channel"


class IpcRouter:
    """
    'auth:login', 'music:getAllSongs' 같은 채널 이름을 핸들러 함수에 연결합니다.

    핸들러는 등록 시 지정한 fallback 값을 가지며, 핸들러에서 예외가 발생하면
    로그를 남기고 fallback을 반환합니다. 따라서 invoke()는 예외를 밖으로 던지지 않습니다.
    """

    def __init__(self):
        self._routes: Dict[str, Callable[..., Any]] = {}
        self._fallbacks: Dict[str, Callable[[], Any]] = {}

    def handle(self, channel: str, fallback: Callable[[], Any]):
        """채널 핸들러를 등록하는 데코레이터를 반환합니다."""
        def decorator(handler):
            self._routes[channel] = handler
            self._fallbacks[channel] = fallback
            return handler
        return decorator

    @property
    def channels(self):
        return sorted(self._routes)

    def invoke(self, channel: str, *args: Any) -> Any:
        handler = self._routes.get(channel)
        if handler is None:
            logger.warning("IPC call to unknown channel '%s'", channel)
            return {"success": False, "error": UNKNOWN_CHANNEL}
        try:
            return handler(*args)
        except Exception:
            logger.exception("IPC %s error", channel)
            return self._fallbacks[channel]()
