# music_library/app.py
from wsgiref.simple_server import make_server
import json
import logging
import re
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from music_library.config import settings
from music_library.database.database import Database
from music_library.database.db_init import seed_demo_data
from music_library.ipc import IpcRouter, create_router
from music_library.repositories.sqlalchemy import SqlalchemyUserRepository, SqlalchemySongRepository
from music_library.services.auth_service import AuthService
from music_library.services.exceptions import MusicLibraryError
from music_library.services.music_service import MusicService
from music_library.services.session import SessionHolder

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
## 애플리케이션 구성 (의존성 주입)
# --------------------------------------------------------------------------

class MusicLibrary:
    """
    저장소 핸들, 서비스, IPC 라우터를 묶은 애플리케이션 객체입니다.

    서비스와 라우터는 DB가 준비되기 전에 생성되며, start()에서 DB를 초기화한 뒤
    리포지토리를 서비스에 연결합니다. DB 초기화에 실패해도 프로세스는 계속 동작하고,
    이후의 서비스 호출은 DatabaseError 메시지로 실패합니다.
    """

    def __init__(self, database: Database, seed_demo: bool = False):
        self.database = database
        self.seed_demo = seed_demo
        self.session = SessionHolder()
        self.auth_service = AuthService(session=self.session)
        self.music_service = MusicService(self.auth_service)
        self.router: IpcRouter = create_router(self.auth_service, self.music_service)

    def start(self) -> bool:
        """DB를 초기화하고 서비스에 리포지토리를 연결합니다. 성공 여부를 반환합니다."""
        try:
            self.database.initialize()
        except SQLAlchemyError:
            logger.exception("Error during database initialization")
            logger.warning("Continuing without database - some features may not work")
            return False

        db_session = self.database.session()
        self.auth_service.bind_repository(SqlalchemyUserRepository(db_session))
        self.music_service.bind_repository(SqlalchemySongRepository(db_session))

        if self.seed_demo:
            try:
                seed_demo_data(self.auth_service, self.music_service)
            except MusicLibraryError as e:
                logger.warning("Error creating demo data: %s", e)
        return True

    def shutdown(self) -> None:
        self.auth_service.logout()
        self.auth_service.unbind_repository()
        self.music_service.unbind_repository()
        self.database.close()


def create_app(database_url: Optional[str] = None, seed_demo: Optional[bool] = None) -> MusicLibrary:
    if seed_demo is None:
        seed_demo = settings.SEED_DEMO_DATA
    return MusicLibrary(Database(database_url), seed_demo=seed_demo)

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        return json.loads(environ["wsgi.input"].read(content_length)) if content_length > 0 else {}
    except (ValueError, json.JSONDecodeError):
        raise ValueError("Invalid or missing JSON body.")


def get_call_args(environ):
    data = get_request_data(environ)
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object.")
    args = data.get("args", [])
    if not isinstance(args, list):
        raise ValueError("'args' must be a JSON array.")
    return args

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (라우팅)
# --------------------------------------------------------------------------

def make_wsgi_app(library: MusicLibrary):
    """로컬 IPC 호출(POST /ipc/<channel>)을 라우터로 전달하는 WSGI 애플리케이션을 생성합니다."""

    def ipc_handler(environ, channel):
        result = library.router.invoke(channel, *get_call_args(environ))
        return '200 OK', json.dumps(result)

    def list_channels_handler(environ, *args):
        return '200 OK', json.dumps({"channels": library.router.channels})

    routes = [
        ('GET', r'^/ipc$', list_channels_handler),
        ('POST', r'^/ipc/([a-zA-Z]+:[a-zA-Z]+)$', ipc_handler),
    ]

    def application(environ, start_response):
        path = environ.get("PATH_INFO", "")
        method = environ.get("REQUEST_METHOD", "")

        handler, path_args = None, []
        for route_method, pattern, route_handler in routes:
            if method == route_method and (match := re.match(pattern, path)):
                handler, path_args = route_handler, match.groups()
                break

        try:
            if handler:
                status, response_body = handler(environ, *path_args)
            else:
                status, response_body = '404 Not Found', json.dumps({'error': 'Not Found'})
        except ValueError as e:
            status, response_body = '400 Bad Request', json.dumps({"error": str(e)})

        start_response(status, [("Content-Type", "application/json")])
        return [response_body.encode("utf-8")]

    return application

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

def main():
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    library = create_app()
    library.start()
    try:
        with make_server(settings.HOST, settings.PORT, make_wsgi_app(library)) as httpd:
            logger.info("Serving music library IPC on %s:%s...", settings.HOST, settings.PORT)
            httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down.")
    except OSError:
        logger.exception("Error starting server")
    finally:
        library.shutdown()


if __name__ == "__main__":
    main()
