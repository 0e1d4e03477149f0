import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from music_library.config import settings
from music_library.services.exceptions import DATABASE_UNAVAILABLE, DatabaseError

logger = logging.getLogger(__name__)

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite는 연결마다 외래 키 검사를 켜야 ON DELETE CASCADE가 동작합니다.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(database_url: str) -> Engine:
    """
    데이터베이스 URL로 SQLAlchemy 엔진을 생성합니다.

    SQLite 메모리 DB는 연결마다 별도의 DB가 생기므로 StaticPool로 하나의 연결을 공유합니다.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, **kwargs)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Database:
    """
    음악 라이브러리 저장소의 연결 핸들입니다.

    초기화 전(Unbound)에는 세션을 요청하면 즉시 DatabaseError가 발생하고,
    initialize() 이후(Bound)에는 프로세스 전체가 공유하는 단일 세션을 제공합니다.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.DATABASE_URL
        self.engine: Optional[Engine] = None
        self._session_factory = None
        self._session: Optional[Session] = None

    @property
    def is_initialized(self) -> bool:
        return self._session is not None

    def initialize(self) -> None:
        """엔진과 테이블을 생성합니다. 이미 초기화되어 있으면 아무 작업도 하지 않습니다."""
        if self.is_initialized:
            return

        # 모델이 Base.metadata에 등록되도록 임포트
        from music_library.database import models  # noqa: F401

        engine = make_engine(self.database_url)
        try:
            # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
            Base.metadata.create_all(bind=engine)
        except Exception:
            engine.dispose()
            raise
        self.engine = engine
        # autocommit=False, autoflush=False: 리포지토리가 명시적으로 commit을 호출합니다.
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self._session = self._session_factory()
        logger.info("Database connection initialized: %s", self.database_url)

    def session(self) -> Session:
        """
        공유 세션을 반환합니다.

        Raises:
            DatabaseError: initialize()가 아직 호출되지 않았을 때.
        """
        if self._session is None:
            raise DatabaseError(DATABASE_UNAVAILABLE)
        return self._session

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
        logger.info("Database connection closed")
