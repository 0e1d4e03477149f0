# tests/conftest.py
import pytest

from music_library.app import MusicLibrary
from music_library.database.database import Database
from music_library.repositories.sqlalchemy import SqlalchemyUserRepository, SqlalchemySongRepository

IN_MEMORY_URL = "sqlite://"


@pytest.fixture
def database() -> Database:
    """테스트마다 새로 초기화되는 메모리 SQLite 데이터베이스."""
    db = Database(IN_MEMORY_URL)
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def db_session(database: Database):
    return database.session()


@pytest.fixture
def user_repo(db_session) -> SqlalchemyUserRepository:
    return SqlalchemyUserRepository(db_session)


@pytest.fixture
def song_repo(db_session) -> SqlalchemySongRepository:
    return SqlalchemySongRepository(db_session)


@pytest.fixture
def library() -> MusicLibrary:
    """DB까지 연결된(start 완료) 애플리케이션 객체. 데모 데이터는 생성하지 않습니다."""
    app = MusicLibrary(Database(IN_MEMORY_URL), seed_demo=False)
    app.start()
    yield app
    app.shutdown()
