# tests/ipc/test_ipc_handlers.py
import pytest

from music_library.app import MusicLibrary
from music_library.database.database import Database
from music_library.database.db_init import seed_demo_data, SAMPLE_SONGS
from music_library.ipc.router import UNKNOWN_CHANNEL
from music_library.services.auth_service import CREDENTIALS_REQUIRED, INVALID_CREDENTIALS, NOT_AUTHENTICATED
from music_library.services.exceptions import DATABASE_UNAVAILABLE
from music_library.services.music_service import SONG_NOT_FOUND

IMAGINE = {"title": "Imagine", "album": "Imagine", "artist": "John Lennon", "duration": 183}

# ===================================================================
#  Fixture 및 헬퍼
# ===================================================================

@pytest.fixture
def call(library: MusicLibrary):
    """채널 이름과 인자로 IPC 라우터를 호출하는 함수."""
    return library.router.invoke

@pytest.fixture
def anton(library: MusicLibrary, call):
    library.auth_service.create_user("anton", "admin")
    assert call("auth:login", {"username": "anton", "password": "admin"})["success"] is True

def login_as(call, username, password="secret"):
    call("auth:logout")
    return call("auth:login", {"username": username, "password": password})

# ===================================================================
#  전체 시나리오
# ===================================================================
class TestScenario:
    def test_login_create_search_delete(self, library: MusicLibrary, call):
        """사용자 생성 → 로그인 → 곡 생성 → 검색 → 삭제 흐름을 테스트합니다."""
        library.auth_service.create_user("anton", "admin")

        login = call("auth:login", {"username": "anton", "password": "admin"})
        assert login["success"] is True
        assert call("auth:isAuthenticated") is True

        created = call("music:createSong", {"titulo": "Imagine", "album": "Imagine", "artista": "John Lennon", "duracion": 183})
        assert created["success"] is True

        songs = call("music:getAllSongs")["data"]
        assert len(songs) == 1
        assert songs[0]["title"] == "Imagine"

        found = call("music:searchSongs", "lennon")["data"]
        assert [song["id"] for song in found] == [created["data"]["id"]]

        assert call("music:deleteSong", created["data"]["id"]) == {"success": True}
        assert call("music:getAllSongs") == {"success": True, "data": []}

    def test_create_then_get_round_trip(self, call, anton):
        dto = dict(IMAGINE, cover_url="https://example.com/imagine.jpg", preview_url="https://example.com/imagine.mp3")

        created = call("music:createSong", dto)["data"]
        fetched = call("music:getSongById", created["id"])["data"]

        assert {field: fetched[field] for field in dto} == dto
        assert fetched["user_id"] == call("auth:getCurrentUser")["id"]
        assert fetched["created_at"] is not None and fetched["updated_at"] is not None

# ===================================================================
#  인증 관련 속성
# ===================================================================
class TestAuthProperties:
    def test_enumeration_resistance(self, library: MusicLibrary, call):
        library.auth_service.create_user("anton", "admin")

        wrong_password = call("auth:login", {"username": "anton", "password": "nope"})
        unknown_user = call("auth:login", {"username": "ghost", "password": "admin"})

        assert wrong_password == unknown_user == {"success": False, "error": INVALID_CREDENTIALS}

    def test_logout_blocks_music_calls(self, call, anton):
        assert call("auth:logout") == {"success": True}

        assert call("auth:getCurrentUser") is None
        assert call("auth:isAuthenticated") is False
        assert call("music:getAllSongs") == {"success": False, "error": NOT_AUTHENTICATED}
        assert call("music:createSong", IMAGINE) == {"success": False, "error": NOT_AUTHENTICATED}

    def test_current_user_has_no_password_hash(self, call, anton):
        user = call("auth:getCurrentUser")

        assert user["username"] == "anton"
        assert set(user) == {"id", "username", "created_at", "updated_at"}

    def test_change_password(self, call, anton):
        result = call("auth:changePassword", {"current_password": "admin", "new_password": "s3cret"})
        assert result == {"success": True}

        assert login_as(call, "anton", "admin")["success"] is False
        assert login_as(call, "anton", "s3cret")["success"] is True

# ===================================================================
#  소유권 범위
# ===================================================================
class TestOwnership:
    def test_other_users_cannot_see_or_modify_songs(self, library: MusicLibrary, call, anton):
        """다른 사용자의 곡은 조회/수정/삭제 모두 '없음'으로 처리되는지 테스트합니다."""
        song_id = call("music:createSong", IMAGINE)["data"]["id"]
        library.auth_service.create_user("bob", "secret")
        assert login_as(call, "bob")["success"] is True

        not_found = {"success": False, "error": SONG_NOT_FOUND}
        assert call("music:getSongById", song_id) == not_found
        assert call("music:updateSong", song_id, {"title": "Hijacked"}) == not_found
        assert call("music:deleteSong", song_id) == not_found
        assert call("music:getAllSongs") == {"success": True, "data": []}
        assert call("music:searchSongs", "imagine") == {"success": True, "data": []}

        # 원래 소유자에게는 곡이 변경 없이 남아 있어야 함
        assert login_as(call, "anton", "admin")["success"] is True
        assert call("music:getSongById", song_id)["data"]["title"] == "Imagine"

    def test_missing_song_looks_like_foreign_song(self, call, anton):
        assert call("music:getSongById", 9999) == {"success": False, "error": SONG_NOT_FOUND}

# ===================================================================
#  곡 CRUD
# ===================================================================
class TestSongOperations:
    def test_invalid_song_is_not_persisted(self, call, anton):
        call("music:createSong", IMAGINE)

        result = call("music:createSong", {"title": "", "album": "X", "artist": "Y", "duration": -1})

        assert result["success"] is False
        assert "Title is required" in result["error"]
        assert "Duration must be a positive number" in result["error"]
        assert len(call("music:getAllSongs")["data"]) == 1

    def test_update_song_partial(self, call, anton):
        song = call("music:createSong", IMAGINE)["data"]

        result = call("music:updateSong", song["id"], {"duracion": 190.5, "user_id": 42})

        assert result["success"] is True
        updated = call("music:getSongById", song["id"])["data"]
        assert updated["duration"] == 190.5
        assert updated["title"] == "Imagine"
        assert updated["user_id"] == song["user_id"]

    def test_update_song_invalid_merge_is_rejected(self, call, anton):
        song = call("music:createSong", IMAGINE)["data"]

        result = call("music:updateSong", song["id"], {"title": "   "})

        assert result == {"success": False, "error": "Title is required"}
        assert call("music:getSongById", song["id"])["data"]["title"] == "Imagine"

    def test_empty_search_matches_get_all(self, call, anton):
        for song in SAMPLE_SONGS:
            call("music:createSong", song)

        all_songs = call("music:getAllSongs")

        assert call("music:searchSongs", "") == all_songs
        assert call("music:searchSongs", "   ") == all_songs
        assert call("music:searchSongs") == all_songs
        assert [song["title"] for song in all_songs["data"]] == ["Imagine", "Hotel California", "Bohemian Rhapsody"]

# ===================================================================
#  경계 입력 검증
# ===================================================================
class TestBoundaryValidation:
    @pytest.mark.parametrize("credentials", [None, "anton", {}, {"username": "anton"}, {"username": "", "password": "x"}, {"username": 1, "password": 2}])
    def test_malformed_credentials(self, call, credentials):
        assert call("auth:login", credentials) == {"success": False, "error": CREDENTIALS_REQUIRED}

    @pytest.mark.parametrize("song_id", [None, "", "abc", -1, 0, True, 1.5, {"id": 1}])
    def test_malformed_song_id(self, call, anton, song_id):
        expected = {"success": False, "error": "Song ID required"}

        assert call("music:getSongById", song_id) == expected
        assert call("music:deleteSong", song_id) == expected
        assert call("music:updateSong", song_id, {"title": "x"}) == expected

    def test_digit_string_id_is_accepted(self, call, anton):
        song_id = call("music:createSong", IMAGINE)["data"]["id"]

        assert call("music:getSongById", str(song_id))["success"] is True

    def test_missing_song_data(self, call, anton):
        assert call("music:createSong") == {"success": False, "error": "Song data required"}
        assert call("music:createSong", ["Imagine"]) == {"success": False, "error": "Song data required"}
        assert call("music:updateSong", 1, {}) == {"success": False, "error": "Update data required"}

    def test_unknown_channel(self, call):
        assert call("music:dropTables") == {"success": False, "error": UNKNOWN_CHANNEL}

    def test_handler_crash_returns_fallback(self, library: MusicLibrary, call, monkeypatch):
        def boom():
            raise RuntimeError("internal details")
        monkeypatch.setattr(library.music_service, "get_all_songs", boom)
        monkeypatch.setattr(library.auth_service, "is_authenticated", boom)

        assert call("music:getAllSongs") == {"success": False, "error": "Error fetching songs"}
        assert call("auth:isAuthenticated") is False

    def test_too_many_arguments_returns_fallback(self, call):
        assert call("auth:logout", "unexpected") == {"success": False, "error": "An error occurred during logout"}

# ===================================================================
#  저장소 초기화 및 데모 데이터
# ===================================================================
class TestStartup:
    def test_calls_before_start_fail_with_database_error(self):
        """DB 초기화 전에 생성된 서비스는 DatabaseError 메시지로 실패하고, start() 이후 정상 동작하는지 테스트합니다."""
        app = MusicLibrary(Database("sqlite://"))
        try:
            result = app.router.invoke("auth:login", {"username": "anton", "password": "admin"})
            assert result == {"success": False, "error": DATABASE_UNAVAILABLE}

            assert app.start() is True
            app.auth_service.create_user("anton", "admin")
            assert app.router.invoke("auth:login", {"username": "anton", "password": "admin"})["success"] is True
        finally:
            app.shutdown()

    def test_seed_demo_data_is_idempotent(self, library: MusicLibrary, call):
        first = seed_demo_data(library.auth_service, library.music_service)
        second = seed_demo_data(library.auth_service, library.music_service)

        assert first == len(SAMPLE_SONGS)
        assert second == 0
        # 데모 데이터 생성 후에는 로그아웃 상태여야 함
        assert call("auth:isAuthenticated") is False

        assert call("auth:login", {"username": "anton", "password": "admin"})["success"] is True
        assert len(call("music:getAllSongs")["data"]) == len(SAMPLE_SONGS)

    def test_start_with_seed(self):
        app = MusicLibrary(Database("sqlite://"), seed_demo=True)
        try:
            app.start()
            app.router.invoke("auth:login", {"username": "anton", "password": "admin"})
            assert len(app.router.invoke("music:searchSongs", "queen")["data"]) == 1
        finally:
            app.shutdown()

    def test_calls_after_shutdown_fail_with_database_error(self):
        """shutdown() 이후의 호출은 닫힌 세션에 접근하지 않고 DatabaseError 메시지로 실패하는지 테스트합니다."""
        app = MusicLibrary(Database("sqlite://"))
        app.start()
        app.auth_service.create_user("anton", "admin")

        app.shutdown()

        assert app.auth_service.is_bound is False
        assert app.music_service.is_bound is False
        result = app.router.invoke("auth:login", {"username": "anton", "password": "admin"})
        assert result == {"success": False, "error": DATABASE_UNAVAILABLE}
