import logging

from music_library.services.auth_service import AuthService
from music_library.services.exceptions import ValidationError
from music_library.services.music_service import MusicService

logger = logging.getLogger(__name__)

DEMO_USERNAME = "anton"
DEMO_PASSWORD = "admin"

SAMPLE_SONGS = [
    {
        "title": "Bohemian Rhapsody",
        "album": "A Night at the Opera",
        "artist": "Queen",
        "duration": 355,
        "cover_url": "https://upload.wikimedia.org/wikipedia/en/4/4d/Queen_A_Night_at_the_Opera.png",
    },
    {
        "title": "Hotel California",
        "album": "Hotel California",
        "artist": "Eagles",
        "duration": 391,
        "cover_url": "https://upload.wikimedia.org/wikipedia/en/4/49/Hotelcalifornia.jpg",
    },
    {
        "title": "Imagine",
        "album": "Imagine",
        "artist": "John Lennon",
        "duration": 183,
        "cover_url": "https://upload.wikimedia.org/wikipedia/en/1/1d/John_Lennon_-_Imagine_John_Lennon.jpg",
    },
]


def seed_demo_data(auth_service: AuthService, music_service: MusicService) -> int:
    """
    데모 사용자와 샘플 곡을 생성합니다.

    사용자가 이미 존재하면 생성을 건너뛰고, 라이브러리가 비어 있을 때만 샘플 곡을 추가합니다.
    작업이 끝나면 로그아웃하여 세션을 비워 둡니다.

    Returns:
        새로 추가된 샘플 곡의 수.
    """
    try:
        auth_service.create_user(DEMO_USERNAME, DEMO_PASSWORD)
        logger.info("Demo user created: %s", DEMO_USERNAME)
    except ValidationError:
        logger.info("Demo user already exists, skipping creation.")

    login_result = auth_service.login(DEMO_USERNAME, DEMO_PASSWORD)
    if not login_result["success"]:
        logger.warning("Could not log in as demo user: %s", login_result["error"])
        return 0

    created = 0
    try:
        songs_result = music_service.get_all_songs()
        if songs_result["success"] and not songs_result["data"]:
            logger.info("Creating sample songs...")
            for song_data in SAMPLE_SONGS:
                if music_service.create_song(song_data)["success"]:
                    created += 1
            logger.info("%d sample songs created.", created)
        else:
            logger.info("Demo library already has songs, skipping sample data.")
    finally:
        auth_service.logout()
    return created
