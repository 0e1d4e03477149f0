from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수(MUSIC_LIBRARY_*) 또는 .env 파일에서 읽어오는 애플리케이션 설정"""

    # Database
    DATABASE_URL: str = "sqlite:///music_library.db"

    # 로컬 IPC 서버 (데스크톱 앱 전용이므로 loopback에만 바인딩)
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # 시작 시 데모 사용자(anton/admin)와 샘플 곡을 생성할지 여부
    SEED_DEMO_DATA: bool = True

    model_config = SettingsConfigDict(
        env_prefix="MUSIC_LIBRARY_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
