from typing import List, Optional, Dict, Any
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from music_library.database import models
from music_library.repositories.interfaces import ISongRepository

LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    """LIKE 와일드카드(%, _)를 일반 문자로 취급하도록 이스케이프합니다."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class SqlalchemySongRepository(ISongRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def _owned_by(self, user_id: int):
        return self.db.query(models.Song).filter(models.Song.user_id == user_id)

    @staticmethod
    def _newest_first(query):
        # created_at은 초 단위이므로 같은 초에 생성된 곡은 id로 순서를 정함
        return query.order_by(models.Song.created_at.desc(), models.Song.id.desc())

    def create(self, song_model: models.Song) -> models.Song:
        self.db.add(song_model)
        self._commit()
        self.db.refresh(song_model)
        return song_model

    def find_by_id_and_user_id(self, song_id: int, user_id: int) -> Optional[models.Song]:
        return self._owned_by(user_id).filter(models.Song.id == song_id).first()

    def list_by_user_id(self, user_id: int) -> List[models.Song]:
        return self._newest_first(self._owned_by(user_id)).all()

    def search_by_user_id(self, user_id: int, query: str) -> List[models.Song]:
        pattern = f"%{_escape_like(query)}%"
        matches = or_(
            models.Song.title.ilike(pattern, escape=LIKE_ESCAPE),
            models.Song.album.ilike(pattern, escape=LIKE_ESCAPE),
            models.Song.artist.ilike(pattern, escape=LIKE_ESCAPE),
        )
        return self._newest_first(self._owned_by(user_id).filter(matches)).all()

    def update(self, song: models.Song, changes: Dict[str, Any]) -> models.Song:
        for field, value in changes.items():
            setattr(song, field, value)
        self._commit()
        self.db.refresh(song)
        return song

    def delete(self, song: models.Song) -> bool:
        if song:
            self.db.delete(song)
            self._commit()
            return True
        return False
