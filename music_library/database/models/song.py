from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import relationship
from ..database import Base

class Song(Base):
    """
    사용자의 라이브러리에 등록된 곡 한 개를 나타냅니다.
    모든 곡은 정확히 한 명의 사용자에게 속하며, 사용자가 삭제되면 함께 삭제됩니다.
    duration은 초 단위의 실수입니다.
    """
    __tablename__ = "songs"
    __table_args__ = (
        CheckConstraint("duration > 0", name="ck_songs_duration_positive"),
    )
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    album = Column(String(255), nullable=False)
    artist = Column(String(255), nullable=False)
    duration = Column(Float, nullable=False)
    cover_url = Column(String(500))
    preview_url = Column(String(500))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user = relationship("User", back_populates="songs")
