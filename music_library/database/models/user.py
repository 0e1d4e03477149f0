from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base

class User(Base):
    """
    로그인하여 자신의 음악 라이브러리를 관리하는 사용자를 나타냅니다.
    비밀번호는 bcrypt 해시로만 저장되며, 평문은 어디에도 남지 않습니다.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    songs = relationship("Song", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
