import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from devcircle.db.base import Base
from .tag import post_tags


class PostType(str, enum.Enum):
    MEETUP = "MEETUP"
    PODCAST = "PODCAST"
    STANDARD = "STANDARD"


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    group_id = Column(Integer, ForeignKey('groups.id', ondelete='CASCADE'), nullable=True)
    type = Column(Enum(PostType), nullable=False, default=PostType.STANDARD)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)

    # 미디어 / 밋업 정보 (URL 문자열만 저장)
    cover_image = Column(String(500), nullable=True)
    audio_file = Column(String(500), nullable=True)
    audio_title = Column(String(255), nullable=True)
    meetup_location = Column(String(255), nullable=True)
    meetup_date = Column(DateTime(timezone=True), nullable=True)

    views = Column(Integer, nullable=False, default=0, server_default='0')
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # 관계 설정
    author = relationship("User", back_populates="posts")
    group = relationship("Group", back_populates="posts")
    tags = relationship("Tag", secondary=post_tags, back_populates="posts", order_by="Tag.name")
    likes = relationship("Like", back_populates="post", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan") # 게시글에 달린 댓글 목록
