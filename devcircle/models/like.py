from sqlalchemy import Column, Integer, DateTime, ForeignKey, PrimaryKeyConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from devcircle.db.base import Base

class Like(Base):
    __tablename__ = "likes"

    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    post_id = Column(Integer, ForeignKey('posts.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="likes")
    post = relationship("Post", back_populates="likes")

    # 복합 기본 키 설정 (사용자당 게시글 좋아요 1개)
    __table_args__ = (PrimaryKeyConstraint('user_id', 'post_id'),)
