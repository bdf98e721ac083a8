from sqlalchemy import Column, Integer, DateTime, ForeignKey, PrimaryKeyConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from devcircle.db.base import Base

class Follow(Base):
    __tablename__ = "follows"

    follower_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    following_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    follower = relationship("User", foreign_keys=[follower_id], back_populates="following")
    followed = relationship("User", foreign_keys=[following_id], back_populates="followers")

    # 복합 기본 키 설정 (순서쌍 당 하나), 자기 자신 팔로우 금지
    __table_args__ = (
        PrimaryKeyConstraint('follower_id', 'following_id'),
        CheckConstraint('follower_id <> following_id', name='ck_follows_not_self'),
    )
