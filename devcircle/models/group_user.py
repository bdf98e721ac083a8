from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, PrimaryKeyConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from devcircle.db.base import Base

class GroupUser(Base):
    __tablename__ = "group_users"

    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    group_id = Column(Integer, ForeignKey('groups.id', ondelete='CASCADE'), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="group_memberships")
    group = relationship("Group", back_populates="members")

    # 복합 기본 키 설정
    __table_args__ = (PrimaryKeyConstraint('user_id', 'group_id'),)
