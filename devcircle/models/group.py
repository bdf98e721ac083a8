from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from devcircle.db.base import Base


class Group(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    bio = Column(String(1000), nullable=False)
    profile_image = Column(String(500), nullable=True)
    cover_image = Column(String(500), nullable=True)
    # 생성자 삭제 시 그룹도 삭제
    creator_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # 관계 설정
    creator = relationship("User", back_populates="created_groups")
    members = relationship("GroupUser", back_populates="group", cascade="all, delete-orphan")
    posts = relationship("Post", back_populates="group", cascade="all, delete-orphan")

    # 같은 생성자는 같은 이름의 그룹을 두 번 만들 수 없음
    __table_args__ = (UniqueConstraint('name', 'creator_id', name='uq_groups_name_creator'),)
