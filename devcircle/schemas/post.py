from pydantic import BaseModel, Field, constr
from typing import List, Optional
from datetime import datetime

from devcircle.models.post import PostType

class TagName(BaseModel):
    name: str

    class Config:
        from_attributes = True

# 사용자 입력용 기본 스키마
class PostBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    type: PostType = PostType.STANDARD
    content: Optional[str] = None
    group_id: Optional[int] = None
    cover_image: Optional[str] = None
    audio_file: Optional[str] = None
    audio_title: Optional[str] = None
    meetup_location: Optional[str] = None
    meetup_date: Optional[datetime] = None

class PostCreate(PostBase):
    author_id: int
    tags: List[constr(strip_whitespace=True, min_length=1, max_length=100)] = []

class PostUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = None

# 게시글 응답 스키마 (태그 이름 포함)
class PostResponse(PostBase):
    id: int
    author_id: int
    views: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tags: List[TagName] = []

    # SQLAlchemy ORM 객체를 바로 Pydantic 모델로 변환할 수 있게 해주는 설정
    model_config = {"from_attributes": True}

class LikeRequest(BaseModel):
    liker_id: int

class LikeResponse(BaseModel):
    user_id: int
    post_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
