from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from devcircle.schemas.profile import ProfileResponse

class UserResponse(BaseModel):
    """비밀번호 해시는 응답에 포함하지 않음"""
    id: int
    email: str
    username: str
    image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class UserWithProfile(UserResponse):
    profile: Optional[ProfileResponse] = None

class FollowRequest(BaseModel):
    follower_id: int
