from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from devcircle.schemas.user import UserResponse
from devcircle.schemas.profile import ProfileResponse

class GroupMemberIn(BaseModel):
    user_id: int
    is_admin: bool = False

class GroupCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    bio: str = Field(min_length=1, max_length=1000)
    profile_image: Optional[str] = None
    cover_image: Optional[str] = None
    creator_id: int
    members: List[GroupMemberIn] = []

class GroupUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    bio: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    profile_image: Optional[str] = None
    cover_image: Optional[str] = None
    user_id: int # 요청자 (생성자만 수정 가능)

class AdminUserRequest(BaseModel):
    member_id: int
    creator_id: int

class JoinGroupRequest(BaseModel):
    user_id: int

class LeaveGroupRequest(BaseModel):
    user_id: int

class RemoveMemberRequest(BaseModel):
    member_id: int
    admin_id: int

class DeleteGroupRequest(BaseModel):
    creator_id: int

class GroupResponse(BaseModel):
    id: int
    name: str
    bio: str
    profile_image: Optional[str] = None
    cover_image: Optional[str] = None
    creator_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class GroupUserResponse(BaseModel):
    user_id: int
    group_id: int
    is_admin: bool
    joined_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class GroupDetailResponse(GroupResponse):
    creator: UserResponse
    members: List[GroupUserResponse] = []

class MemberUser(BaseModel):
    """멤버 목록에서 사용자 정보를 표시할 때 사용하는 스키마"""
    id: int
    image: Optional[str] = None
    profile: Optional[ProfileResponse] = None

    class Config:
        from_attributes = True

class GroupMemberResponse(GroupUserResponse):
    user: MemberUser

class AdminUpdateResponse(BaseModel):
    user: GroupUserResponse
