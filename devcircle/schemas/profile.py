from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class ProfileBase(BaseModel):
    bio: Optional[str] = None
    journey: Optional[str] = None
    tech: Optional[str] = None
    ambition: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    website: Optional[str] = None

class ProfileUpdate(ProfileBase):
    onboarding_completed: Optional[bool] = None

class ProfileResponse(ProfileBase):
    id: int
    user_id: int
    onboarding_completed: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
