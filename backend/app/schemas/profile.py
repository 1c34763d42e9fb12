"""Profile, directory and profile photo schemas"""
from pydantic import BaseModel, Field
from typing import Optional, List

LINKEDIN_URL_PATTERN = r'^https?://(www\.)?linkedin\.com/.*$'
FACEBOOK_URL_PATTERN = r'^https?://(www\.)?facebook\.com/.*$'


class SocialLinksUpdate(BaseModel):
    # Empty string means "leave unchanged"
    linkedin: Optional[str] = Field(None, pattern=rf'{LINKEDIN_URL_PATTERN}|^$')
    facebook: Optional[str] = Field(None, pattern=rf'{FACEBOOK_URL_PATTERN}|^$')


class ProfileUpdate(BaseModel):
    """Partial profile update; empty or missing fields keep their stored value"""
    biography: Optional[str] = Field(None, max_length=500)
    current_working_place: Optional[str] = None
    address: Optional[str] = None
    designation: Optional[str] = None
    achievements: Optional[List[str]] = None
    social_links: Optional[SocialLinksUpdate] = None


class UserSummary(BaseModel):
    """Directory card"""
    id: str
    name: str
    branch: Optional[str] = None
    batch: Optional[int] = None
    designation: Optional[str] = None
    current_working_place: Optional[str] = None
    profile_photo: Optional[str] = None

    class Config:
        from_attributes = True


class ProfilePhotoUploadResponse(BaseModel):
    message: str = "Profile photo uploaded successfully"
    photo_path: str


class ProfilePhotoDeleteResponse(BaseModel):
    message: str = "Profile photo deleted successfully"
    profile_photo: Optional[str] = None


class ProfilePhotoReferenceResponse(BaseModel):
    profile_photo: Optional[str] = None
    message: Optional[str] = None
