"""
Alumni profiles and directory

- PATCH /me/profile          update own profile
- GET   /recommendations     batchmates and branchmates
- GET   /verified            searchable directory of verified alumni
- GET   /{user_id}           single profile
- POST  /{user_id}/verify    approve a pending registration (admin)
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional, List

from app.api.dependencies import get_user_repository
from app.core.config import settings
from app.core.exceptions import UserNotFoundError
from app.core.logging_config import logger
from app.models.user import User
from app.modules.auth.dependencies import get_current_user, get_current_admin
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserMessageResponse, UserResponse
from app.schemas.profile import ProfileUpdate, UserSummary

router = APIRouter()


@router.patch("/me/profile", response_model=UserMessageResponse)
async def update_profile(
    update: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository)
):
    """Update own profile; empty values keep what is stored"""
    current_user.biography = update.biography or current_user.biography
    current_user.current_working_place = update.current_working_place or current_user.current_working_place
    current_user.address = update.address or current_user.address
    current_user.designation = update.designation or current_user.designation
    current_user.achievements = update.achievements or current_user.achievements

    if update.social_links:
        current_user.linkedin = update.social_links.linkedin or current_user.linkedin
        current_user.facebook = update.social_links.facebook or current_user.facebook

    user = await users.save(current_user)
    return {"message": "Profile updated successfully", "user": user}


@router.get("/recommendations", response_model=List[UserSummary])
async def recommend_users(
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository)
):
    return await users.recommend_for(current_user, settings.RECOMMENDATION_LIMIT)


@router.get("/verified", response_model=List[UserSummary])
async def list_verified_users(
    search: Optional[str] = Query(None, max_length=100),
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository)
):
    return await users.search_verified(current_user.id, search)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository)
):
    user = await users.find_by_id(user_id)
    if not user:
        raise UserNotFoundError(user_id)
    return user


@router.post("/{user_id}/verify", response_model=UserMessageResponse)
async def verify_user(
    user_id: str,
    admin: User = Depends(get_current_admin),
    users: UserRepository = Depends(get_user_repository)
):
    """Approve a registration that did not match an alumni record"""
    user = await users.find_by_id(user_id)
    if not user:
        raise UserNotFoundError(user_id)

    user.is_verified = True
    user = await users.save(user)

    logger.info(
        f"User {user.email} verified by {admin.email}",
        extra={"event_type": "user_verified", "verified_user_id": user.id}
    )
    return {"message": "User verified successfully", "user": user}
