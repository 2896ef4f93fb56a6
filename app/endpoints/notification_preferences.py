from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from app.schemas.response import APIResponse
from app.schemas.token import CurrentUser
from app.schemas.notification import NotificationPreferences, NotificationPreferencesUpdate
from app.services.notification import notification_service
from app.utils import deps

router = APIRouter()

@router.get("/me", response_model=APIResponse[Optional[NotificationPreferences]])
async def get_my_preferences(
    db: Session = Depends(deps.get_db),
    user: CurrentUser = Depends(deps.get_current_user)
):
    """Stored preferences, or null when the user never saved any (everything enabled)."""
    preferences = notification_service.get_user_preferences(db, user_id=user.user_id)
    return APIResponse(message="Notification preferences fetched successfully", data=preferences)

@router.put("/me", response_model=APIResponse[NotificationPreferences])
async def update_my_preferences(
    preferences_in: NotificationPreferencesUpdate,
    db: Session = Depends(deps.get_db),
    user: CurrentUser = Depends(deps.get_current_user)
):
    preferences = notification_service.update_user_preferences(db, user_id=user.user_id, preferences_in=preferences_in)
    return APIResponse(message="Notification preferences updated successfully", data=preferences)
