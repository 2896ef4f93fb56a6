from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.constants import NotificationCategoryEnum, NotificationPriorityEnum, NotificationTypeEnum
from app.schemas.response import APIResponse
from app.schemas.token import CurrentUser
from app.schemas.notification import (
    Notification, NotificationCreate, NotificationQuery, NotificationPage,
    NotificationFromTemplate, SystemMessageCreate
)
from app.services.notification import notification_service
from app.utils import deps

router = APIRouter()

@router.get("/", response_model=APIResponse[NotificationPage])
async def get_my_notifications(
    db: Session = Depends(deps.get_db),
    user: CurrentUser = Depends(deps.get_current_user),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    unread_only: bool = False,
    category: Optional[NotificationCategoryEnum] = None,
    priority: Optional[NotificationPriorityEnum] = None,
):
    """Retrieve personal and broadcast notifications for the current user."""
    options = NotificationQuery(limit=limit, offset=offset, unread_only=unread_only, category=category, priority=priority)
    data = notification_service.get_user_notifications(db, user_id=user.user_id, options=options)
    return APIResponse(message="Notifications fetched successfully", data=data)

@router.get("/unread_count", response_model=APIResponse[int])
async def get_unread_notifications_count(
    db: Session = Depends(deps.get_db),
    user: CurrentUser = Depends(deps.get_current_user)
):
    """Get the count of unread notifications for the current user."""
    count = notification_service.get_unread_count(db, user_id=user.user_id)
    return APIResponse(message="Unread notifications count fetched successfully", data=count)

@router.post("/mark_all_read", response_model=APIResponse[int])
async def mark_all_notifications_as_read(
    db: Session = Depends(deps.get_db),
    user: CurrentUser = Depends(deps.get_current_user)
):
    """Mark all unread notifications for the current user as read."""
    count = notification_service.mark_all_as_read(db, user_id=user.user_id)
    return APIResponse(message="All notifications marked as read", data=count)

@router.post("/test", response_model=APIResponse[Notification])
async def send_test_notification(
    db: Session = Depends(deps.get_db),
    user: CurrentUser = Depends(deps.get_current_user)
):
    """Send a test notification to the current user."""
    notification = notification_service.create_notification(db, notification_in=NotificationCreate(
        user_id=user.user_id,
        title="Test Notification",
        message="This is a test notification to confirm your notification settings.",
        type=NotificationTypeEnum.INFO,
        category=NotificationCategoryEnum.SYSTEM,
        priority=NotificationPriorityEnum.LOW,
    ))
    return APIResponse(message="Test notification sent", data=notification)

@router.post("/{notification_id}/read", response_model=APIResponse[None])
async def mark_notification_as_read(
    notification_id: int,
    db: Session = Depends(deps.get_db),
    user: CurrentUser = Depends(deps.get_current_user)
):
    """Mark a specific notification as read."""
    if not notification_service.mark_as_read(db, notification_id=notification_id, user_id=user.user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found or not authorized")
    return APIResponse(message="Notification marked as read")

@router.post("/{notification_id}/archive", response_model=APIResponse[None])
async def archive_notification(
    notification_id: int,
    db: Session = Depends(deps.get_db),
    user: CurrentUser = Depends(deps.get_current_user)
):
    """Archive a specific notification."""
    if not notification_service.archive_notification(db, notification_id=notification_id, user_id=user.user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found or not authorized")
    return APIResponse(message="Notification archived")

@router.post("/", response_model=APIResponse[Notification], status_code=status.HTTP_201_CREATED)
async def create_notification(
    notification_in: NotificationCreate,
    db: Session = Depends(deps.get_db),
    admin: CurrentUser = Depends(deps.require_admin)
):
    notification = notification_service.create_notification(db, notification_in=notification_in)
    return APIResponse(message="Notification created successfully", data=notification)

@router.post("/bulk", response_model=APIResponse[List[Notification]], status_code=status.HTTP_201_CREATED)
async def create_bulk_notifications(
    notifications_in: List[NotificationCreate],
    db: Session = Depends(deps.get_db),
    admin: CurrentUser = Depends(deps.require_admin)
):
    notifications = notification_service.create_bulk_notifications(db, notifications_in=notifications_in)
    return APIResponse(message=f"{len(notifications)} notifications created", data=notifications)

@router.post("/from_template", response_model=APIResponse[Notification], status_code=status.HTTP_201_CREATED)
async def create_notification_from_template(
    template_in: NotificationFromTemplate,
    db: Session = Depends(deps.get_db),
    admin: CurrentUser = Depends(deps.require_admin)
):
    notification = notification_service.create_notification_from_template(
        db,
        template_key=template_in.template_key,
        user_id=template_in.user_id,
        variables=template_in.variables,
        extra_data=template_in.extra_data,
    )
    if not notification:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification template not found")
    return APIResponse(message="Notification created successfully", data=notification)

@router.post("/system", response_model=APIResponse[Notification], status_code=status.HTTP_201_CREATED)
async def send_system_message(
    message_in: SystemMessageCreate,
    db: Session = Depends(deps.get_db),
    admin: CurrentUser = Depends(deps.require_admin)
):
    """Broadcast a system message to all users."""
    notification = notification_service.notify_system_message(
        db, title=message_in.title, message=message_in.message, priority=message_in.priority
    )
    return APIResponse(message="System message sent", data=notification)
