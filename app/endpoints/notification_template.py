from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from app.schemas.response import APIResponse
from app.schemas.token import CurrentUser
from app.schemas.notification import NotificationTemplate, NotificationTemplateCreate
from app.services.notification import notification_service
from app.utils import deps

router = APIRouter()

@router.get("/", response_model=APIResponse[List[NotificationTemplate]])
async def list_templates(
    db: Session = Depends(deps.get_db),
    admin: CurrentUser = Depends(deps.require_admin)
):
    templates = notification_service.get_all_templates(db)
    return APIResponse(message="Notification templates fetched successfully", data=templates)

@router.get("/{template_key}", response_model=APIResponse[NotificationTemplate])
async def get_template(
    template_key: str,
    db: Session = Depends(deps.get_db),
    admin: CurrentUser = Depends(deps.require_admin)
):
    template = notification_service.get_template(db, template_key=template_key)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification template not found")
    return APIResponse(message="Notification template fetched successfully", data=template)

@router.post("/", response_model=APIResponse[NotificationTemplate], status_code=status.HTTP_201_CREATED)
async def create_template(
    template_in: NotificationTemplateCreate,
    db: Session = Depends(deps.get_db),
    admin: CurrentUser = Depends(deps.require_admin)
):
    if notification_service.get_template(db, template_key=template_in.template_key):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A template with this key already exists")
    template = notification_service.create_template(db, template_in=template_in)
    return APIResponse(message="Notification template created successfully", data=template)
