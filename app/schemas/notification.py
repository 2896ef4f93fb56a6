from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.constants import (
    UserTypeEnum, NotificationTypeEnum, NotificationCategoryEnum,
    NotificationPriorityEnum, DigestFrequencyEnum, RelatedEntityTypeEnum
)

TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

class NotificationBase(BaseModel):
    """Base schema for a notification."""
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: NotificationTypeEnum = NotificationTypeEnum.INFO
    category: NotificationCategoryEnum = NotificationCategoryEnum.SYSTEM
    priority: NotificationPriorityEnum = NotificationPriorityEnum.MEDIUM
    related_entity_type: Optional[RelatedEntityTypeEnum] = None
    related_entity_id: Optional[str] = None
    action_url: Optional[str] = None
    action_text: Optional[str] = None
    extra_data: Optional[Dict[str, Any]] = None

class NotificationCreate(NotificationBase):
    """Schema for creating a notification. A missing user_id means a broadcast."""
    user_id: Optional[str] = None
    user_type: UserTypeEnum = UserTypeEnum.USER

    @model_validator(mode="after")
    def check_broadcast_target(self):
        if self.user_id is None and self.user_type != UserTypeEnum.ALL:
            raise ValueError("user_id may only be omitted for broadcast notifications (user_type='all')")
        return self

class Notification(NotificationBase):
    """Schema for reading a notification, includes ID and state."""
    id: int
    user_id: Optional[str] = None
    user_type: UserTypeEnum
    is_read: bool
    read_at: Optional[datetime] = None
    is_archived: bool
    email_sent: bool
    email_sent_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class NotificationQuery(BaseModel):
    """Listing options for a user's inbox."""
    limit: int = Field(20, ge=1, le=100)
    offset: int = Field(0, ge=0)
    unread_only: bool = False
    category: Optional[NotificationCategoryEnum] = None
    priority: Optional[NotificationPriorityEnum] = None

class NotificationPage(BaseModel):
    notifications: List[Notification]
    total: int
    unread_count: int

class NotificationFromTemplate(BaseModel):
    template_key: str
    user_id: Optional[str] = None
    variables: Dict[str, Any] = {}
    extra_data: Dict[str, Any] = {}

    @model_validator(mode="after")
    def check_reserved_variables(self):
        entity_type = self.variables.get("entity_type")
        if entity_type is not None and entity_type not in {e.value for e in RelatedEntityTypeEnum}:
            raise ValueError(f"variables.entity_type must be one of: {', '.join(e.value for e in RelatedEntityTypeEnum)}")
        for key in ("action_url", "action_text"):
            value = self.variables.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"variables.{key} must be a string")
        return self

class SystemMessageCreate(BaseModel):
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    priority: NotificationPriorityEnum = NotificationPriorityEnum.MEDIUM

class NotificationTemplateBase(BaseModel):
    name: str
    template_key: str = Field(..., min_length=1)
    description: Optional[str] = None
    title_template: str
    message_template: str
    email_subject_template: Optional[str] = None
    email_body_template: Optional[str] = None
    requires_email: bool = False
    type: NotificationTypeEnum = NotificationTypeEnum.INFO
    category: NotificationCategoryEnum = NotificationCategoryEnum.SYSTEM
    priority: NotificationPriorityEnum = NotificationPriorityEnum.MEDIUM
    is_active: bool = True

class NotificationTemplateCreate(NotificationTemplateBase):
    pass

class NotificationTemplate(NotificationTemplateBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class NotificationPreferencesUpdate(BaseModel):
    """Partial preference update; unset fields keep their stored value."""
    email_notifications: Optional[bool] = None
    push_notifications: Optional[bool] = None
    sms_notifications: Optional[bool] = None
    property_updates: Optional[bool] = None
    report_notifications: Optional[bool] = None
    booking_notifications: Optional[bool] = None
    payment_notifications: Optional[bool] = None
    lead_notifications: Optional[bool] = None
    system_notifications: Optional[bool] = None
    promotional_notifications: Optional[bool] = None
    digest_frequency: Optional[DigestFrequencyEnum] = None
    quiet_hours_start: Optional[str] = Field(None, pattern=TIME_OF_DAY_PATTERN)
    quiet_hours_end: Optional[str] = Field(None, pattern=TIME_OF_DAY_PATTERN)

    @field_validator(
        "email_notifications", "push_notifications", "sms_notifications", "property_updates",
        "report_notifications", "booking_notifications", "payment_notifications", "lead_notifications",
        "system_notifications", "promotional_notifications", "digest_frequency",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not set to null")
        return v

class NotificationPreferences(BaseModel):
    id: int
    user_id: str
    email_notifications: bool
    push_notifications: bool
    sms_notifications: bool
    property_updates: bool
    report_notifications: bool
    booking_notifications: bool
    payment_notifications: bool
    lead_notifications: bool
    system_notifications: bool
    promotional_notifications: bool
    digest_frequency: DigestFrequencyEnum
    quiet_hours_start: Optional[str] = None
    quiet_hours_end: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
