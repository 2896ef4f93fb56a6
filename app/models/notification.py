from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON, Enum
from app.core.database import Base
from app.core.constants import (
    UserTypeEnum, NotificationTypeEnum, NotificationCategoryEnum,
    NotificationPriorityEnum, DigestFrequencyEnum, RelatedEntityTypeEnum
)

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _values(enum_cls):
    return [member.value for member in enum_cls]

def _enum(enum_cls, name: str):
    # Persist enum values ("report"), not member names ("REPORT").
    return Enum(enum_cls, name=name, values_callable=_values, native_enum=False, validate_strings=True)

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=True, index=True) # None for broadcasts
    user_type = Column(_enum(UserTypeEnum, "notification_user_type"), nullable=False, default=UserTypeEnum.USER)
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    type = Column(_enum(NotificationTypeEnum, "notification_type"), nullable=False, default=NotificationTypeEnum.INFO)
    category = Column(_enum(NotificationCategoryEnum, "notification_category"), nullable=False, default=NotificationCategoryEnum.SYSTEM)
    priority = Column(_enum(NotificationPriorityEnum, "notification_priority"), nullable=False, default=NotificationPriorityEnum.MEDIUM)

    related_entity_type = Column(_enum(RelatedEntityTypeEnum, "notification_entity_type"), nullable=True)
    related_entity_id = Column(String, nullable=True)
    action_url = Column(String, nullable=True)
    action_text = Column(String, nullable=True)
    extra_data = Column("metadata", JSON, nullable=True)

    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(timezone=True), nullable=True)
    is_archived = Column(Boolean, nullable=False, default=False)
    email_sent = Column(Boolean, nullable=False, default=False)
    email_sent_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

class NotificationTemplate(Base):
    __tablename__ = "notification_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    template_key = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    title_template = Column(String, nullable=False)
    message_template = Column(Text, nullable=False)
    email_subject_template = Column(String, nullable=True)
    email_body_template = Column(Text, nullable=True)
    requires_email = Column(Boolean, nullable=False, default=False)
    type = Column(_enum(NotificationTypeEnum, "notification_type"), nullable=False, default=NotificationTypeEnum.INFO)
    category = Column(_enum(NotificationCategoryEnum, "notification_category"), nullable=False, default=NotificationCategoryEnum.SYSTEM)
    priority = Column(_enum(NotificationPriorityEnum, "notification_priority"), nullable=False, default=NotificationPriorityEnum.MEDIUM)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

class NotificationPreferences(Base):
    __tablename__ = "notification_preferences"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, unique=True, index=True)

    email_notifications = Column(Boolean, nullable=False, default=True)
    push_notifications = Column(Boolean, nullable=False, default=True)
    sms_notifications = Column(Boolean, nullable=False, default=False)

    property_updates = Column(Boolean, nullable=False, default=True)
    report_notifications = Column(Boolean, nullable=False, default=True)
    booking_notifications = Column(Boolean, nullable=False, default=True)
    payment_notifications = Column(Boolean, nullable=False, default=True)
    lead_notifications = Column(Boolean, nullable=False, default=True)
    system_notifications = Column(Boolean, nullable=False, default=True)
    promotional_notifications = Column(Boolean, nullable=False, default=True)

    digest_frequency = Column(_enum(DigestFrequencyEnum, "notification_digest_frequency"), nullable=False, default=DigestFrequencyEnum.IMMEDIATE)
    quiet_hours_start = Column(String, nullable=True) # "HH:MM", stored only
    quiet_hours_end = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
