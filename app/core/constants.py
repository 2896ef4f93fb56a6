from enum import Enum


class UserTypeEnum(str, Enum):
    USER = "user"
    ALL = "all"
    ADMIN = "admin"

class NotificationTypeEnum(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    PROPERTY = "property"
    REPORT = "report"
    BOOKING = "booking"
    PAYMENT = "payment"
    SYSTEM = "system"

class NotificationCategoryEnum(str, Enum):
    PROPERTY = "property"
    REPORT = "report"
    BOOKING = "booking"
    PAYMENT = "payment"
    LEAD = "lead"
    SYSTEM = "system"
    PROMOTION = "promotion"

class NotificationPriorityEnum(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

class DigestFrequencyEnum(str, Enum):
    IMMEDIATE = "immediate"
    DAILY = "daily"
    WEEKLY = "weekly"
    NEVER = "never"

class RelatedEntityTypeEnum(str, Enum):
    PROPERTY = "property"
    REPORT = "report"
    BOOKING = "booking"
    PAYMENT = "payment"
    LEAD = "lead"
    USER = "user"
    SYSTEM = "system"

class TemplateKeyEnum(str, Enum):
    REPORT_READY = "REPORT_READY"
    BOOKING_CONFIRMED = "BOOKING_CONFIRMED"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    PROPERTY_MATCH = "PROPERTY_MATCH"
    WELCOME_USER = "WELCOME_USER"

# Categories missing from this map are never filtered by preferences.
CATEGORY_PREFERENCE_FIELDS = {
    NotificationCategoryEnum.PROPERTY: "property_updates",
    NotificationCategoryEnum.REPORT: "report_notifications",
    NotificationCategoryEnum.BOOKING: "booking_notifications",
    NotificationCategoryEnum.PAYMENT: "payment_notifications",
    NotificationCategoryEnum.LEAD: "lead_notifications",
    NotificationCategoryEnum.SYSTEM: "system_notifications",
    NotificationCategoryEnum.PROMOTION: "promotional_notifications",
}

ADMIN_ROLE = "admin"
