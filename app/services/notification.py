import logging
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.core.constants import (
    CATEGORY_PREFERENCE_FIELDS, NotificationCategoryEnum, NotificationPriorityEnum,
    NotificationTypeEnum, TemplateKeyEnum, UserTypeEnum
)
from app.crud.notification import notification as crud_notification
from app.crud.notification import notification_template as crud_template
from app.crud.notification import notification_preferences as crud_preferences
from app.models.notification import Notification, NotificationTemplate, NotificationPreferences
from app.schemas.notification import (
    NotificationCreate, NotificationQuery, NotificationPage, Notification as NotificationSchema,
    NotificationTemplateCreate, NotificationPreferencesUpdate
)
from app.services.email import EmailService, email_service as default_email_service
from app.utils.template import replace_variables

logger = logging.getLogger(__name__)

class NotificationService:
    """
    Creates in-app notifications and emails them when the recipient's
    preferences allow it. Email is best effort: a failed send never undoes
    the stored notification and is not retried.
    """

    def __init__(self, email_service: EmailService, app_name: str = "OwnItRight"):
        self.email_service = email_service
        self.app_name = app_name

    def create_notification(self, db: Session, *, notification_in: NotificationCreate) -> Notification:
        n = crud_notification.create(db, obj_in=notification_in)
        if n.user_id:
            self._check_and_send_email(db, n)
        return n

    def create_bulk_notifications(self, db: Session, *, notifications_in: List[NotificationCreate]) -> List[Notification]:
        created = crud_notification.create_multi(db, objs_in=notifications_in)
        for n in created:
            if n.user_id:
                self._check_and_send_email(db, n)
        return created

    def get_user_notifications(self, db: Session, *, user_id: str, options: Optional[NotificationQuery] = None) -> NotificationPage:
        options = options or NotificationQuery()
        rows = crud_notification.get_for_user(db, user_id=user_id, options=options)
        return NotificationPage(
            notifications=[NotificationSchema.model_validate(n) for n in rows],
            total=crud_notification.count_for_user(db, user_id=user_id, options=options),
            unread_count=crud_notification.count_unread_for_user(db, user_id=user_id),
        )

    def get_unread_count(self, db: Session, *, user_id: str) -> int:
        return crud_notification.count_unread_for_user(db, user_id=user_id)

    def mark_as_read(self, db: Session, *, notification_id: int, user_id: Optional[str] = None) -> bool:
        return crud_notification.mark_as_read(db, notification_id=notification_id, user_id=user_id)

    def mark_all_as_read(self, db: Session, *, user_id: str) -> int:
        return crud_notification.mark_all_as_read(db, user_id=user_id)

    def archive_notification(self, db: Session, *, notification_id: int, user_id: Optional[str] = None) -> bool:
        return crud_notification.archive(db, notification_id=notification_id, user_id=user_id)

    def create_notification_from_template(
        self,
        db: Session,
        *,
        template_key: str,
        user_id: Optional[str],
        variables: Optional[Dict[str, Any]] = None,
        extra_data: Optional[Dict[str, Any]] = None,
    ) -> Optional[Notification]:
        """
        Expand an active template into a notification.

        Returns None when no active template has this key or the variables do
        not form a valid notification. Templates flagged
        requires_email send their own email and skip the preference check.
        """
        variables = variables or {}
        template = crud_template.get_active_by_key(db, template_key=template_key)
        if not template:
            logger.error(f"Notification template not found: {template_key}")
            return None

        try:
            notification_in = NotificationCreate(
                user_id=user_id,
                user_type=UserTypeEnum.USER if user_id else UserTypeEnum.ALL,
                title=replace_variables(template.title_template, variables),
                message=replace_variables(template.message_template, variables),
                type=template.type,
                category=template.category,
                priority=template.priority,
                extra_data=extra_data or {},
                related_entity_type=variables.get("entity_type"),
                related_entity_id=_optional_str(variables.get("entity_id")),
                action_url=variables.get("action_url"),
                action_text=variables.get("action_text"),
            )
        except ValidationError as e:
            logger.error(f"Invalid variables for notification template {template_key}: {e}")
            return None

        sends_template_email = bool(
            template.requires_email and user_id
            and template.email_subject_template and template.email_body_template
        )
        if not sends_template_email:
            return self.create_notification(db, notification_in=notification_in)

        n = crud_notification.create(db, obj_in=notification_in)
        if self._send_email_from_template(template, user_id, variables):
            self._mark_email_sent(db, n)
        return n

    def _send_email_from_template(self, template: NotificationTemplate, user_id: str, variables: Dict[str, Any]) -> bool:
        subject = replace_variables(template.email_subject_template, variables)
        html_content = replace_variables(template.email_body_template, variables)
        return self.email_service.send_email(
            to_email=variables.get("user_email") or user_id,
            subject=subject,
            html_content=html_content,
        )

    def should_send_email(self, notification: Notification, preferences: Optional[NotificationPreferences]) -> bool:
        """No stored preferences means every channel and category is enabled."""
        if preferences is None:
            return True
        if not preferences.email_notifications:
            return False
        field = CATEGORY_PREFERENCE_FIELDS.get(notification.category)
        if field is None:
            return True
        return bool(getattr(preferences, field))

    def _check_and_send_email(self, db: Session, notification: Notification) -> bool:
        if not notification.user_id:
            return False

        try:
            preferences = crud_preferences.get_by_user_id(db, user_id=notification.user_id)
            if not self.should_send_email(notification, preferences):
                logger.info(f"Email suppressed by preferences for notification {notification.id}")
                return False

            if not self._send_notification_email(notification):
                return False
            self._mark_email_sent(db, notification)
            return True
        except SQLAlchemyError as e:
            logger.error(f"Error checking email preferences for notification {notification.id}: {e}")
            db.rollback()
            return False
        except Exception as e:
            logger.error(f"Error sending email for notification {notification.id}: {e}", exc_info=True)
            return False

    def _send_notification_email(self, notification: Notification) -> bool:
        html_content = self.email_service.render_template("notification.html", {
            "title": notification.title,
            "message": notification.message,
            "action_url": notification.action_url,
            "action_text": notification.action_text,
        })
        return self.email_service.send_email(
            to_email=notification.user_id,
            subject=f"{self.app_name}: {notification.title}",
            html_content=html_content,
        )

    def _mark_email_sent(self, db: Session, notification: Notification) -> None:
        try:
            crud_notification.mark_email_sent(db, db_obj=notification)
        except SQLAlchemyError as e:
            # The email already went out; the flag simply stays False.
            logger.error(f"Email sent but could not flag notification {notification.id}: {e}")
            db.rollback()

    # Templates

    def create_template(self, db: Session, *, template_in: NotificationTemplateCreate) -> NotificationTemplate:
        return crud_template.create(db, obj_in=template_in)

    def get_template(self, db: Session, *, template_key: str) -> Optional[NotificationTemplate]:
        return crud_template.get_by_key(db, template_key=template_key)

    def get_all_templates(self, db: Session) -> List[NotificationTemplate]:
        return crud_template.get_all_ordered(db)

    # Preferences

    def get_user_preferences(self, db: Session, *, user_id: str) -> Optional[NotificationPreferences]:
        return crud_preferences.get_by_user_id(db, user_id=user_id)

    def update_user_preferences(self, db: Session, *, user_id: str, preferences_in: NotificationPreferencesUpdate) -> NotificationPreferences:
        update_data = preferences_in.model_dump(exclude_unset=True)
        existing = crud_preferences.get_by_user_id(db, user_id=user_id)
        if existing:
            return crud_preferences.update(db, db_obj=existing, obj_in=update_data)
        return crud_preferences.create(db, obj_in={"user_id": user_id, **update_data})

    # Common scenarios

    def notify_report_ready(self, db: Session, *, user_id: str, report_type: str, report_id: str, property_name: Optional[str] = None) -> Optional[Notification]:
        return self.create_notification_from_template(db, template_key=TemplateKeyEnum.REPORT_READY.value, user_id=user_id, variables={
            "report_type": report_type,
            "report_id": report_id,
            "property_name": property_name,
            "entity_type": "report",
            "entity_id": report_id,
            "action_url": f"/user-dashboard/reports/{report_id}",
            "action_text": "View Report",
        })

    def notify_booking_confirmed(self, db: Session, *, user_id: str, booking_id: str, property_name: str) -> Optional[Notification]:
        return self.create_notification_from_template(db, template_key=TemplateKeyEnum.BOOKING_CONFIRMED.value, user_id=user_id, variables={
            "booking_id": booking_id,
            "property_name": property_name,
            "entity_type": "booking",
            "entity_id": booking_id,
            "action_url": f"/user-dashboard/bookings/{booking_id}",
            "action_text": "View Booking",
        })

    def notify_payment_received(self, db: Session, *, user_id: str, amount: float, service: str, payment_id: Optional[str] = None) -> Optional[Notification]:
        return self.create_notification_from_template(db, template_key=TemplateKeyEnum.PAYMENT_RECEIVED.value, user_id=user_id, variables={
            "amount": f"₹{amount:,.2f}",
            "service": service,
            "entity_type": "payment",
            "entity_id": payment_id,
            "action_url": "/user-dashboard/payments",
            "action_text": "View Payments",
        })

    def notify_property_match(self, db: Session, *, user_id: str, property_id: str, property_name: str, location: str, price: Optional[str] = None, property_type: Optional[str] = None) -> Optional[Notification]:
        return self.create_notification_from_template(db, template_key=TemplateKeyEnum.PROPERTY_MATCH.value, user_id=user_id, variables={
            "property_name": property_name,
            "location": location,
            "price": price,
            "property_type": property_type,
            "entity_type": "property",
            "entity_id": property_id,
            "action_url": f"/property/{property_id}",
            "action_text": "View Property",
        })

    def notify_welcome(self, db: Session, *, user_id: str, user_name: str) -> Optional[Notification]:
        return self.create_notification_from_template(db, template_key=TemplateKeyEnum.WELCOME_USER.value, user_id=user_id, variables={
            "user_name": user_name,
            "entity_type": "user",
            "entity_id": user_id,
            "action_url": "/user-dashboard",
            "action_text": "Explore Dashboard",
        })

    def notify_system_message(self, db: Session, *, title: str, message: str, priority: NotificationPriorityEnum = NotificationPriorityEnum.MEDIUM) -> Notification:
        """Broadcast to every user; broadcasts are never emailed."""
        return self.create_notification(db, notification_in=NotificationCreate(
            user_id=None,
            user_type=UserTypeEnum.ALL,
            title=title,
            message=message,
            type=NotificationTypeEnum.SYSTEM,
            category=NotificationCategoryEnum.SYSTEM,
            priority=priority,
        ))

def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)

notification_service = NotificationService(email_service=default_email_service, app_name=settings.APP_NAME)
