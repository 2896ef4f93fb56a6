from datetime import datetime
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, Query
from typing import List, Optional

from app.crud.base import CRUDBase
from app.core.constants import UserTypeEnum
from app.models.notification import Notification, NotificationTemplate, NotificationPreferences, utcnow
from app.schemas.notification import (
    NotificationCreate, NotificationQuery,
    NotificationTemplateCreate,
    NotificationPreferencesUpdate
)

class CRUDNotification(CRUDBase[Notification, NotificationCreate, NotificationCreate]):
    """CRUD operations for Notifications."""

    def visible_to(self, user_id: str):
        """Personal notifications for user_id plus broadcasts (user_type 'all', no user_id)."""
        return or_(
            self.model.user_id == user_id,
            and_(self.model.user_type == UserTypeEnum.ALL, self.model.user_id.is_(None)),
        )

    def _filtered(self, db: Session, *, user_id: str, options: NotificationQuery) -> Query:
        query = db.query(self.model).filter(self.visible_to(user_id))
        if options.unread_only:
            query = query.filter(self.model.is_read == False)
        if options.category:
            query = query.filter(self.model.category == options.category)
        if options.priority:
            query = query.filter(self.model.priority == options.priority)
        return query

    def get_for_user(self, db: Session, *, user_id: str, options: NotificationQuery) -> List[Notification]:
        return (
            self._filtered(db, user_id=user_id, options=options)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .offset(options.offset)
            .limit(options.limit)
            .all()
        )

    def count_for_user(self, db: Session, *, user_id: str, options: NotificationQuery) -> int:
        return self._filtered(db, user_id=user_id, options=options).count()

    def count_unread_for_user(self, db: Session, *, user_id: str) -> int:
        return db.query(self.model).filter(self.visible_to(user_id), self.model.is_read == False).count()

    def _by_id(self, db: Session, *, notification_id: int, user_id: Optional[str]) -> Query:
        query = db.query(self.model).filter(self.model.id == notification_id)
        if user_id:
            query = query.filter(self.visible_to(user_id))
        return query

    def mark_as_read(self, db: Session, *, notification_id: int, user_id: Optional[str] = None) -> bool:
        now = utcnow()
        updated = self._by_id(db, notification_id=notification_id, user_id=user_id).update(
            {"is_read": True, "read_at": now, "updated_at": now}, synchronize_session=False
        )
        db.commit()
        return updated > 0

    def mark_all_as_read(self, db: Session, *, user_id: str) -> int:
        now = utcnow()
        updated = db.query(self.model).filter(self.visible_to(user_id), self.model.is_read == False).update(
            {"is_read": True, "read_at": now, "updated_at": now}, synchronize_session=False
        )
        db.commit()
        return updated

    def archive(self, db: Session, *, notification_id: int, user_id: Optional[str] = None) -> bool:
        updated = self._by_id(db, notification_id=notification_id, user_id=user_id).update(
            {"is_archived": True, "updated_at": utcnow()}, synchronize_session=False
        )
        db.commit()
        return updated > 0

    def mark_email_sent(self, db: Session, *, db_obj: Notification, sent_at: Optional[datetime] = None) -> Notification:
        return self.update(db, db_obj=db_obj, obj_in={"email_sent": True, "email_sent_at": sent_at or utcnow()})

class CRUDNotificationTemplate(CRUDBase[NotificationTemplate, NotificationTemplateCreate, NotificationTemplateCreate]):
    """CRUD operations for NotificationTemplates."""

    def get_by_key(self, db: Session, *, template_key: str) -> Optional[NotificationTemplate]:
        return db.query(self.model).filter(self.model.template_key == template_key).first()

    def get_active_by_key(self, db: Session, *, template_key: str) -> Optional[NotificationTemplate]:
        return db.query(self.model).filter(
            self.model.template_key == template_key,
            self.model.is_active == True
        ).first()

    def get_all_ordered(self, db: Session) -> List[NotificationTemplate]:
        return db.query(self.model).order_by(self.model.name.asc()).all()

class CRUDNotificationPreferences(CRUDBase[NotificationPreferences, NotificationPreferencesUpdate, NotificationPreferencesUpdate]):
    """CRUD operations for NotificationPreferences."""

    def get_by_user_id(self, db: Session, *, user_id: str) -> Optional[NotificationPreferences]:
        return db.query(self.model).filter(self.model.user_id == user_id).first()

notification = CRUDNotification(Notification)
notification_template = CRUDNotificationTemplate(NotificationTemplate)
notification_preferences = CRUDNotificationPreferences(NotificationPreferences)
