from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.constants import NotificationCategoryEnum
from app.models.notification import Notification
from app.schemas.notification import NotificationCreate, NotificationPreferencesUpdate
from app.services.notification import NotificationService


def test_booking_confirmed_end_to_end(db_session: Session, service: NotificationService, email_outbox, seeded_templates):
    n = service.notify_booking_confirmed(db_session, user_id="alice@x.com", booking_id="bk_1", property_name="Lakeview Apartments")

    rows = db_session.query(Notification).all()
    assert len(rows) == 1
    assert rows[0].id == n.id
    assert n.category == NotificationCategoryEnum.BOOKING
    assert "bk_1" in n.action_url
    assert "Lakeview Apartments" in n.title + n.message
    assert [mail["to"] for mail in email_outbox.sent] == ["alice@x.com"]
    assert "Lakeview Apartments" in email_outbox.sent[0]["subject"]
    db_session.refresh(n)
    assert n.email_sent is True


def test_booking_flow_through_inbox(client: TestClient, db_session: Session, auth_headers, email_outbox, seeded_templates):
    from app.services.notification import notification_service

    notification_service.notify_booking_confirmed(db_session, user_id="alice@x.com", booking_id="bk_9", property_name="Palm Meadows")
    notification_service.notify_payment_received(db_session, user_id="alice@x.com", amount=2500, service="Site Visit", payment_id="pay_9")
    notification_service.notify_system_message(db_session, title="New: Legal tracker", message="Track your due diligence")
    headers = auth_headers("alice@x.com")

    inbox = client.get("/api/notifications/", headers=headers).json()["data"]
    assert inbox["total"] == 3
    assert inbox["unread_count"] == 3
    assert inbox["notifications"][0]["title"] == "New: Legal tracker"

    booking = next(n for n in inbox["notifications"] if n["category"] == "booking")
    client.post(f"/api/notifications/{booking['id']}/read", headers=headers)
    assert client.get("/api/notifications/unread_count", headers=headers).json()["data"] == 2

    assert client.post("/api/notifications/mark_all_read", headers=headers).json()["data"] == 2
    assert len(email_outbox.sent) == 2


def test_opted_out_user_still_gets_in_app_notification(db_session: Session, service: NotificationService, email_outbox, seeded_templates):
    service.update_user_preferences(db_session, user_id="bob@x.com", preferences_in=NotificationPreferencesUpdate(
        email_notifications=False
    ))

    service.create_notification(db_session, notification_in=NotificationCreate(
        user_id="bob@x.com", title="Price update", message="Green Acres dropped 5%", category="property"
    ))
    assert email_outbox.sent == []

    n = service.notify_property_match(db_session, user_id="bob@x.com", property_id="p_3", property_name="Green Acres", location="Sarjapur")

    assert n is not None
    # Seeded templates send their own email regardless of preferences
    assert [mail["to"] for mail in email_outbox.sent] == ["bob@x.com"]
    assert service.get_unread_count(db_session, user_id="bob@x.com") == 2
