from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models.notification import Notification

API = "/api/notifications"


def _create(client: TestClient, admin_headers: dict, **payload) -> dict:
    body = {"title": "Report ready", "message": "Your valuation report is ready", "category": "report", **payload}
    response = client.post(f"{API}/", json=body, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_requires_authentication(client: TestClient):
    response = client.get(f"{API}/")
    assert response.status_code in (401, 403)


def test_list_shows_personal_and_broadcast(client: TestClient, admin_headers, auth_headers):
    _create(client, admin_headers, user_id="alice@example.com", title="For Alice")
    _create(client, admin_headers, user_id="bob@example.com", title="For Bob")
    _create(client, admin_headers, user_id=None, user_type="all", title="For everyone", category="system")

    response = client.get(f"{API}/", headers=auth_headers("alice@example.com"))

    assert response.status_code == 200
    data = response.json()["data"]
    assert {n["title"] for n in data["notifications"]} == {"For Alice", "For everyone"}
    assert data["total"] == 2
    assert data["unread_count"] == 2


def test_list_filters_by_category(client: TestClient, admin_headers, auth_headers):
    _create(client, admin_headers, user_id="alice@example.com", title="Report", category="report")
    _create(client, admin_headers, user_id="alice@example.com", title="Booking", category="booking")

    response = client.get(f"{API}/", params={"category": "booking"}, headers=auth_headers("alice@example.com"))

    data = response.json()["data"]
    assert [n["title"] for n in data["notifications"]] == ["Booking"]
    assert data["total"] == 1
    assert data["unread_count"] == 2


def test_list_rejects_unknown_category(client: TestClient, auth_headers):
    response = client.get(f"{API}/", params={"category": "gossip"}, headers=auth_headers("alice@example.com"))
    assert response.status_code == 422


def test_list_rejects_out_of_range_paging(client: TestClient, auth_headers):
    headers = auth_headers("alice@example.com")

    for params in ({"limit": 500}, {"limit": 0}, {"offset": -1}):
        response = client.get(f"{API}/", params=params, headers=headers)
        assert response.status_code == 422, params
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_mark_read_and_unread_count(client: TestClient, admin_headers, auth_headers):
    created = _create(client, admin_headers, user_id="alice@example.com")
    headers = auth_headers("alice@example.com")

    assert client.get(f"{API}/unread_count", headers=headers).json()["data"] == 1
    response = client.post(f"{API}/{created['id']}/read", headers=headers)
    assert response.status_code == 200
    assert client.get(f"{API}/unread_count", headers=headers).json()["data"] == 0


def test_cannot_mark_someone_elses_notification(client: TestClient, admin_headers, auth_headers, db_session: Session):
    created = _create(client, admin_headers, user_id="alice@example.com")

    response = client.post(f"{API}/{created['id']}/read", headers=auth_headers("bob@example.com"))

    assert response.status_code == 404
    assert db_session.get(Notification, created["id"]).is_read is False


def test_mark_all_read(client: TestClient, admin_headers, auth_headers):
    for i in range(3):
        _create(client, admin_headers, user_id="alice@example.com", title=f"N{i}")
    headers = auth_headers("alice@example.com")

    assert client.post(f"{API}/mark_all_read", headers=headers).json()["data"] == 3
    assert client.post(f"{API}/mark_all_read", headers=headers).json()["data"] == 0


def test_archive(client: TestClient, admin_headers, auth_headers):
    created = _create(client, admin_headers, user_id="alice@example.com")

    assert client.post(f"{API}/{created['id']}/archive", headers=auth_headers("bob@example.com")).status_code == 404
    assert client.post(f"{API}/{created['id']}/archive", headers=auth_headers("alice@example.com")).status_code == 200

    listed = client.get(f"{API}/", headers=auth_headers("alice@example.com")).json()["data"]["notifications"]
    assert listed[0]["is_archived"] is True


def test_admin_routes_reject_regular_users(client: TestClient, auth_headers):
    headers = auth_headers("alice@example.com")
    body = {"user_id": "bob@example.com", "title": "x", "message": "y"}

    assert client.post(f"{API}/", json=body, headers=headers).status_code == 403
    assert client.post(f"{API}/bulk", json=[body], headers=headers).status_code == 403
    assert client.post(f"{API}/system", json={"title": "x", "message": "y"}, headers=headers).status_code == 403


def test_personal_notification_without_user_is_rejected(client: TestClient, admin_headers):
    response = client.post(f"{API}/", json={"title": "x", "message": "y", "user_type": "user"}, headers=admin_headers)
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_create_sends_email(client: TestClient, admin_headers, email_outbox):
    created = _create(client, admin_headers, user_id="alice@example.com")

    assert [mail["to"] for mail in email_outbox.sent] == ["alice@example.com"]
    assert created["user_type"] == "user"


def test_bulk_create(client: TestClient, admin_headers, auth_headers):
    body = [
        {"user_id": "alice@example.com", "title": "One", "message": "1"},
        {"user_id": "bob@example.com", "title": "Two", "message": "2"},
    ]

    response = client.post(f"{API}/bulk", json=body, headers=admin_headers)

    assert response.status_code == 201
    assert len(response.json()["data"]) == 2
    assert client.get(f"{API}/unread_count", headers=auth_headers("bob@example.com")).json()["data"] == 1


def test_system_message_reaches_everyone(client: TestClient, admin_headers, auth_headers):
    response = client.post(f"{API}/system", json={"title": "Maintenance", "message": "Tonight", "priority": "high"}, headers=admin_headers)
    assert response.status_code == 201

    for user in ["alice@example.com", "bob@example.com"]:
        titles = [n["title"] for n in client.get(f"{API}/", headers=auth_headers(user)).json()["data"]["notifications"]]
        assert titles == ["Maintenance"]


def test_from_template(client: TestClient, admin_headers, seeded_templates):
    response = client.post(f"{API}/from_template", json={
        "template_key": "REPORT_READY",
        "user_id": "alice@example.com",
        "variables": {"report_type": "Legal", "property_name": "Palm Meadows"},
        "extra_data": {"source": "admin"},
    }, headers=admin_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["title"] == "Legal Report Ready"
    assert data["extra_data"] == {"source": "admin"}


def test_from_unknown_template(client: TestClient, admin_headers):
    response = client.post(f"{API}/from_template", json={"template_key": "NOPE", "user_id": "alice@example.com"}, headers=admin_headers)
    assert response.status_code == 404


def test_from_template_rejects_bad_reserved_variables(client: TestClient, admin_headers, seeded_templates):
    for variables in ({"entity_type": "invoice"}, {"action_url": 42}, {"action_text": ["View"]}):
        response = client.post(f"{API}/from_template", json={
            "template_key": "REPORT_READY", "user_id": "alice@example.com", "variables": variables,
        }, headers=admin_headers)

        assert response.status_code == 422, variables
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_test_notification(client: TestClient, auth_headers):
    headers = auth_headers("alice@example.com")

    response = client.post(f"{API}/test", headers=headers)

    assert response.status_code == 200
    assert response.json()["data"]["user_id"] == "alice@example.com"
    assert client.get(f"{API}/unread_count", headers=headers).json()["data"] == 1


def test_responses_carry_request_id(client: TestClient, auth_headers):
    response = client.get(f"{API}/unread_count", headers=auth_headers("alice@example.com"))

    assert response.headers["X-Request-ID"]


def test_error_envelope_uses_request_id(client: TestClient, auth_headers):
    response = client.post(f"{API}/9999/read", headers=auth_headers("alice@example.com"))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
    assert response.json()["request_id"] == response.headers["X-Request-ID"]
