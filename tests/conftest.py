import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.database import Base
from app.models import notification as notification_models  # noqa: F401
from app.schemas.notification import NotificationTemplateCreate
from tests.helpers.fakes import FakeEmailService
from tests.helpers.seed import DEFAULT_TEMPLATES
from app.services.notification import NotificationService, notification_service as app_notification_service
from app.utils import deps
import main

test_db_url = settings.TEST_DATABASE_URL or "sqlite://"

@pytest.fixture(scope="function")
def database_engine():
    if test_db_url.startswith("sqlite"):
        engine = create_engine(test_db_url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    else:
        engine = create_engine(test_db_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture
def email_outbox():
    return FakeEmailService()

@pytest.fixture
def service(email_outbox):
    return NotificationService(email_service=email_outbox, app_name="OwnItRight")

@pytest.fixture
def seeded_templates(db_session, service):
    return [
        service.create_template(db_session, template_in=NotificationTemplateCreate(**data))
        for data in DEFAULT_TEMPLATES
    ]

@pytest.fixture(scope="function")
def client(db_session, email_outbox, monkeypatch):
    monkeypatch.setattr(app_notification_service, "email_service", email_outbox)
    main.app.dependency_overrides[deps.get_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()

@pytest.fixture
def token_for():
    def _token_for(user_id: str, role: str = None) -> str:
        payload = {"sub": user_id}
        if role:
            payload["role"] = role
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return _token_for

@pytest.fixture
def auth_headers(token_for):
    def _auth_headers(user_id: str, role: str = None) -> dict:
        return {"Authorization": f"Bearer {token_for(user_id, role)}"}
    return _auth_headers

@pytest.fixture
def admin_headers(auth_headers):
    return auth_headers("admin@ownitright.com", role="admin")
