from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the accounts package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from accounts.app import build_services  # noqa: E402
from accounts.core.config import Settings  # noqa: E402
from accounts.db import models  # noqa: E402
from accounts.db import session as db_session  # noqa: E402
from accounts.db.create_tables import bootstrap_roles, create_all  # noqa: E402
from accounts.repositories.sql_repository import SQLRepository  # noqa: E402
from accounts.services.notification_service import NotificationService  # noqa: E402


class Outbox:
    """Stand-in for the SMTP sender that records every message."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.messages: list[dict] = []

    def __call__(self, settings, subject, to_email, html_body, text_body=None) -> bool:
        self.messages.append(
            {"subject": subject, "to": to_email, "html": html_body, "text": text_body}
        )
        return self.result


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        public_base_url="https://accounts.test",
        password_hash_cost=1,
        token_secret="test-secret-with-enough-entropy-0123456789",
    )


@pytest.fixture()
def db_env(settings):
    """Temporary SQLite schema; disposes the engine so the file is not left locked."""
    url = settings.database_url
    create_all(url)

    yield url

    engine = db_session.get_engine(url)
    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def owner_role(db_env):
    bootstrap_roles(db_env)


@pytest.fixture()
def repo(db_env) -> SQLRepository:
    return SQLRepository(db_env)


@pytest.fixture()
def outbox() -> Outbox:
    return Outbox()


@pytest.fixture()
def services(settings, db_env, outbox):
    return build_services(settings, notifications=NotificationService(settings, sender=outbox))
