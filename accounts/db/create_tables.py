"""Create the schema and seed the roles registration depends on."""
from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from accounts.core.config import get_settings
from accounts.core.logging_setup import configure_logging

from .session import Base, get_engine, get_session
from .models import Role

logger = logging.getLogger(__name__)

DEFAULT_ROLES = ("Owner",)


def create_all(url: str) -> None:
    engine = get_engine(url)
    Base.metadata.create_all(bind=engine)


def bootstrap_roles(url: str, names: Iterable[str] = DEFAULT_ROLES) -> list[str]:
    """Insert any missing role; returns the names that were created."""
    created: list[str] = []
    with get_session(url) as session:
        existing = set(session.execute(select(Role.name)).scalars().all())
        for name in names:
            if name in existing:
                continue
            session.add(Role(name=name))
            created.append(name)
        session.commit()
    for name in created:
        logger.info("Created role %s", name)
    return created


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        create_all(settings.database_url)
        bootstrap_roles(settings.database_url)
        logger.info("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
