"""Business (tenant) registration."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from accounts.db.models import Business
from accounts.repositories.sql_repository import SQLRepository


class BusinessService:
    """Register-or-get by name; calling twice with the same name returns the same row."""

    def __init__(self, repository: SQLRepository) -> None:
        self.repository = repository

    def register(self, name: str) -> Business:
        existing = self.repository.get_business_by_name(name)
        if existing:
            return existing
        try:
            return self.repository.create_business(name)
        except IntegrityError:
            # lost a race with a concurrent registration of the same name
            business = self.repository.get_business_by_name(name)
            if business is None:
                raise
            return business
