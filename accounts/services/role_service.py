"""Role lookup and creation."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from accounts.db.models import Role
from accounts.repositories.sql_repository import SQLRepository
from accounts.services.errors import ConflictError, NotFoundError

ROLE_EXISTS = "Role already exist"
ROLE_MISSING = "Role does not exist"


class RoleService:
    def __init__(self, repository: SQLRepository) -> None:
        self.repository = repository

    def create_role(self, name: str) -> Role:
        if self.repository.get_role_by_name(name):
            raise ConflictError({"name": ROLE_EXISTS})
        try:
            return self.repository.create_role(name)
        except IntegrityError as exc:
            raise ConflictError({"name": ROLE_EXISTS}) from exc

    def get_role_by_name(self, name: str) -> Role:
        role = self.repository.get_role_by_name(name)
        if not role:
            raise NotFoundError({"name": ROLE_MISSING})
        return role
