"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.orm import selectinload

from accounts.db.models import Business, Role, User
from accounts.db.session import get_session


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url

    def _session(self):
        return get_session(self.database_url)

    @staticmethod
    def _user_query():
        return select(User).options(selectinload(User.role), selectinload(User.businesses))

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        with self._session() as session:
            stmt = self._user_query().where(User.id == user_id)
            return session.execute(stmt).scalar_one_or_none()

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as session:
            stmt = self._user_query().where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def get_user_by_phone_number(self, phone_number: str) -> Optional[User]:
        with self._session() as session:
            stmt = self._user_query().where(User.phone_number == phone_number)
            return session.execute(stmt).scalar_one_or_none()

    def find_users_by_email_or_phone(self, email: str, phone_number: str) -> list[User]:
        with self._session() as session:
            stmt = select(User).where(or_(User.email == email, User.phone_number == phone_number))
            return list(session.execute(stmt).scalars().all())

    def create_user(
        self,
        *,
        email: str,
        phone_number: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        token: str | None,
        role_id: str,
        business_ids: Iterable[str],
    ) -> User:
        """Insert a user linked to one role and the given businesses.

        Raises sqlalchemy.exc.IntegrityError when a unique column collides.
        """
        now = datetime.now(timezone.utc)
        with self._session() as session:
            user = User(
                email=email,
                phone_number=phone_number,
                password_hash=password_hash,
                first_name=first_name,
                last_name=last_name,
                token=token,
                created_at=now,
                updated_at=now,
            )
            user.role = session.get(Role, role_id)
            user.businesses = [session.get(Business, business_id) for business_id in business_ids]
            session.add(user)
            session.commit()
            stmt = self._user_query().where(User.id == user.id)
            return session.execute(stmt).scalar_one()

    def update_user_token(self, user_id: str, token: str | None) -> None:
        with self._session() as session:
            stmt = (
                update(User)
                .where(User.id == user_id)
                .values(token=token, updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    def update_user_password(self, user_id: str, password_hash: str) -> None:
        with self._session() as session:
            stmt = (
                update(User)
                .where(User.id == user_id)
                .values(password_hash=password_hash, updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    def set_user_verified(self, user_id: str) -> None:
        now = datetime.now(timezone.utc)
        with self._session() as session:
            stmt = update(User).where(User.id == user_id).values(email_verified_at=now, updated_at=now)
            session.execute(stmt)
            session.commit()

    # -------------------------- roles --------------------------
    def get_role_by_name(self, name: str) -> Optional[Role]:
        with self._session() as session:
            stmt = select(Role).where(Role.name == name)
            return session.execute(stmt).scalar_one_or_none()

    def create_role(self, name: str) -> Role:
        entity = Role(name=name, created_at=datetime.now(timezone.utc))
        with self._session() as session:
            session.add(entity)
            session.commit()
            return entity

    # -------------------------- businesses --------------------------
    def get_business_by_name(self, name: str) -> Optional[Business]:
        with self._session() as session:
            stmt = select(Business).where(Business.name == name)
            return session.execute(stmt).scalar_one_or_none()

    def create_business(self, name: str) -> Business:
        entity = Business(name=name, created_at=datetime.now(timezone.utc))
        with self._session() as session:
            session.add(entity)
            session.commit()
            return entity
