"""
Registration, business-scoped login and email verification.
"""

from __future__ import annotations

import logging
from typing import Dict

from sqlalchemy.exc import IntegrityError

from accounts.core.config import Settings
from accounts.core.security import CredentialHasher
from accounts.core.tokens import TokenIssuer
from accounts.core.utils import absolute_url, is_email
from accounts.db.models import User
from accounts.repositories.sql_repository import SQLRepository
from accounts.services.business_service import BusinessService
from accounts.services.errors import ConflictError, InvalidCredentialsError, TokenInvalidError
from accounts.services.notification_service import NotificationService
from accounts.services.role_service import RoleService

logger = logging.getLogger(__name__)

OWNER_ROLE = "Owner"
EMAIL_EXISTS = "Email already exist"
PHONE_EXISTS = "Phone Number already exist"
INVALID_CREDENTIALS = "Invalid credentials"
INVALID_TOKEN = "Invalid or expired token"


class UserService:
    """Handles registration, login and verification of business owners."""

    def __init__(
        self,
        settings: Settings,
        repository: SQLRepository,
        roles: RoleService,
        businesses: BusinessService,
        notifications: NotificationService,
        hasher: CredentialHasher,
        tokens: TokenIssuer,
    ) -> None:
        self.settings = settings
        self.repository = repository
        self.roles = roles
        self.businesses = businesses
        self.notifications = notifications
        self.hasher = hasher
        self.tokens = tokens

    # -------------------------------------- helpers --------------------------------------
    def _conflict_messages(self, email: str, phone_number: str) -> Dict[str, str]:
        matches = self.repository.find_users_by_email_or_phone(email, phone_number)
        messages: Dict[str, str] = {}
        if len(matches) == 1:
            if matches[0].phone_number == phone_number:
                messages["phoneNumber"] = PHONE_EXISTS
            if matches[0].email == email:
                messages["email"] = EMAIL_EXISTS
        elif len(matches) >= 2:
            # two rows can only mean one matched each field
            messages = {"email": EMAIL_EXISTS, "phoneNumber": PHONE_EXISTS}
        return messages

    def _verification_link(self, token: str) -> str:
        return absolute_url(f"/verification?token={token}", self.settings.public_base_url)

    def _send_verification(self, user: User, token: str) -> bool:
        sent = self.notifications.verification_email(user.email, user.first_name, self._verification_link(token))
        if sent:
            logger.info("Verification email sent to %s", user.email)
        else:
            logger.warning("Verification email to %s was not delivered", user.email)
        return sent

    # -------------------------------------- registration --------------------------------------
    def register(
        self,
        email: str,
        business_name: str,
        phone_number: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> User:
        messages = self._conflict_messages(email, phone_number)
        if messages:
            raise ConflictError(messages)

        token = self.tokens.generate_email_token(email)
        password_hash = self.hasher.hash(password)
        role = self.roles.get_role_by_name(OWNER_ROLE)
        business = self.businesses.register(business_name)
        try:
            user = self.repository.create_user(
                email=email,
                phone_number=phone_number,
                password_hash=password_hash,
                first_name=first_name,
                last_name=last_name,
                token=token,
                role_id=role.id,
                business_ids=[business.id],
            )
        except IntegrityError as exc:
            # a concurrent registration won the unique constraint
            messages = self._conflict_messages(email, phone_number) or {
                "email": EMAIL_EXISTS,
                "phoneNumber": PHONE_EXISTS,
            }
            raise ConflictError(messages) from exc

        self._send_verification(user, token)
        return user

    # -------------------------------------- login --------------------------------------
    def login(self, business_name: str, phone_number_or_email: str, password: str) -> User:
        if is_email(phone_number_or_email):
            user = self.repository.get_user_by_email(phone_number_or_email)
        else:
            user = self.repository.get_user_by_phone_number(phone_number_or_email)
        if not user:
            raise InvalidCredentialsError({"phoneNumberOrEmail": INVALID_CREDENTIALS})

        if not self.hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError({"password": INVALID_CREDENTIALS})

        if not any(business.name == business_name for business in user.businesses):
            raise InvalidCredentialsError({"businessName": INVALID_CREDENTIALS})

        if self.hasher.needs_rehash(user.password_hash):
            new_hash = self.hasher.hash(password)
            self.repository.update_user_password(user.id, new_hash)
            user.password_hash = new_hash
        return user

    # -------------------------------------- tokens --------------------------------------
    def update_token(self, user_id: str, token: str) -> None:
        self.repository.update_user_token(user_id, token)

    def verify_email(self, token: str) -> User:
        token_value = (token or "").strip()
        if not token_value:
            raise TokenInvalidError({"token": INVALID_TOKEN})
        try:
            claims = self.tokens.decode_email_token(token_value)
        except ValueError as exc:
            raise TokenInvalidError({"token": INVALID_TOKEN}) from exc
        user = self.repository.get_user_by_email(claims["email"])
        # only the most recently issued token is honoured
        if not user or user.token != token_value:
            raise TokenInvalidError({"token": INVALID_TOKEN})
        if not user.email_verified_at:
            self.repository.set_user_verified(user.id)
        return self.repository.get_user(user.id)

    def resend_verification(self, email: str) -> bool:
        email = (email or "").strip()
        if not email:
            return False
        user = self.repository.get_user_by_email(email)
        if not user or user.email_verified_at:
            return False
        token = self.tokens.generate_email_token(email)
        self.update_token(user.id, token)
        return self._send_verification(user, token)
