"""Request and response models for the HTTP surface."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from accounts.core.utils import is_email


def _check_email(value: str) -> str:
    # format check only; the address is stored exactly as sent
    if not is_email(value):
        raise ValueError("value is not a valid email address")
    return value


RawEmail = Annotated[str, AfterValidator(_check_email)]


class CreateRoleDTO(BaseModel):
    name: str = Field(min_length=1, max_length=64)


class CreateUserDTO(BaseModel):
    email: RawEmail
    businessName: str = Field(min_length=1, max_length=255)
    phoneNumber: str = Field(min_length=3, max_length=32)
    password: str = Field(min_length=6)
    firstName: str = Field(min_length=1, max_length=128)
    lastName: str = Field(min_length=1, max_length=128)


class LoginUserDTO(BaseModel):
    businessName: str = Field(min_length=1)
    phoneNumberOrEmail: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ResendVerificationDTO(BaseModel):
    email: RawEmail


class RolePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class BusinessPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class UserPublic(BaseModel):
    """User as exposed to clients; never carries the password hash or token."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    email: str
    phoneNumber: str = Field(validation_alias="phone_number")
    firstName: str = Field(validation_alias="first_name")
    lastName: str = Field(validation_alias="last_name")
    emailVerifiedAt: Optional[datetime] = Field(default=None, validation_alias="email_verified_at")
    role: Optional[RolePublic] = None
    businesses: List[BusinessPublic] = []
