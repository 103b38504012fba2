from __future__ import annotations

from fastapi import APIRouter, Request, status

from accounts.schemas import (
    CreateRoleDTO,
    CreateUserDTO,
    LoginUserDTO,
    ResendVerificationDTO,
    RolePublic,
    UserPublic,
)

router = APIRouter(prefix="/auth", tags=["auth"])


def _services(request: Request):
    return request.app.state.services


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(payload: CreateUserDTO, request: Request):
    user = _services(request).users.register(
        email=payload.email,
        business_name=payload.businessName,
        phone_number=payload.phoneNumber,
        password=payload.password,
        first_name=payload.firstName,
        last_name=payload.lastName,
    )
    return UserPublic.model_validate(user)


@router.post("/login", response_model=UserPublic)
def login(payload: LoginUserDTO, request: Request):
    user = _services(request).users.login(
        business_name=payload.businessName,
        phone_number_or_email=payload.phoneNumberOrEmail,
        password=payload.password,
    )
    return UserPublic.model_validate(user)


@router.post("/roles", response_model=RolePublic, status_code=status.HTTP_201_CREATED)
def create_role(payload: CreateRoleDTO, request: Request):
    role = _services(request).roles.create_role(payload.name)
    return RolePublic.model_validate(role)


@router.get("/verification", response_model=UserPublic)
def verify(request: Request, token: str = ""):
    user = _services(request).users.verify_email(token)
    return UserPublic.model_validate(user)


@router.post("/verification/resend", status_code=status.HTTP_202_ACCEPTED)
def resend_verification(payload: ResendVerificationDTO, request: Request):
    sent = _services(request).users.resend_verification(payload.email)
    return {"sent": sent}
