"""App factory: builds every component explicitly and wires the HTTP surface."""
from __future__ import annotations

from dataclasses import dataclass
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from accounts.core.config import Settings, get_settings
from accounts.core.logging_setup import configure_logging
from accounts.core.security import CredentialHasher
from accounts.core.tokens import TokenIssuer
from accounts.repositories.sql_repository import SQLRepository
from accounts.routers import auth as auth_router
from accounts.services.business_service import BusinessService
from accounts.services.errors import ServiceError
from accounts.services.notification_service import NotificationService
from accounts.services.role_service import RoleService
from accounts.services.user_service import UserService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    roles: RoleService
    businesses: BusinessService
    notifications: NotificationService
    users: UserService


def build_services(settings: Settings, notifications: NotificationService | None = None) -> Services:
    repository = SQLRepository(settings.database_url)
    roles = RoleService(repository)
    businesses = BusinessService(repository)
    notifications = notifications or NotificationService(settings)
    users = UserService(
        settings=settings,
        repository=repository,
        roles=roles,
        businesses=businesses,
        notifications=notifications,
        hasher=CredentialHasher(settings.password_hash_cost),
        tokens=TokenIssuer(settings.token_secret),
    )
    return Services(roles=roles, businesses=businesses, notifications=notifications, users=users)


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(settings: Settings | None = None, services: Services | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Tenant Accounts API")
    app.state.settings = settings
    app.state.services = services or build_services(settings)
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.include_router(auth_router.router)
    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting accounts service on port %s (%s)", settings.port, settings.app_env)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
