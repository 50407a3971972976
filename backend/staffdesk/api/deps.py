from datetime import timedelta
from functools import lru_cache
from typing import Iterator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from staffdesk.core.config import Settings, settings
from staffdesk.core.errors import AuthError
from staffdesk.core.security import TokenClaims, TokenIssuer
from staffdesk.repositories import AdminUserRepository, EmployeeRepository, PositionRepository
from staffdesk.services.auth import AuthService
from staffdesk.storage import Storage
from staffdesk.storage.factory import open_storage

bearer_scheme = HTTPBearer(auto_error=False)


def get_storage_settings() -> Settings:
    return settings


def get_storage(config: Settings = Depends(get_storage_settings)) -> Iterator[Storage]:
    with open_storage(config) as storage:
        yield storage


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(
        settings.jwt_secret,
        ttl=timedelta(hours=settings.token_ttl_hours),
        algorithm=settings.jwt_algorithm,
    )


def get_employee_repository(storage: Storage = Depends(get_storage)) -> EmployeeRepository:
    return EmployeeRepository(storage)


def get_position_repository(storage: Storage = Depends(get_storage)) -> PositionRepository:
    return PositionRepository(storage)


def get_admin_user_repository(storage: Storage = Depends(get_storage)) -> AdminUserRepository:
    return AdminUserRepository(storage)


def get_auth_service(
    users: AdminUserRepository = Depends(get_admin_user_repository),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(users, issuer)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenClaims:
    if credentials is None or not credentials.credentials:
        raise AuthError("Access token required")
    return issuer.validate(credentials.credentials)
