from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from staffdesk.api.deps import get_auth_service, get_current_user
from staffdesk.core.security import TokenClaims
from staffdesk.domains.admin_users.router import AdminUserOut, sanitize
from staffdesk.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: AdminUserOut


class SessionOut(BaseModel):
    id: int
    username: str
    expires_at: datetime


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)) -> LoginResponse:
    result = auth.login(payload.username, payload.password)
    return LoginResponse(token=result.token, user=sanitize(result.user))


@router.get("/me", response_model=SessionOut)
def current_session(current: TokenClaims = Depends(get_current_user)) -> SessionOut:
    return SessionOut(id=current.user_id, username=current.username, expires_at=current.expires_at)
