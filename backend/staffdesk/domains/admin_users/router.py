from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from staffdesk.api.deps import get_admin_user_repository, get_current_user
from staffdesk.core.security import TokenClaims
from staffdesk.repositories import AdminUserRepository
from staffdesk.storage import AdminUserRecord

router = APIRouter(prefix="/admin/users", tags=["admin"])


class AdminUserCreate(BaseModel):
    username: str = ""
    password: str = ""


class AdminUserOut(BaseModel):
    id: int
    username: str
    created_at: datetime


def sanitize(user: AdminUserRecord) -> AdminUserOut:
    return AdminUserOut(id=user.id, username=user.username, created_at=user.created_at)


@router.get("", response_model=list[AdminUserOut])
def list_admin_users(
    users: AdminUserRepository = Depends(get_admin_user_repository),
    _: TokenClaims = Depends(get_current_user),
) -> list[AdminUserOut]:
    return [sanitize(user) for user in users.list()]


@router.post("", response_model=AdminUserOut, status_code=201)
def create_admin_user(
    payload: AdminUserCreate,
    users: AdminUserRepository = Depends(get_admin_user_repository),
    current: TokenClaims = Depends(get_current_user),
) -> AdminUserOut:
    user = users.create(payload.username, payload.password, actor=current.username)
    return sanitize(user)


@router.delete("/{user_id}", status_code=204)
def delete_admin_user(
    user_id: int,
    users: AdminUserRepository = Depends(get_admin_user_repository),
    current: TokenClaims = Depends(get_current_user),
) -> None:
    users.delete(user_id, actor_id=current.user_id)
    return None
