from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from staffdesk.api.deps import get_current_user, get_position_repository
from staffdesk.core.security import TokenClaims
from staffdesk.repositories import PositionRepository

router = APIRouter(prefix="/positions", tags=["positions"])


class PositionCreate(BaseModel):
    name: str = ""


class PositionOut(BaseModel):
    id: int
    name: str
    created_at: datetime


@router.get("", response_model=list[PositionOut])
def list_positions(positions: PositionRepository = Depends(get_position_repository)):
    return [PositionOut(id=p.id, name=p.name, created_at=p.created_at) for p in positions.list()]


@router.post("", response_model=PositionOut, status_code=201)
def create_position(
    payload: PositionCreate,
    positions: PositionRepository = Depends(get_position_repository),
    _: TokenClaims = Depends(get_current_user),
):
    row = positions.create(payload.name)
    return PositionOut(id=row.id, name=row.name, created_at=row.created_at)


@router.delete("/{position_id}", status_code=204)
def delete_position(
    position_id: int,
    positions: PositionRepository = Depends(get_position_repository),
    _: TokenClaims = Depends(get_current_user),
):
    positions.delete(position_id)
    return None
