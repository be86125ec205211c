from typing import Optional

from fastapi import APIRouter, Body, Depends, Path

from torneos.db import Database, get_db
from torneos.repositories.team_repository import TeamRepository
from torneos.repositories.tournament_repository import TournamentRepository
from torneos.schemas.team import (
    MessageResponse, TeamCreate, TeamListResponse, TeamPlayersResponse,
    TeamResponse, TeamUpdate,
)
from torneos.services.team_service import TeamService
from torneos.utils.auth import require_roles
from torneos.utils.permissions import TEAM_ROLE_GATES, TeamAction

router = APIRouter()


def get_team_service(db: Database = Depends(get_db)) -> TeamService:
    return TeamService(TeamRepository(db), TournamentRepository(db))


@router.get("", response_model=TeamListResponse)
async def list_teams(service: TeamService = Depends(get_team_service)):
    return await service.list_teams()


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    team_data: TeamCreate,
    current_user: dict = Depends(require_roles(TEAM_ROLE_GATES[TeamAction.CREATE])),
    service: TeamService = Depends(get_team_service),
):
    """Create a team (admin, organizador or delegado)"""
    return await service.create_team(team_data, current_user)


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(
    team_id: int = Path(..., gt=0),
    service: TeamService = Depends(get_team_service),
):
    return await service.get_team(team_id)


@router.put("/{team_id}", response_model=TeamResponse)
async def update_team(
    team_id: int = Path(..., gt=0),
    team_update: Optional[TeamUpdate] = Body(None),
    current_user: dict = Depends(require_roles(TEAM_ROLE_GATES[TeamAction.UPDATE])),
    service: TeamService = Depends(get_team_service),
):
    """Partially update a team; fields left out keep their stored value"""
    # No body at all is an empty patch
    return await service.update_team(team_id, team_update or TeamUpdate(), current_user)


@router.delete("/{team_id}", response_model=MessageResponse)
async def delete_team(
    team_id: int = Path(..., gt=0),
    current_user: dict = Depends(require_roles(TEAM_ROLE_GATES[TeamAction.DELETE])),
    service: TeamService = Depends(get_team_service),
):
    """Delete a team and, through the cascade, its players"""
    return await service.delete_team(team_id, current_user)


@router.get("/{team_id}/jugadores", response_model=TeamPlayersResponse)
async def list_team_players(
    team_id: int = Path(..., gt=0),
    service: TeamService = Depends(get_team_service),
):
    return await service.list_players(team_id)
