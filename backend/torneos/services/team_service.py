"""
Team service: the request handlers behind the /equipos routes.

Each handler runs a straight pipeline (preconditions, authorization,
repository call, response envelope) and stops at the first failed step by
raising one of the errors in ``torneos.utils.errors``. Storage failures and
anything unexpected are reported as an InternalError carrying the
operation's generic message plus the underlying error description.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict

from torneos.models.team import TeamPatch
from torneos.repositories.team_repository import DUPLICATE_NAME_MESSAGE, TeamRepository
from torneos.repositories.tournament_repository import TournamentRepository
from torneos.schemas.team import TeamCreate, TeamUpdate
from torneos.utils.errors import (
    AppError, ConflictError, ForbiddenError, InternalError, NotFoundError,
    PersistenceError,
)
from torneos.utils.logger import EventTypes, log_event
from torneos.utils.permissions import TeamAction, is_allowed

logger = logging.getLogger(__name__)

TEAM_NOT_FOUND = "Team not found"


@contextmanager
def handler_boundary(message: str):
    try:
        yield
    except PersistenceError as e:
        logger.error("%s: %s", message, e.message)
        raise InternalError(message, error=e.message) from e
    except AppError:
        raise
    except Exception as e:
        logger.exception("%s: %s", message, e)
        raise InternalError(message, error=str(e)) from e


class TeamService:

    def __init__(self, teams: TeamRepository, tournaments: TournamentRepository):
        self.teams = teams
        self.tournaments = tournaments

    async def _find_or_404(self, team_id: int) -> Dict[str, Any]:
        team = await self.teams.find_by_id(team_id)
        if not team:
            raise NotFoundError(TEAM_NOT_FOUND)
        return team

    async def list_teams(self) -> Dict[str, Any]:
        with handler_boundary("Error fetching teams"):
            teams = await self.teams.list_all()

        return {
            "success": True,
            "message": "Teams fetched successfully",
            "data": teams,
            "total": len(teams),
        }

    async def create_team(self, team_data: TeamCreate, current_user: dict) -> Dict[str, Any]:
        """Create a team in an existing tournament. The role gate is the whole create check."""
        with handler_boundary("Error creating team"):
            tournament = await self.tournaments.find_by_id(team_data.torneo_id)
            if not tournament:
                raise NotFoundError("The specified tournament does not exist")

            if await self.teams.name_exists_in_tournament(team_data.nombre, team_data.torneo_id):
                raise ConflictError(DUPLICATE_NAME_MESSAGE)

            # The insert can still lose a race against a concurrent create;
            # the repository turns that into the same ConflictError.
            new_team = await self.teams.create(team_data.model_dump())

        await log_event(self.teams.db, EventTypes.TEAM_CREATED, {
            "team_id": new_team["id"],
            "torneo_id": new_team["torneo_id"],
        }, user_id=current_user.get("id"))

        return {
            "success": True,
            "message": "Team created successfully",
            "data": new_team,
        }

    async def get_team(self, team_id: int) -> Dict[str, Any]:
        with handler_boundary("Error fetching team"):
            team = await self._find_or_404(team_id)

        return {
            "success": True,
            "message": "Team found",
            "data": team,
        }

    async def update_team(self, team_id: int, team_update: TeamUpdate, current_user: dict) -> Dict[str, Any]:
        with handler_boundary("Error updating team"):
            existing = await self._find_or_404(team_id)

            if not is_allowed(TeamAction.UPDATE, current_user, existing["torneo_organizador_id"]):
                raise ForbiddenError("You do not have permission to modify this team")

            patch = TeamPatch.from_model(team_update)

            new_name = patch.changes().get("nombre")
            if new_name and new_name != existing["nombre"]:
                if await self.teams.name_exists_in_tournament(new_name, existing["torneo_id"], team_id):
                    raise ConflictError("Another team with that name already exists in this tournament")

            updated = await self.teams.update(team_id, patch)
            if updated is None:
                # deleted between the lookup and the update
                raise NotFoundError(TEAM_NOT_FOUND)

        await log_event(self.teams.db, EventTypes.TEAM_UPDATED, {
            "team_id": team_id,
            "fields": sorted(patch.changes()),
        }, user_id=current_user.get("id"))

        return {
            "success": True,
            "message": "Team updated successfully",
            "data": updated,
        }

    async def delete_team(self, team_id: int, current_user: dict) -> Dict[str, Any]:
        with handler_boundary("Error deleting team"):
            team = await self._find_or_404(team_id)

            if not is_allowed(TeamAction.DELETE, current_user, team["torneo_organizador_id"]):
                raise ForbiddenError("You do not have permission to delete this team")

            if not await self.teams.delete(team_id):
                raise NotFoundError(TEAM_NOT_FOUND)

        await log_event(self.teams.db, EventTypes.TEAM_DELETED, {
            "team_id": team_id,
            "torneo_id": team["torneo_id"],
        }, user_id=current_user.get("id"))

        return {
            "success": True,
            "message": "Team deleted successfully",
        }

    async def list_players(self, team_id: int) -> Dict[str, Any]:
        with handler_boundary("Error fetching players"):
            team = await self._find_or_404(team_id)
            players = await self.teams.get_players(team_id)

        return {
            "success": True,
            "message": "Team players fetched successfully",
            "data": players,
            "total": len(players),
            "equipo": {
                "id": team["id"],
                "nombre": team["nombre"],
                "torneo": team["torneo_nombre"],
            },
        }
