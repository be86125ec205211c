"""
Team repository
~~~~~~~~~~~~~~~

All queries touching the ``equipos`` table, plus the player listing of a
team.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, insert, select, update

from torneos.db import Database, ForeignKeyViolation, UniqueViolation
from torneos.models.tables import equipos, jugadores, torneos
from torneos.models.team import TeamPatch
from torneos.repositories.base import BaseRepository
from torneos.utils.errors import ConflictError, NotFoundError, PersistenceError

DUPLICATE_NAME_MESSAGE = "A team with that name already exists in this tournament"
MISSING_TOURNAMENT_MESSAGE = "The specified tournament does not exist"


def _player_count():
    return (
        select(func.count())
        .select_from(jugadores)
        .where(jugadores.c.equipo_id == equipos.c.id)
        .scalar_subquery()
        .label("total_jugadores")
    )


class TeamRepository(BaseRepository):

    def __init__(self, db: Database):
        super().__init__(db, equipos)

    async def list_all(self) -> List[Dict[str, Any]]:
        """Every team with its tournament summary and player count."""
        query = (
            select(
                equipos.c.id,
                equipos.c.nombre,
                equipos.c.color,
                equipos.c.representante,
                equipos.c.telefono_representante,
                equipos.c.torneo_id,
                torneos.c.nombre.label("torneo_nombre"),
                torneos.c.disciplina.label("torneo_disciplina"),
                torneos.c.estado.label("torneo_estado"),
                _player_count(),
                equipos.c.creado_en,
                equipos.c.actualizado_en,
            )
            .select_from(equipos.join(torneos, equipos.c.torneo_id == torneos.c.id))
            .order_by(torneos.c.nombre, equipos.c.nombre)
        )
        return await self.db.fetch_all(query)

    async def name_exists_in_tournament(
        self, name: str, tournament_id: int, exclude_team_id: Optional[int] = None
    ) -> bool:
        query = select(equipos.c.id).where(
            func.lower(equipos.c.nombre) == func.lower(name),
            equipos.c.torneo_id == tournament_id,
        )
        if exclude_team_id is not None:
            query = query.where(equipos.c.id != exclude_team_id)

        return await self.db.fetch_one(query.limit(1)) is not None

    async def find_by_id(self, team_id: int) -> Optional[Dict[str, Any]]:
        query = (
            select(
                equipos.c.id,
                equipos.c.nombre,
                equipos.c.color,
                equipos.c.representante,
                equipos.c.telefono_representante,
                equipos.c.torneo_id,
                torneos.c.nombre.label("torneo_nombre"),
                torneos.c.disciplina.label("torneo_disciplina"),
                torneos.c.estado.label("torneo_estado"),
                torneos.c.organizador_id.label("torneo_organizador_id"),
                _player_count(),
                equipos.c.creado_en,
                equipos.c.actualizado_en,
            )
            .select_from(equipos.join(torneos, equipos.c.torneo_id == torneos.c.id))
            .where(equipos.c.id == team_id)
        )
        return await self.db.fetch_one(query)

    async def create(self, team: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a team and return the stored row.

        The unique index on (torneo_id, lower(nombre)) is the final word on
        duplicates: callers may pre-check, but a concurrent insert can still
        slip in between and is reported here as a ConflictError.
        """
        statement = (
            insert(equipos)
            .values(
                nombre=team["nombre"],
                color=team.get("color") or None,
                representante=team.get("representante") or None,
                telefono_representante=team.get("telefono_representante") or None,
                torneo_id=team["torneo_id"],
            )
            .returning(
                equipos.c.id,
                equipos.c.nombre,
                equipos.c.color,
                equipos.c.representante,
                equipos.c.telefono_representante,
                equipos.c.torneo_id,
                equipos.c.creado_en,
            )
        )
        try:
            return await self.db.fetch_one(statement)
        except UniqueViolation as e:
            raise ConflictError(DUPLICATE_NAME_MESSAGE) from e
        except ForeignKeyViolation as e:
            raise NotFoundError(MISSING_TOURNAMENT_MESSAGE) from e
        except PersistenceError as e:
            raise PersistenceError(f"Error creating team: {e.message}") from e

    async def update(self, team_id: int, patch: TeamPatch) -> Optional[Dict[str, Any]]:
        """Write the supplied fields of ``patch``; returns None when no row matched."""
        values = patch.changes()
        values["actualizado_en"] = func.now()

        statement = (
            update(equipos)
            .where(equipos.c.id == team_id)
            .values(**values)
            .returning(
                equipos.c.id,
                equipos.c.nombre,
                equipos.c.color,
                equipos.c.representante,
                equipos.c.telefono_representante,
                equipos.c.torneo_id,
                equipos.c.actualizado_en,
            )
        )
        try:
            return await self.db.fetch_one(statement)
        except UniqueViolation as e:
            raise ConflictError("Another team with that name already exists in this tournament") from e
        except PersistenceError as e:
            raise PersistenceError(f"Error updating team: {e.message}") from e

    async def delete(self, team_id: int) -> bool:
        # jugadores rows go with it through ON DELETE CASCADE
        statement = delete(equipos).where(equipos.c.id == team_id)
        return await self.db.execute(statement) > 0

    async def get_players(self, team_id: int) -> List[Dict[str, Any]]:
        query = (
            select(
                jugadores.c.id,
                jugadores.c.nombre,
                jugadores.c.apellido,
                jugadores.c.fecha_nacimiento,
                jugadores.c.nro_camiseta,
                jugadores.c.posicion,
                jugadores.c.equipo_id,
                jugadores.c.creado_en,
                jugadores.c.actualizado_en,
            )
            .where(jugadores.c.equipo_id == team_id)
            .order_by(jugadores.c.nro_camiseta)
        )
        return await self.db.fetch_all(query)
