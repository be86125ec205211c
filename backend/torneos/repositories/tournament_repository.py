from typing import Any, Dict, Optional

from sqlalchemy import select

from torneos.db import Database
from torneos.models.tables import torneos
from torneos.repositories.base import BaseRepository


class TournamentRepository(BaseRepository):
    """Read-only access to tournaments, enough for team authorization."""

    def __init__(self, db: Database):
        super().__init__(db, torneos)

    async def find_by_id(self, tournament_id: int) -> Optional[Dict[str, Any]]:
        query = select(
            torneos.c.id,
            torneos.c.nombre,
            torneos.c.disciplina,
            torneos.c.estado,
            torneos.c.organizador_id,
        ).where(torneos.c.id == tournament_id)
        return await self.db.fetch_one(query)
