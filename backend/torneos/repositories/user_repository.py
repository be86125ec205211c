from typing import Any, Dict, Optional

from sqlalchemy import select

from torneos.db import Database
from torneos.models.tables import roles, usuarios
from torneos.repositories.base import BaseRepository


class UserRepository(BaseRepository):

    def __init__(self, db: Database):
        super().__init__(db, usuarios)

    def _with_role(self):
        return select(
            usuarios.c.id,
            usuarios.c.nombre,
            usuarios.c.apellido,
            usuarios.c.email,
            usuarios.c.password_hash,
            usuarios.c.telefono,
            usuarios.c.activo,
            usuarios.c.rol_id,
            roles.c.nombre.label("rol_nombre"),
            roles.c.descripcion.label("rol_descripcion"),
            usuarios.c.creado_en,
            usuarios.c.actualizado_en,
        ).select_from(usuarios.join(roles, usuarios.c.rol_id == roles.c.id))

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.db.fetch_one(self._with_role().where(usuarios.c.email == email))

    async def find_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        return await self.db.fetch_one(self._with_role().where(usuarios.c.id == user_id))
