import asyncio
import logging
import os
from typing import Dict

from dotenv import load_dotenv
from sqlalchemy import insert, select

from torneos.db import Database
from torneos.models.tables import roles, usuarios
from torneos.services.auth_service import hash_password
from torneos.utils.permissions import Role

logger = logging.getLogger(__name__)

ROLE_DESCRIPTIONS = {
    Role.ADMIN: "Full system access",
    Role.ORGANIZER: "Organizes tournaments and manages their teams",
    Role.DELEGATE: "Team delegate, can register and edit teams",
}


async def seed_roles(db: Database) -> Dict[str, int]:
    """Insert the built-in roles that are missing; returns name -> id."""
    existing = {row["nombre"]: row["id"] for row in await db.fetch_all(select(roles.c.id, roles.c.nombre))}

    for role, description in ROLE_DESCRIPTIONS.items():
        if role.value not in existing:
            row = await db.fetch_one(
                insert(roles)
                .values(nombre=role.value, descripcion=description)
                .returning(roles.c.id)
            )
            existing[role.value] = row["id"]
            logger.info("Created role %s", role.value)

    return existing


async def seed_admin(db: Database, role_ids: Dict[str, int], email: str, password: str) -> int:
    user = await db.fetch_one(select(usuarios.c.id).where(usuarios.c.email == email))
    if user:
        logger.info("Admin user %s already exists", email)
        return user["id"]

    row = await db.fetch_one(
        insert(usuarios)
        .values(
            nombre="Admin",
            apellido="Sistema",
            email=email,
            password_hash=hash_password(password),
            activo=True,
            rol_id=role_ids[Role.ADMIN.value],
        )
        .returning(usuarios.c.id)
    )
    logger.info("Created admin user %s", email)
    return row["id"]


async def run_seed():
    db = Database(os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./torneos.db"))
    try:
        await db.create_schema()
        role_ids = await seed_roles(db)
        await seed_admin(
            db,
            role_ids,
            os.getenv("ADMIN_EMAIL", "admin@torneos.com"),
            os.getenv("ADMIN_PASSWORD", "Admin123!"),
        )
    finally:
        await db.dispose()


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    asyncio.run(run_seed())
