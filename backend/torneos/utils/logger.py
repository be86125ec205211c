import logging
from sqlalchemy import insert
from typing import Dict, Any, Optional

from torneos.db import Database
from torneos.models.tables import registro_actividad
from torneos.utils.errors import PersistenceError

logger = logging.getLogger(__name__)

async def log_event(
    db: Database,
    action: str,
    details: Optional[Dict[str, Any]] = None,
    user_id: Optional[int] = None,
):
    """
    Log an event to both the application logger and the activity table
    """
    log_message = f"Action: {action}"
    if user_id:
        log_message += f" | User: {user_id}"
    if details:
        log_message += f" | Details: {details}"

    logger.info(log_message)

    try:
        await db.execute(
            insert(registro_actividad).values(
                accion=action,
                detalles=details or {},
                usuario_id=user_id,
            )
        )
    except PersistenceError as e:
        # The audit row is best effort; the request already succeeded
        logger.error(f"Failed to log event: {e}")


# Event type constants for consistency
class EventTypes:
    AUTH_SUCCESS = "auth_success"
    AUTH_FAILED = "auth_failed"

    TEAM_CREATED = "team_created"
    TEAM_UPDATED = "team_updated"
    TEAM_DELETED = "team_deleted"
