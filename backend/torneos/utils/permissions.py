"""
Role enumeration and the capability table for team operations.

Every authorization decision about teams goes through ``is_allowed``.
A request is allowed when the principal's role is listed for the action,
or when the action admits ownership and the principal organizes the
team's tournament.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, NamedTuple, Optional


class Role(str, Enum):
    ADMIN = "admin"
    ORGANIZER = "organizador"
    DELEGATE = "delegado"
    OTHER = "otro"

    @classmethod
    def parse(cls, name: Optional[str]) -> "Role":
        try:
            return cls(name)
        except ValueError:
            return cls.OTHER


class TeamAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Capability(NamedTuple):
    roles: FrozenSet[Role]
    owner_allowed: bool


TEAM_CAPABILITIES: Dict[TeamAction, Capability] = {
    TeamAction.CREATE: Capability(frozenset({Role.ADMIN, Role.ORGANIZER, Role.DELEGATE}), owner_allowed=False),
    TeamAction.UPDATE: Capability(frozenset({Role.ADMIN, Role.DELEGATE}), owner_allowed=True),
    TeamAction.DELETE: Capability(frozenset({Role.ADMIN}), owner_allowed=True),
}

# Roles admitted by the route dependency before the handler runs. Create has
# no ownership path, so its gate is its capability and the handler adds nothing.
TEAM_ROLE_GATES: Dict[TeamAction, FrozenSet[Role]] = {
    TeamAction.CREATE: TEAM_CAPABILITIES[TeamAction.CREATE].roles,
    TeamAction.UPDATE: frozenset({Role.ADMIN, Role.ORGANIZER, Role.DELEGATE}),
    TeamAction.DELETE: frozenset(Role),
}


def principal_role(principal: Mapping[str, Any]) -> Role:
    return Role.parse(principal.get("rol_nombre"))


def is_allowed(action: TeamAction, principal: Mapping[str, Any], organizer_id: Optional[int] = None) -> bool:
    capability = TEAM_CAPABILITIES[action]
    if principal_role(principal) in capability.roles:
        return True
    if capability.owner_allowed and organizer_id is not None:
        return principal.get("id") == organizer_id
    return False
