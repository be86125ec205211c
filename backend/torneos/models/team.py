from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class _Unset:
    """Marker for a field the client did not send."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class TeamPatch:
    """
    Partial update for a team.

    Each field is UNSET (leave the stored value alone), None (clear it,
    nullable columns only) or the new value.
    """

    nombre: Any = UNSET
    color: Any = UNSET
    representante: Any = UNSET
    telefono_representante: Any = UNSET

    NULLABLE = ("color", "representante", "telefono_representante")

    def __post_init__(self):
        for f in fields(self):
            if getattr(self, f.name) is None and f.name not in self.NULLABLE:
                raise ValueError(f"{f.name} cannot be cleared")

    @classmethod
    def from_model(cls, model: BaseModel) -> "TeamPatch":
        """Build a patch from the fields a pydantic model was given explicitly."""
        supplied = model.model_dump(exclude_unset=True)
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in supplied.items() if k in known})

    def changes(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


class Team(BaseModel):
    id: int
    nombre: str
    color: Optional[str] = None
    representante: Optional[str] = None
    telefono_representante: Optional[str] = None
    torneo_id: int
    torneo_nombre: Optional[str] = None
    torneo_disciplina: Optional[str] = None
    torneo_estado: Optional[str] = None
    torneo_organizador_id: Optional[int] = None
    total_jugadores: Optional[int] = None
    creado_en: Optional[datetime] = None
    actualizado_en: Optional[datetime] = None

    class Config:
        json_encoders = {
            datetime: lambda v: v.isoformat()
        }
