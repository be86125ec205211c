from pydantic import BaseModel, Field, constr, field_validator, model_validator
from typing import List, Optional

from torneos.models.player import Player
from torneos.models.team import Team

PHONE_PATTERN = r"^[0-9+\-() ]+$"

TeamName = constr(strip_whitespace=True, min_length=2, max_length=150)
TeamColor = constr(strip_whitespace=True, max_length=30)
Representative = constr(strip_whitespace=True, max_length=120)
Phone = constr(pattern=PHONE_PATTERN, min_length=7, max_length=30)


def _blank_phone_to_none(value):
    # An empty phone counts as not provided
    if isinstance(value, str) and value == "":
        return None
    return value


class TeamCreate(BaseModel):
    nombre: TeamName
    color: Optional[TeamColor] = None
    representante: Optional[Representative] = None
    telefono_representante: Optional[Phone] = None
    torneo_id: int = Field(..., gt=0)

    @field_validator("telefono_representante", mode="before")
    @classmethod
    def blank_phone(cls, v):
        return _blank_phone_to_none(v)


class TeamUpdate(BaseModel):
    nombre: Optional[TeamName] = None
    color: Optional[TeamColor] = None
    representante: Optional[Representative] = None
    telefono_representante: Optional[Phone] = None

    @model_validator(mode="before")
    @classmethod
    def drop_blank_phone(cls, data):
        # An empty or null phone on update means "leave it as it is"
        if isinstance(data, dict) and _blank_phone_to_none(data.get("telefono_representante")) is None:
            data = {k: v for k, v in data.items() if k != "telefono_representante"}
        return data

    @field_validator("nombre")
    @classmethod
    def name_not_null(cls, v):
        # Only runs when the client sent the field explicitly
        if v is None:
            raise ValueError("The team name cannot be null")
        return v


class TeamSummary(BaseModel):
    id: int
    nombre: str
    torneo: Optional[str] = None


class TeamResponse(BaseModel):
    success: bool = True
    message: str
    data: Team


class TeamListResponse(BaseModel):
    success: bool = True
    message: str
    data: List[Team]
    total: int


class TeamPlayersResponse(BaseModel):
    success: bool = True
    message: str
    data: List[Player]
    total: int
    equipo: TeamSummary


class MessageResponse(BaseModel):
    success: bool = True
    message: str
