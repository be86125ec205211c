from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime

class Player(BaseModel):
    id: int
    nombre: str
    apellido: str
    fecha_nacimiento: Optional[date] = None
    nro_camiseta: Optional[int] = None  # jersey number, lists are sorted by it
    posicion: Optional[str] = None
    equipo_id: int
    creado_en: Optional[datetime] = None
    actualizado_en: Optional[datetime] = None

    class Config:
        json_encoders = {
            datetime: lambda v: v.isoformat()
        }
