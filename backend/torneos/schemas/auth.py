from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime

class UserOut(BaseModel):
    id: int
    nombre: str
    apellido: str
    email: str
    telefono: Optional[str] = None
    activo: bool
    rol_id: int
    rol_nombre: str
    rol_descripcion: Optional[str] = None
    creado_en: Optional[datetime] = None
    actualizado_en: Optional[datetime] = None

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class LoginData(BaseModel):
    usuario: UserOut
    access_token: str
    token_type: str = "bearer"

class LoginResponse(BaseModel):
    success: bool = True
    message: str
    data: LoginData
