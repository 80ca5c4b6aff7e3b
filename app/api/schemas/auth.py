"""
Esquemas Pydantic para operaciones de autenticación.

- El email se valida en el servicio (para responder 400 con mensaje propio).
- Las respuestas nunca incluyen `password_hash`.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.api.schemas.user import UserPublic


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterPayload(_CamelModel):
    full_name: str
    email: str
    password: str


class LoginPayload(_CamelModel):
    email: str
    password: str


class RefreshPayload(_CamelModel):
    # Solo en modo header; en modo cookie se lee la cookie de refresh
    refresh_token: Optional[str] = None


class AuthResponse(_CamelModel):
    """Respuesta de registro/login. Los tokens solo aparecen en modo header."""
    error: bool = False
    message: str
    user: UserPublic
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class RefreshResponse(_CamelModel):
    error: bool = False
    ok: bool = True
    access_token: Optional[str] = None
