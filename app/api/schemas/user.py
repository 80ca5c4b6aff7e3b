"""
Esquemas Pydantic para la colección `user`.

Reglas clave:
- `email` se guarda siempre en minúsculas.
- `password_hash` nunca se expone.
"""
from datetime import datetime
from typing import Any, Dict
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserPublic(BaseModel):
    """Respuesta pública de usuario (sin secretos)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    full_name: str
    email: str

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "UserPublic":
        return cls(id=str(doc["_id"]), full_name=doc.get("full_name", ""), email=doc["email"])


class UserOut(UserPublic):
    created_at: datetime

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "UserOut":
        return cls(
            id=str(doc["_id"]),
            full_name=doc.get("full_name", ""),
            email=doc["email"],
            created_at=doc["created_at"],
        )


class UserResponse(BaseModel):
    error: bool = False
    user: UserOut
