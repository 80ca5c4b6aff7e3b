"""
Esquemas Pydantic para `note`.

En Mongo los campos van en snake_case; en la API se exponen en camelCase.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoteCreate(_CamelModel):
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)


class NoteUpdate(_CamelModel):
    """
    Edición parcial: solo los campos enviados se aplican
    (ver `model_dump(exclude_unset=True)` en el router).
    """
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None
    is_pinned: Optional[StrictBool] = None


class NotePinnedUpdate(_CamelModel):
    # Estricto: "yes", 1, "true" no son booleanos
    is_pinned: StrictBool


class NoteOut(_CamelModel):
    id: str
    user_id: str
    title: str
    content: str
    tags: List[str]
    is_pinned: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "NoteOut":
        return cls(
            id=str(doc["_id"]),
            user_id=str(doc["user_id"]),
            title=doc.get("title", ""),
            content=doc.get("content", ""),
            tags=list(doc.get("tags") or []),
            is_pinned=bool(doc.get("is_pinned", False)),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )


class NoteResponse(_CamelModel):
    error: bool = False
    message: Optional[str] = None
    note: NoteOut


class NoteListResponse(_CamelModel):
    error: bool = False
    notes: List[NoteOut]
    message: Optional[str] = None


class MessageResponse(_CamelModel):
    error: bool = False
    message: str
