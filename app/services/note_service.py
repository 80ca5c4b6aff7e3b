"""
Service layer for notes: validaciones y errores sobre el repositorio.

Cada operación recibe el `owner_id` resuelto por el gate de autorización;
una nota ajena produce el mismo `NotFound` que una inexistente.
"""
from typing import Any, Dict, Iterable, List, Optional

from app.core.errors import NotFound, ValidationError
from app.repositories import note_repo

NOTE_NOT_FOUND = "Note not found"
EDITABLE_FIELDS = ("title", "content", "tags", "is_pinned")


def _required_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def _clean_tags(tags: Optional[Iterable[Any]]) -> List[str]:
    if tags is None:
        return []
    if isinstance(tags, str):
        raise ValidationError("tags must be a list of strings")
    out: List[str] = []
    for t in tags:
        if not isinstance(t, str):
            raise ValidationError("tags must be a list of strings")
        if t.strip():
            out.append(t.strip())
    return out


def create(owner_id: str, *, title: Any, content: Any, tags: Optional[Iterable[Any]] = None) -> Dict[str, Any]:
    return note_repo.insert_note(
        user_id=owner_id,
        title=_required_text(title, "title"),
        content=_required_text(content, "content"),
        tags=_clean_tags(tags),
    )


def get(owner_id: str, note_id: str) -> Dict[str, Any]:
    note = note_repo.get_note(owner_id, note_id)
    if note is None:
        raise NotFound(NOTE_NOT_FOUND)
    return note


def update(owner_id: str, note_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Actualización parcial: solo cambian los campos presentes en `fields`.
    Un `[]` explícito es un valor real (borra los tags).
    """
    changes: Dict[str, Any] = {}
    for key in EDITABLE_FIELDS:
        if key not in fields:
            continue
        value = fields[key]
        if key in ("title", "content"):
            changes[key] = _required_text(value, key)
        elif key == "tags":
            # null no equivale a []: para borrar los tags se envía la lista vacía
            if value is None:
                raise ValidationError("tags must be a list of strings")
            changes[key] = _clean_tags(value)
        else:
            if not isinstance(value, bool):
                raise ValidationError("isPinned must be a boolean value")
            changes[key] = value
    if not changes:
        raise ValidationError("No changes provided")
    note = note_repo.update_note(owner_id, note_id, changes)
    if note is None:
        raise NotFound(NOTE_NOT_FOUND)
    return note


def set_pinned(owner_id: str, note_id: str, is_pinned: Any) -> Dict[str, Any]:
    if not isinstance(is_pinned, bool):
        raise ValidationError("isPinned must be a boolean value")
    note = note_repo.update_note(owner_id, note_id, {"is_pinned": is_pinned})
    if note is None:
        raise NotFound(NOTE_NOT_FOUND)
    return note


def delete(owner_id: str, note_id: str) -> None:
    if not note_repo.delete_note(owner_id, note_id):
        raise NotFound(NOTE_NOT_FOUND)


def list_all(owner_id: str) -> List[Dict[str, Any]]:
    return note_repo.list_notes(owner_id)


def search(owner_id: str, query: Optional[str]) -> List[Dict[str, Any]]:
    if not query or not query.strip():
        raise ValidationError("Search query is required")
    return note_repo.search_notes(owner_id, query.strip())
