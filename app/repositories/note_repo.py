"""
Repo de la colección `note`.

Todas las consultas filtran por `user_id`: una nota ajena se comporta igual
que una inexistente (devuelve None / False).
"""
import re
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from bson import ObjectId
from pymongo import ReturnDocument

from app.infrastructure.db.mongo import get_db

COLLECTION = "note"

# Fijados primero, luego los más recientes; `_id` desempata
LIST_SORT = [("is_pinned", -1), ("updated_at", -1), ("_id", -1)]


def _now_utc() -> datetime:
    # Mongo guarda milisegundos; se trunca para que lo devuelto coincida con lo guardado
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _owned(user_id: str, note_id: str) -> Optional[Dict[str, Any]]:
    """Filtro por id + dueño, o None si el id no es un ObjectId válido."""
    if not ObjectId.is_valid(note_id):
        return None
    return {"_id": ObjectId(note_id), "user_id": str(user_id)}


def insert_note(*, user_id: str, title: str, content: str, tags: List[str]) -> Dict[str, Any]:
    """Inserta nota con defaults y devuelve el documento guardado."""
    now = _now_utc()
    data = {
        "user_id": str(user_id),
        "title": title,
        "content": content,
        "tags": list(tags),
        "is_pinned": False,
        "created_at": now,
        "updated_at": now,
    }
    res = get_db()[COLLECTION].insert_one(data)
    data["_id"] = res.inserted_id
    return data


def get_note(user_id: str, note_id: str) -> Optional[Dict[str, Any]]:
    filtro = _owned(user_id, note_id)
    if filtro is None:
        return None
    return get_db()[COLLECTION].find_one(filtro)


def update_note(user_id: str, note_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Aplica `$set` solo sobre los campos recibidos y devuelve la nota actualizada."""
    filtro = _owned(user_id, note_id)
    if filtro is None:
        return None
    set_ops = dict(fields)
    set_ops["updated_at"] = _now_utc()
    return get_db()[COLLECTION].find_one_and_update(
        filtro,
        {"$set": set_ops},
        return_document=ReturnDocument.AFTER,
    )


def delete_note(user_id: str, note_id: str) -> bool:
    filtro = _owned(user_id, note_id)
    if filtro is None:
        return False
    res = get_db()[COLLECTION].delete_one(filtro)
    return res.deleted_count == 1


def list_notes(user_id: str) -> List[Dict[str, Any]]:
    """Lista notas del usuario (fijadas primero, luego por updated_at desc)."""
    return list(get_db()[COLLECTION].find({"user_id": str(user_id)}).sort(LIST_SORT))


def search_notes(user_id: str, query: str) -> List[Dict[str, Any]]:
    """
    Búsqueda case-insensitive por subcadena en título, contenido o tags.
    El texto se escapa: nunca se interpreta como patrón.
    """
    pattern = re.escape(query)
    rx = {"$regex": pattern, "$options": "i"}
    filtro = {
        "user_id": str(user_id),
        "$or": [{"title": rx}, {"content": rx}, {"tags": rx}],
    }
    return list(get_db()[COLLECTION].find(filtro).sort(LIST_SORT))
