"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar colecciones mínimas y consistencia.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError
from app.infrastructure.db.mongo import get_db
from app.repositories.note_repo import COLLECTION as NOTE_COLL
from app.repositories.user_repo import COLLECTION as USER_COLL

_log = logging.getLogger("notepad.mongo.bootstrap")


USER_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["full_name", "email", "password_hash", "created_at"],
    "properties": {
        "full_name": {"bsonType": "string", "minLength": 1},
        "email": {"bsonType": "string", "minLength": 3, "description": "lowercase"},
        "password_hash": {"bsonType": "string"},
        "created_at": {"bsonType": "date"},
    },
}

NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["user_id", "title", "content", "tags", "is_pinned", "created_at", "updated_at"],
    "properties": {
        "user_id": {"bsonType": "string"},
        "title": {"bsonType": "string", "minLength": 1},
        "content": {"bsonType": "string", "minLength": 1},
        "tags": {"bsonType": "array", "items": {"bsonType": "string"}},
        "is_pinned": {"bsonType": "bool"},
        "created_at": {"bsonType": "date"},
        "updated_at": {"bsonType": "date"},
    },
}


def _collmod_or_create(name: str, validator: Dict[str, Any]) -> None:
    db = get_db()
    try:
        if name in db.list_collection_names():
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
        else:
            db.create_collection(name, validator={"$jsonSchema": validator})
    except PyMongoError as e:
        # Algunos motores no aceptan collMod sin privilegios; se sigue sin validator
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        spec = dict(ix)
        keys = spec.pop("keys")
        try:
            coll.create_index(keys, **spec)
        except PyMongoError as e:
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_indexes() -> None:
    """Índices mínimos: email único y listado por dueño ordenado."""
    _ensure_indexes(USER_COLL, [
        {"keys": [("email", ASCENDING)], "unique": True, "name": "uniq_email"},
    ])
    _ensure_indexes(NOTE_COLL, [
        {
            "keys": [("user_id", ASCENDING), ("is_pinned", DESCENDING), ("updated_at", DESCENDING)],
            "name": "owner_pinned_recent",
        },
    ])


def ensure_collections() -> None:
    """
    Garantiza colecciones, validadores e índices mínimos.
    """
    _collmod_or_create(USER_COLL, USER_VALIDATOR)
    _collmod_or_create(NOTE_COLL, NOTE_VALIDATOR)
    ensure_indexes()
