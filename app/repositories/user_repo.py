"""
Repositorio para la colección `user`.
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from bson import ObjectId
from email_validator import EmailNotValidError, validate_email
from pymongo.errors import DuplicateKeyError

from app.core.errors import Conflict
from app.infrastructure.db.mongo import get_db

COLLECTION = "user"


def _now_utc() -> datetime:
    # Mongo guarda milisegundos; se trunca para que lo devuelto coincida con lo guardado
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def normalize_email(email: str) -> str:
    """
    Forma canónica del email, la misma al registrar y al buscar.
    Normaliza Unicode (NFC) y dominios punycode con email-validator; si el
    texto no es un email válido se queda en strip + minúsculas.
    """
    raw = str(email or "").strip()
    try:
        return validate_email(raw, check_deliverability=False).normalized.lower()
    except EmailNotValidError:
        return raw.lower()


def find_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    """Busca usuario por email (normalizado a minúsculas)."""
    return get_db()[COLLECTION].find_one({"email": normalize_email(email)})


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    """Obtiene usuario por id (str). Un id malformado equivale a inexistente."""
    if not ObjectId.is_valid(user_id):
        return None
    return get_db()[COLLECTION].find_one({"_id": ObjectId(user_id)})


def insert_user(*, full_name: str, email: str, password_hash: str) -> Dict[str, Any]:
    """
    Inserta un usuario y devuelve el documento guardado.
    - Normaliza `email` a minúsculas.
    - La unicidad la garantiza el índice `uniq_email`; el pre-chequeo solo
      evita el round-trip en el caso común.
    """
    email = normalize_email(email)
    coll = get_db()[COLLECTION]
    if coll.find_one({"email": email}, {"_id": 1}):
        raise Conflict("User already exists")
    data = {
        "full_name": full_name,
        "email": email,
        "password_hash": password_hash,
        "created_at": _now_utc(),
    }
    try:
        res = coll.insert_one(data)
    except DuplicateKeyError:
        raise Conflict("User already exists")
    data["_id"] = res.inserted_id
    return data
