"""
Lógica de autenticación: registro y verificación de credenciales.
"""
from typing import Any, Dict
import logging

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type
from email_validator import EmailNotValidError, validate_email

from app.core.config import settings
from app.core.errors import Unauthenticated, ValidationError
from app.repositories import user_repo

_log = logging.getLogger("notepad.auth")

INVALID_CREDENTIALS = "Invalid credentials"

ph = PasswordHasher(time_cost=2, memory_cost=51200, parallelism=2, hash_len=32, salt_len=16, type=Type.ID)

# Hash de referencia: se verifica cuando el email no existe para que ambos
# caminos (usuario inexistente / password incorrecto) hagan trabajo equivalente.
_DUMMY_HASH = ph.hash("notepad-dummy-password")


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def _clean_email(email: str) -> str:
    try:
        # Sin DNS: la validación es sintáctica
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError("Invalid email address")
    return user_repo.normalize_email(email)


def register(*, full_name: str, email: str, password: str) -> Dict[str, Any]:
    """
    Registra un usuario local y devuelve el documento guardado.

    - `full_name` no vacío, email sintácticamente válido, password con longitud mínima.
    - Solo se persiste el hash argon2 del password.
    - Email duplicado -> `Conflict` (el usuario existente no se toca).
    """
    full_name = (full_name or "").strip()
    if not full_name or not email or not password:
        raise ValidationError("All fields required")
    clean_email = _clean_email(email)
    if len(password) < settings.password_min_length:
        raise ValidationError(
            f"Password must be at least {settings.password_min_length} characters"
        )
    user = user_repo.insert_user(
        full_name=full_name,
        email=clean_email,
        password_hash=hash_password(password),
    )
    _log.info("Usuario registrado id=%s", user["_id"])
    return user


def verify_credentials(*, email: str, password: str) -> Dict[str, Any]:
    """
    Valida email + password contra el hash guardado.
    Usuario inexistente y password incorrecto colapsan en el mismo error.
    """
    if not email or not password:
        raise ValidationError("Email and password required")
    u = user_repo.find_user_by_email(email)
    if u is None:
        verify_password(password, _DUMMY_HASH)
        raise Unauthenticated(INVALID_CREDENTIALS)
    if not verify_password(password, u.get("password_hash") or ""):
        raise Unauthenticated(INVALID_CREDENTIALS)
    return u


def get_user(user_id: str) -> Dict[str, Any] | None:
    return user_repo.get_user_by_id(user_id)
