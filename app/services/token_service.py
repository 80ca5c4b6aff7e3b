"""
Creación y verificación de JWTs de sesión (access y refresh).

- Cada tipo se firma con su propio secreto: un access token filtrado no sirve
  como refresh token ni viceversa.
- La verificación es pura (firma + expiración); solo `refresh` consulta la base.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Literal
from uuid import uuid4
import logging

import jwt as pyjwt

from app.core.config import settings
from app.core.errors import Unauthenticated
from app.repositories import user_repo

_log = logging.getLogger("notepad.tokens")

TokenKind = Literal["access", "refresh"]


class TokenError(Exception):
    """Base de fallos de verificación de token."""


class TokenExpired(TokenError):
    pass


class TokenMalformed(TokenError):
    pass


class TokenSignatureMismatch(TokenError):
    pass


@dataclass(frozen=True)
class TokenClaims:
    subject_id: str
    expires_at: datetime


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _secret(kind: TokenKind) -> str:
    if kind == "access":
        return settings.access_token_secret
    if kind == "refresh":
        return settings.refresh_token_secret
    raise ValueError(f"Tipo de token desconocido: {kind}")


def lifetime(kind: TokenKind) -> timedelta:
    if kind == "access":
        return timedelta(minutes=settings.access_token_expire_minutes)
    return timedelta(days=settings.refresh_token_expire_days)


def _issue(user_id: str, kind: TokenKind) -> str:
    now = _now_utc()
    exp = now + lifetime(kind)
    payload = {
        "sub": str(user_id),
        "type": kind,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": str(uuid4()),
    }
    return pyjwt.encode(payload, _secret(kind), algorithm=settings.jwt_algorithm)


def issue_access_token(user_id: str) -> str:
    """JWT válido por ACCESS_TOKEN_EXPIRE_MINUTES. Claims: sub, type, iat, exp, jti."""
    return _issue(user_id, "access")


def issue_refresh_token(user_id: str) -> str:
    """JWT válido por REFRESH_TOKEN_EXPIRE_DAYS, firmado con el secreto de refresh."""
    return _issue(user_id, "refresh")


def verify(token: str, kind: TokenKind) -> TokenClaims:
    """
    Valida firma, tipo y expiración. Devuelve los claims relevantes.

    La expiración se compara contra `_now_utc()` (no contra el reloj interno
    de PyJWT) para que sea sustituible en pruebas.
    """
    try:
        payload: Dict[str, Any] = pyjwt.decode(
            token,
            key=_secret(kind),
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp"]},
        )
    except pyjwt.InvalidSignatureError as e:
        raise TokenSignatureMismatch(str(e)) from e
    except pyjwt.PyJWTError as e:
        raise TokenMalformed(str(e)) from e

    if payload.get("type") != kind:
        raise TokenMalformed(f"Se esperaba token de tipo {kind}")
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise TokenMalformed("Claim 'sub' inválido")
    try:
        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
    except (TypeError, ValueError) as e:
        raise TokenMalformed("Claim 'exp' inválido") from e
    if _now_utc() >= expires_at:
        raise TokenExpired("Token expirado")
    return TokenClaims(subject_id=subject, expires_at=expires_at)


def refresh(refresh_token: str) -> str:
    """
    Emite un nuevo access token a partir de un refresh token válido cuyo
    usuario todavía existe. El refresh token no se rota ni se revoca.
    """
    try:
        claims = verify(refresh_token, "refresh")
    except TokenError as e:
        _log.info("Refresh rechazado: %s", e)
        raise Unauthenticated("Invalid refresh token")
    if user_repo.get_user_by_id(claims.subject_id) is None:
        _log.info("Refresh rechazado: usuario %s no existe", claims.subject_id)
        raise Unauthenticated("Invalid refresh token")
    return issue_access_token(claims.subject_id)
