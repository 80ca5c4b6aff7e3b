"""
Dependencias reutilizables para routers (FastAPI Depends).

- Autenticación: extrae y valida el access token (cookie o Bearer) y
  resuelve la identidad del solicitante.
- Mantener esta capa delgada: sin lógica de negocio.
"""
import logging

from fastapi import Request

from app.core.errors import Unauthenticated
from app.services import session_transport, token_service

_log = logging.getLogger("notepad.auth.gate")


def get_current_user_id(request: Request) -> str:
    token = session_transport.read_access_token(request)
    if not token:
        raise Unauthenticated("No token provided")
    try:
        claims = token_service.verify(token, "access")
    except token_service.TokenError as e:
        _log.info("Token rechazado path=%s: %s", request.url.path, type(e).__name__)
        raise Unauthenticated("Invalid or expired token")
    request.state.user_id = claims.subject_id
    return claims.subject_id
