"""
Transporte de sesión: cómo viajan los tokens entre cliente y servidor.

- Modo `cookie`: cookies httpOnly con Secure/SameSite según despliegue.
  Para borrar una cookie se reenvían exactamente el mismo nombre y atributos
  con max_age=0; si difieren, el navegador conserva la cookie.
- Modo `header`: los tokens van en el cuerpo y el cliente los reenvía como
  `Authorization: Bearer`. El logout es responsabilidad del cliente.
"""
from typing import Any, Dict, Optional

from fastapi import Request, Response

from app.core.config import settings
from app.services import token_service


def cookie_attributes() -> Dict[str, Any]:
    """Atributos compartidos por los caminos de set y clear."""
    return {
        "httponly": True,
        "secure": settings.cookie_secure_effective,
        "samesite": settings.cookie_samesite,
        "path": "/",
    }


def _max_age(kind: token_service.TokenKind) -> int:
    return int(token_service.lifetime(kind).total_seconds())


def deliver(response: Response, *, access_token: str, refresh_token: Optional[str] = None) -> Dict[str, str]:
    """
    Entrega los tokens según el modo configurado.
    Devuelve los campos a mezclar en el cuerpo (vacío en modo cookie).
    """
    if settings.uses_cookies:
        attrs = cookie_attributes()
        response.set_cookie(settings.access_cookie_name, access_token, max_age=_max_age("access"), **attrs)
        if refresh_token is not None:
            response.set_cookie(settings.refresh_cookie_name, refresh_token, max_age=_max_age("refresh"), **attrs)
        return {}
    body = {"accessToken": access_token}
    if refresh_token is not None:
        body["refreshToken"] = refresh_token
    return body


def clear(response: Response) -> None:
    if not settings.uses_cookies:
        return
    attrs = cookie_attributes()
    for name in (settings.access_cookie_name, settings.refresh_cookie_name):
        response.set_cookie(name, "", max_age=0, expires=0, **attrs)


def bearer_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("authorization") or ""
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def read_access_token(request: Request) -> Optional[str]:
    """Busca el access token: primero la cookie, luego el header Authorization."""
    return request.cookies.get(settings.access_cookie_name) or bearer_token(request)


def read_refresh_token(request: Request, body: Optional[Dict[str, Any]] = None) -> Optional[str]:
    if settings.uses_cookies:
        return request.cookies.get(settings.refresh_cookie_name)
    value = (body or {}).get("refreshToken")
    return value if isinstance(value, str) and value else None
