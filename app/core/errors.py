"""
Taxonomía de errores de la aplicación.

Cada error lleva su código HTTP y un mensaje legible; los handlers de
`app.core.exceptions` los convierten en `{"error": true, "message": ...}`.
"""
from starlette import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Entrada malformada o incompleta."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation error"


class Unauthenticated(AppError):
    """Token ausente, inválido o expirado; también credenciales inválidas."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated"


class NotFound(AppError):
    # No existe o no pertenece al solicitante: indistinguibles hacia afuera
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class Internal(AppError):
    """Fallo del servidor o de una dependencia (p. ej. Mongo no disponible)."""
