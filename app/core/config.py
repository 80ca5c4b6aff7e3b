"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Mongo, Auth/JWT, Transporte de sesión, Logging.
"""
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Conjunto de variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    """
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
    )

    # App
    app_name: str = "Notepad API"
    api_prefix: str = ""
    log_level: str = "INFO"

    # CORS (frontend Vite/React)
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Mongo
    mongo_uri: str = Field(
        "mongodb://localhost:27017",
        validation_alias=AliasChoices("MONGO_URI", "CONNECTION_STRING"),
    )
    mongo_db: str = "notepad"
    mongo_tls: bool = False
    mongo_tls_insecure: bool = False  # solo dev: acepta certificados inválidos

    # Auth / JWT: access y refresh se firman con secretos distintos
    access_token_secret: str = "change-me-access"
    refresh_token_secret: str = "change-me-refresh"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 10
    refresh_token_expire_days: int = 7
    password_min_length: int = 6

    # Transporte de sesión: un solo modo por despliegue
    session_transport: Literal["cookie", "header"] = "cookie"
    cookie_secure: bool = False
    # Frontend y backend en orígenes distintos -> SameSite=None (+ Secure)
    cross_site: bool = False
    access_cookie_name: str = "accessToken"
    refresh_cookie_name: str = "refreshToken"

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def cookie_samesite(self) -> Literal["none", "lax"]:
        return "none" if self.cross_site else "lax"

    @property
    def cookie_secure_effective(self) -> bool:
        # Los navegadores descartan SameSite=None sin Secure
        return self.cookie_secure or self.cross_site

    @property
    def uses_cookies(self) -> bool:
        return self.session_transport == "cookie"


settings = Settings()
