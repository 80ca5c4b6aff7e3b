"""
Cliente HTTP de la API de notas con sesión explícita.

La identidad del cliente vive en un `ClientSession` que se pasa al cliente
(nunca en estado global). Ciclo de vida único: acquire -> refresh* -> clear.

- Modo cookie: los tokens quedan en el cookie jar de httpx; la sesión solo
  recuerda al usuario.
- Modo header: la sesión guarda los tokens y los envía como `Bearer`.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


@dataclass
class ClientSession:
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None
    cookie_names: List[str] = field(default_factory=lambda: [ACCESS_COOKIE, REFRESH_COOKIE])

    @property
    def authenticated(self) -> bool:
        return self.user is not None

    def acquire(self, body: Dict[str, Any]) -> None:
        """Guarda lo devuelto por login/registro."""
        self.user = body.get("user")
        self.access_token = body.get("accessToken")
        self.refresh_token = body.get("refreshToken")

    def update_access(self, body: Dict[str, Any]) -> None:
        if body.get("accessToken"):
            self.access_token = body["accessToken"]

    def clear(self) -> None:
        self.access_token = None
        self.refresh_token = None
        self.user = None

    def auth_headers(self) -> Dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}


def _raise_for_error(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if response.status_code >= 400:
        raise ApiError(response.status_code, str(body.get("message") or response.reason_phrase))
    return body


class NotesClient:
    """Envuelve un `httpx.Client` configurado con una sesión explícita."""

    def __init__(self, http: httpx.Client, session: Optional[ClientSession] = None) -> None:
        self.http = http
        self.session = session or ClientSession()

    @classmethod
    def connect(cls, base_url: str, session: Optional[ClientSession] = None, timeout: float = 30.0) -> "NotesClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout), session)

    # --- ciclo de vida de la sesión ---
    def register(self, full_name: str, email: str, password: str) -> Dict[str, Any]:
        body = _raise_for_error(
            self.http.post("/create-account", json={"fullName": full_name, "email": email, "password": password})
        )
        self.session.acquire(body)
        return body["user"]

    def login(self, email: str, password: str) -> Dict[str, Any]:
        body = _raise_for_error(self.http.post("/login", json={"email": email, "password": password}))
        self.session.acquire(body)
        return body["user"]

    def refresh(self) -> None:
        payload = {"refreshToken": self.session.refresh_token} if self.session.refresh_token else None
        try:
            body = _raise_for_error(self.http.post("/refresh", json=payload))
        except ApiError:
            self._drop_credentials()
            raise
        self.session.update_access(body)

    def logout(self) -> None:
        try:
            _raise_for_error(self.http.post("/logout"))
        finally:
            self._drop_credentials()

    def _drop_credentials(self) -> None:
        self.session.clear()
        for name in self.session.cookie_names:
            self.http.cookies.delete(name)

    def _can_refresh(self) -> bool:
        return bool(self.session.refresh_token or self.http.cookies.get(REFRESH_COOKIE))

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        response = self.http.request(method, path, headers=self.session.auth_headers(), **kwargs)
        if response.status_code == 401 and self._can_refresh():
            # Un solo reintento tras renovar el access token
            self.refresh()
            response = self.http.request(method, path, headers=self.session.auth_headers(), **kwargs)
        return _raise_for_error(response)

    # --- operaciones ---
    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/get-user")["user"]

    def add_note(self, title: str, content: str, tags: Optional[List[str]] = None) -> Dict[str, Any]:
        return self._request("POST", "/add-note", json={"title": title, "content": content, "tags": tags or []})["note"]

    def get_note(self, note_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/get-note/{note_id}")["note"]

    def edit_note(self, note_id: str, **fields: Any) -> Dict[str, Any]:
        return self._request("PUT", f"/edit-note/{note_id}", json=fields)["note"]

    def set_pinned(self, note_id: str, is_pinned: bool) -> Dict[str, Any]:
        return self._request("PUT", f"/update-note-pinned/{note_id}", json={"isPinned": is_pinned})["note"]

    def list_notes(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/get-all-notes")["notes"]

    def search(self, query: str) -> List[Dict[str, Any]]:
        return self._request("GET", "/search-notes", params={"query": query})["notes"]

    def delete_note(self, note_id: str) -> None:
        self._request("DELETE", f"/delete-note/{note_id}")
