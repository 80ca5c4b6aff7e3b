"""Rutas de autenticación: registro, login, refresh, logout y usuario actual."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.deps import get_current_user_id
from app.api.schemas.auth import (
    AuthResponse,
    LoginPayload,
    RefreshPayload,
    RefreshResponse,
    RegisterPayload,
)
from app.api.schemas.note import MessageResponse
from app.api.schemas.user import UserOut, UserPublic, UserResponse
from app.core.errors import Unauthenticated
from app.services import auth_service, session_transport, token_service

router = APIRouter(tags=["Auth"])
_log = logging.getLogger("notepad.auth")


def _start_session(response: Response, user_id: str) -> dict:
    return session_transport.deliver(
        response,
        access_token=token_service.issue_access_token(user_id),
        refresh_token=token_service.issue_refresh_token(user_id),
    )


@router.post(
    "/create-account",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar usuario",
    description="Crea la cuenta, guarda solo el hash del password e inicia sesión.",
)
def create_account(payload: RegisterPayload, response: Response) -> AuthResponse:
    user = auth_service.register(full_name=payload.full_name, email=payload.email, password=payload.password)
    tokens = _start_session(response, str(user["_id"]))
    return AuthResponse(message="Registration successful", user=UserPublic.from_doc(user), **tokens)


@router.post(
    "/login",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    summary="Login con email y password",
)
def login(payload: LoginPayload, response: Response) -> AuthResponse:
    user = auth_service.verify_credentials(email=payload.email, password=payload.password)
    tokens = _start_session(response, str(user["_id"]))
    _log.info("Login ok user_id=%s", user["_id"])
    return AuthResponse(message="Login successful", user=UserPublic.from_doc(user), **tokens)


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    response_model_exclude_none=True,
    summary="Emitir nuevo access token",
    description="Valida el refresh token (cookie o cuerpo según el modo) y emite un access token nuevo.",
)
def refresh(request: Request, response: Response, payload: Optional[RefreshPayload] = None) -> RefreshResponse:
    body = payload.model_dump(by_alias=True) if payload else None
    raw = session_transport.read_refresh_token(request, body)
    if not raw:
        raise Unauthenticated("No refresh token")
    access = token_service.refresh(raw)
    fields = session_transport.deliver(response, access_token=access)
    return RefreshResponse(**fields)


@router.post("/logout", response_model=MessageResponse, summary="Cerrar sesión")
def logout(response: Response) -> MessageResponse:
    session_transport.clear(response)
    return MessageResponse(message="Logged out")


@router.get("/get-user", response_model=UserResponse, summary="Usuario autenticado")
def get_user(user_id: str = Depends(get_current_user_id)) -> UserResponse:
    user = auth_service.get_user(user_id)
    if user is None:
        # Token válido de una cuenta que ya no existe
        raise Unauthenticated("User not found")
    return UserResponse(user=UserOut.from_doc(user))
