"""
Endpoints de notas. Todas requieren sesión y operan solo sobre las notas
del usuario autenticado.
"""
from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_current_user_id
from app.api.schemas.note import (
    MessageResponse,
    NoteCreate,
    NoteListResponse,
    NoteOut,
    NotePinnedUpdate,
    NoteResponse,
    NoteUpdate,
)
from app.services import note_service

router = APIRouter(tags=["Notes"], dependencies=[Depends(get_current_user_id)])


@router.post(
    "/add-note",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear nota",
)
def add_note(payload: NoteCreate, user_id: str = Depends(get_current_user_id)) -> NoteResponse:
    note = note_service.create(user_id, title=payload.title, content=payload.content, tags=payload.tags)
    return NoteResponse(message="Note added successfully", note=NoteOut.from_doc(note))


@router.get("/get-note/{note_id}", response_model=NoteResponse, summary="Obtener una nota")
def get_note(note_id: str, user_id: str = Depends(get_current_user_id)) -> NoteResponse:
    return NoteResponse(note=NoteOut.from_doc(note_service.get(user_id, note_id)))


@router.put(
    "/edit-note/{note_id}",
    response_model=NoteResponse,
    summary="Editar nota (parcial)",
    description="Solo se modifican los campos presentes en el cuerpo.",
)
def edit_note(note_id: str, payload: NoteUpdate, user_id: str = Depends(get_current_user_id)) -> NoteResponse:
    fields = payload.model_dump(exclude_unset=True)
    note = note_service.update(user_id, note_id, fields)
    return NoteResponse(message="Note updated successfully", note=NoteOut.from_doc(note))


@router.put("/update-note-pinned/{note_id}", response_model=NoteResponse, summary="Fijar / desfijar nota")
def update_note_pinned(
    note_id: str, payload: NotePinnedUpdate, user_id: str = Depends(get_current_user_id)
) -> NoteResponse:
    note = note_service.set_pinned(user_id, note_id, payload.is_pinned)
    message = "Note pinned successfully" if payload.is_pinned else "Note unpinned successfully"
    return NoteResponse(message=message, note=NoteOut.from_doc(note))


@router.get("/get-all-notes", response_model=NoteListResponse, summary="Listar notas")
def get_all_notes(user_id: str = Depends(get_current_user_id)) -> NoteListResponse:
    notes = note_service.list_all(user_id)
    return NoteListResponse(notes=[NoteOut.from_doc(n) for n in notes])


@router.get("/search-notes", response_model=NoteListResponse, summary="Buscar notas")
def search_notes(
    query: str | None = Query(default=None, description="Texto a buscar en título, contenido o tags"),
    user_id: str = Depends(get_current_user_id),
) -> NoteListResponse:
    notes = note_service.search(user_id, query)
    return NoteListResponse(notes=[NoteOut.from_doc(n) for n in notes])


@router.delete("/delete-note/{note_id}", response_model=MessageResponse, summary="Eliminar nota")
def delete_note(note_id: str, user_id: str = Depends(get_current_user_id)) -> MessageResponse:
    note_service.delete(user_id, note_id)
    return MessageResponse(message="Note deleted successfully")
