"""Translation history endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from translingo.models.translation import (
    TranslationCreate,
    TranslationHistoryEntry,
    TranslationType,
    TranslationUpdate,
)
from translingo.services.history_service import HistoryService

router = APIRouter(prefix="/api/translations", tags=["History"])


def get_history_service(request: Request) -> HistoryService:
    """Get HistoryService from app state."""
    history = getattr(request.app.state, "history_service", None)
    if history is None:
        raise HTTPException(status_code=503, detail="History service not available")
    return history


@router.get("", response_model=List[TranslationHistoryEntry])
async def list_translations(
    limit: int = Query(50, ge=1, le=1000, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    type: Optional[TranslationType] = Query(None, description="Filter by input type"),
    favorites: bool = Query(False, description="Only favorites"),
    search: Optional[str] = Query(None, max_length=200, description="Search query"),
    history: HistoryService = Depends(get_history_service),
):
    """
    List past translations, newest first.

    - **search**: Case-insensitive match on source or translated text
    - **type**: Filter by text, voice or ocr
    - **favorites**: Only return favorites

    Only one filter applies, in that order; pagination applies to the
    unfiltered listing.
    """
    return history.query(
        limit=limit,
        offset=offset,
        translation_type=type,
        favorites_only=favorites,
        search=search,
    )


@router.post("", response_model=TranslationHistoryEntry)
async def create_translation(
    body: TranslationCreate,
    history: HistoryService = Depends(get_history_service),
):
    """Save a translation to history."""
    return history.create(body)


@router.delete("")
async def clear_translations(
    history: HistoryService = Depends(get_history_service),
):
    """Delete all history entries."""
    return {"deleted": history.clear()}


@router.get("/{translation_id}", response_model=TranslationHistoryEntry)
async def get_translation(
    translation_id: int,
    history: HistoryService = Depends(get_history_service),
):
    return history.get(translation_id)


@router.patch("/{translation_id}", response_model=TranslationHistoryEntry)
async def update_translation(
    translation_id: int,
    body: TranslationUpdate,
    history: HistoryService = Depends(get_history_service),
):
    """Update fields of a history entry."""
    return history.update(translation_id, body)


@router.post("/{translation_id}/favorite", response_model=TranslationHistoryEntry)
async def toggle_favorite(
    translation_id: int,
    history: HistoryService = Depends(get_history_service),
):
    """Flip the favorite flag of a history entry."""
    return history.toggle_favorite(translation_id)


@router.delete("/{translation_id}")
async def delete_translation(
    translation_id: int,
    history: HistoryService = Depends(get_history_service),
):
    history.delete(translation_id)
    return {"message": "Translation deleted successfully"}
