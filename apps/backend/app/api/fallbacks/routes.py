"""Agent console API routes for reviewing fallback entries."""

import logging

from fastapi import APIRouter, HTTPException, status

from app.core.dependencies import FallbackStoreDep
from app.schemas.fallback import (
    FallbackEntrySchema,
    FallbackUpdateRequest,
    FallbackUpdateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[FallbackEntrySchema], response_model_by_alias=True)
def list_fallbacks(store: FallbackStoreDep) -> list[FallbackEntrySchema]:
    """List every fallback entry, oldest first."""
    entries = store.list()
    logger.info("Returning %d fallback entries", len(entries))
    return [FallbackEntrySchema.model_validate(entry.to_record()) for entry in entries]


@router.post("/update", response_model=FallbackUpdateResponse)
def update_fallback(
    payload: FallbackUpdateRequest,
    store: FallbackStoreDep,
) -> FallbackUpdateResponse:
    """
    Record a human agent's reply on a fallback entry.

    Raises:
        HTTPException 404: If no entry has the given timestamp.
    """
    logger.info("Updating fallback entry %s", payload.timestamp)
    if not store.update(payload.timestamp, payload.human_reply):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Fallback entry not found or could not be updated.",
        )
    return FallbackUpdateResponse(message="Fallback entry updated successfully.")
