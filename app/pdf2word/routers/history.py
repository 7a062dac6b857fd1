"""
Router for conversion history.

Handles:
- Listing the most recent conversion attempts
"""

import logging

from fastapi import APIRouter, Depends, Request

from ..history_store import ConversionHistory, get_history

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["history"])


@router.get("/history")
async def get_conversion_history(
    request: Request,
    history: ConversionHistory = Depends(get_history),
) -> list[dict]:
    """
    Get the most recent conversion attempts, newest first.

    Returns:
        Up to ``history_limit`` records (20 by default).
    """
    limit = request.app.state.settings.history_limit
    return [record.to_json() for record in history.list(limit)]
