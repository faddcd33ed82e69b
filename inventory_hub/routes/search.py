"""Global search routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from inventory_hub.auth import get_current_user
from inventory_hub.config import settings
from inventory_hub.database import get_db
from inventory_hub.models.user import User
from inventory_hub.schemas.search import SearchResponse
from inventory_hub.services.item_search import search_items

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("", response_model=SearchResponse)
@router.get("/", response_model=SearchResponse, include_in_schema=False)
async def global_search(
    q: str = Query("", description="Text to look for"),
    limit: Optional[int] = Query(None, description="Maximum number of results"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Search the caller's own items by field values, custom id, or inventory name."""
    if limit is None:
        limit = settings.SEARCH_DEFAULT_LIMIT
    limit = max(1, min(limit, settings.SEARCH_MAX_LIMIT))

    return {"results": search_items(db, current_user, q, limit)}
