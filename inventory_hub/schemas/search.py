"""Search schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class SearchResult(BaseModel):
    id: int
    custom_id: Optional[str] = None
    search_text: str
    inventory_id: int
    inventory_name: str
    created_at: datetime


class SearchResponse(BaseModel):
    results: List[SearchResult]
