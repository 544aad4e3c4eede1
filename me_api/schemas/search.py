"""Search request/response schemas."""

from pydantic import BaseModel

from .common import ListResponse


class SearchResult(BaseModel):
    """One match projected into the shape shared by all sources."""

    type: str
    title: str
    description: str | None
    category: str | None
    id: int


class SearchResponse(ListResponse[SearchResult]):
    """Ranked results of a global search."""

    query: str


class AdvancedSearchResponse(SearchResponse):
    """Filtered results; ``type`` and ``category`` echo the filters or 'all'."""

    type: str
    category: str
