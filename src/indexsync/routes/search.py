"""Search API endpoint over the synced index."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request

from indexsync.search.schemas import SearchResponse

if TYPE_CHECKING:
    from indexsync.search.index import SearchIndex

router = APIRouter(tags=["search"])


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search synced CMS records",
    description="Passes the query to Elasticsearch simple_query_string.",
)
async def search(
    request: Request,
    q: str = Query(
        ...,
        min_length=1,
        max_length=200,
        description="Search query string",
    ),
    collection: str | None = Query(
        default=None,
        min_length=1,
        description="Restrict results to one collection",
    ),
    limit: int = Query(default=20, ge=1, le=100, description="Results per page"),
    offset: int = Query(default=0, ge=0, description="Results to skip"),
) -> SearchResponse:
    """Search indexed records across collections.

    Args:
        request: FastAPI request (provides access to app state).
        q: Search query string (1-200 characters).
        collection: Optional collection filter.
        limit: Maximum results per page (1-100, default 20).
        offset: Pagination offset (default 0).

    Returns:
        Paginated search results ranked by the engine.
    """
    search_index: SearchIndex = request.app.state.search_index

    return await search_index.search(
        query=q,
        collection=collection,
        limit=limit,
        offset=offset,
    )
