from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from ..assets import admin_submenu_assets
from ..auth import get_actor, get_basic_auth_dependency
from ..context import RequestContext
from ..host import Host, get_host
from ..menu import register_all_submenus
from ..schemas import CollectionKind, ListRequest, ListResultOut, MenuEnvelope, SortDirection
from ..settings import Settings, get_settings
from ..utils import list_result_envelope

router = APIRouter(
    prefix="/api/v1/submenus",
    tags=["submenus"],
    dependencies=[Depends(get_basic_auth_dependency())],
)

_SORT_FIELDS = {
    CollectionKind.POSTS: "title",
    CollectionKind.TERMS: "name",
    CollectionKind.USERS_BY_ROLE: "display_name",
}


def get_request_context(
    host: Host = Depends(get_host),
    settings: Settings = Depends(get_settings),
    actor: Optional[str] = Depends(get_actor),
) -> RequestContext:
    """
    One context per request: the config snapshot is computed at most once per render.
    """
    return RequestContext(host, settings, actor)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=MenuEnvelope,
    summary="List Submenu Entries",
    description=(
        "Register the dynamic submenus for the acting user (X-Actor header) and return "
        "the entries in registration order. Users without edit_posts get an empty list."
    ),
    responses={200: {"description": "Entries built successfully"}},
)
def list_submenu_entries(context: RequestContext = Depends(get_request_context)) -> MenuEnvelope:
    """
    Build the sidebar submenus for the current actor.
    """
    registry = register_all_submenus(context)
    entries = registry.entries
    return MenuEnvelope(entries=entries, total=len(entries))


# PUBLIC_INTERFACE
@router.get(
    "/assets",
    response_class=HTMLResponse,
    summary="Admin Head Assets",
    description="Style block injected into the admin page head. Empty for users without edit_posts.",
)
def get_submenu_assets(context: RequestContext = Depends(get_request_context)) -> HTMLResponse:
    return HTMLResponse(content=admin_submenu_assets(context))


# PUBLIC_INTERFACE
@router.get(
    "/collections/{kind}/{collection_id}",
    response_model=ListResultOut,
    summary="Bounded Collection List",
    description=(
        "Return at most `limit` records of a post type, taxonomy or role, plus a has_more "
        "flag. Unknown collections and host query failures both yield an empty list.\n\n"
        "Query parameters:\n"
        "- limit: items to return (>=1); defaults to ADMIN_SUBMENU_DEFAULT_LIMIT\n"
        "- order: asc or desc; defaults to the collection's submenu ordering"
    ),
    responses={
        200: {"description": "List retrieved successfully"},
        400: {"description": "Invalid query parameters"},
    },
)
def get_collection(
    kind: CollectionKind,
    collection_id: str,
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Maximum number of items to return"),
    order: Optional[str] = Query(None, description="Sort direction: 'asc' or 'desc'"),
    context: RequestContext = Depends(get_request_context),
) -> ListResultOut:
    """
    Run one bounded list query, the same one the submenus use.
    """
    if order:
        ord_norm = order.strip().lower()
        if ord_norm not in {"asc", "desc"}:
            raise HTTPException(status_code=400, detail="order must be 'asc' or 'desc'")
        direction = SortDirection(ord_norm)
    elif kind == CollectionKind.POSTS and collection_id in context.config.post_types_sort_desc:
        direction = SortDirection.DESC
    else:
        direction = SortDirection.ASC

    effective_limit = limit or context.default_limit
    request = ListRequest(
        collection_kind=kind,
        collection_id=collection_id,
        limit=effective_limit,
        sort_field=_SORT_FIELDS[kind],
        sort_direction=direction,
    )
    result = context.fetcher.fetch(request)
    return ListResultOut(**list_result_envelope(result.items, result.has_more, effective_limit))
