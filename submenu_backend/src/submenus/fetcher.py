"""
Bounded list fetching.

Every submenu shows at most `limit` records and a "See more" link when the
collection holds more. Both facts come out of a single host query: ask for
`limit + 1` records, and if the extra one shows up, drop it and flag `has_more`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from .errors import SubmenuError
from .host import Host
from .logging_config import get_logger
from .schemas import CollectionKind, ListRequest, SortDirection

logger = get_logger(__name__)

T = TypeVar("T")


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class ListResult(Generic[T]):
    """
    At most `limit` records in sort order.

    Attributes:
        items: The records of the page
        has_more: True if the source held more than `limit` records at fetch time
    """

    items: List[T] = field(default_factory=list)
    has_more: bool = False

    @classmethod
    def empty(cls) -> "ListResult[T]":
        return cls(items=[], has_more=False)


# PUBLIC_INTERFACE
def fetch_bounded(fetch: Callable[[int], Sequence[T]], limit: int) -> ListResult[T]:
    """
    Call `fetch(limit + 1)` once and trim the result to `limit`.

    Args:
        fetch: Primitive returning at most the requested number of records, in order.
        limit: Number of records to keep (>= 1).

    Returns:
        ListResult with the first `limit` records and the overflow flag.
    """
    if limit < 1:
        raise ValueError("limit must be >= 1")

    records = list(fetch(limit + 1))
    has_more = len(records) > limit
    return ListResult(items=records[:limit], has_more=has_more)


# PUBLIC_INTERFACE
class BoundedListFetcher:
    """
    Run ListRequests against a host, failing soft.

    Unknown collections and host errors (not found or query failure) both come back
    as an empty result; the menu only ever renders an empty section in either case.
    """

    def __init__(self, host: Host) -> None:
        self._host = host

    def _filters(self, request: ListRequest, language: Optional[str]) -> Dict[str, Any]:
        filters: Dict[str, Any] = {}
        if request.collection_kind == CollectionKind.POSTS:
            filters["status"] = "publish"
        # Users carry no language
        if language and request.collection_kind != CollectionKind.USERS_BY_ROLE:
            filters["lang"] = language
        return filters

    def fetch(self, request: ListRequest, language: Optional[str] = None) -> ListResult[Dict[str, Any]]:
        """
        Fetch one bounded page of a collection.

        `language` overrides the host's default language; when neither is set no
        language filter is applied.
        """
        kind = request.collection_kind
        if not self._host.collection_exists(kind, request.collection_id):
            logger.debug("Skipping unknown %s collection %r", kind.value, request.collection_id)
            return ListResult.empty()

        filters = self._filters(request, language or self._host.default_language())

        def query(count: int) -> List[Dict[str, Any]]:
            return self._host.query_collection(
                kind,
                request.collection_id,
                filters,
                count,
                request.sort_field,
                request.sort_direction,
            )

        try:
            return fetch_bounded(query, request.limit)
        except SubmenuError as exc:
            logger.warning("Query for %s collection %r failed: %s", kind.value, request.collection_id, exc)
            return ListResult.empty()

    def fetch_posts(
        self, post_type: str, limit: int, descending: bool = False
    ) -> ListResult[Dict[str, Any]]:
        """Published posts of a post type ordered by title."""
        return self.fetch(
            ListRequest(
                collection_kind=CollectionKind.POSTS,
                collection_id=post_type,
                limit=limit,
                sort_field="title",
                sort_direction=SortDirection.DESC if descending else SortDirection.ASC,
            )
        )

    def fetch_terms(self, taxonomy: str, limit: int) -> ListResult[Dict[str, Any]]:
        """Terms of a taxonomy ordered by name, empty terms included."""
        return self.fetch(
            ListRequest(
                collection_kind=CollectionKind.TERMS,
                collection_id=taxonomy,
                limit=limit,
                sort_field="name",
            )
        )

    def fetch_users_by_role(self, role: str, limit: int) -> ListResult[Dict[str, Any]]:
        """Users holding a role ordered by display name."""
        return self.fetch(
            ListRequest(
                collection_kind=CollectionKind.USERS_BY_ROLE,
                collection_id=role,
                limit=limit,
                sort_field="display_name",
            )
        )
