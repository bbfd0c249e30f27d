from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union
from urllib.parse import urlencode

QueryValue = Union[str, int]


# PUBLIC_INTERFACE
def add_query_arg(args: Mapping[str, QueryValue], url: str) -> str:
    """
    Append url-encoded query arguments to a URL, keeping any it already has.

    Args:
        args: Query arguments in the order they should appear.
        url: Base URL, with or without an existing query string.

    Returns:
        The URL with `args` appended after '?' or '&'.
    """
    if not args:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode([(k, str(v)) for k, v in args.items()])}"


# PUBLIC_INTERFACE
def list_result_envelope(items: List[Any], has_more: bool, limit: int) -> Dict[str, Any]:
    """
    Build the standard envelope for bounded list endpoints.

    Args:
        items: Records for the current page (already trimmed to `limit`).
        has_more: Whether more records exist beyond the page.
        limit: The limit used for the query.

    Returns:
        Dict with keys: items, has_more, limit.
    """
    return {
        "items": [dict(it) for it in items],
        "has_more": bool(has_more),
        "limit": int(max(limit, 1)),
    }
