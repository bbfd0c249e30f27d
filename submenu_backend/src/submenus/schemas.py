from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


# PUBLIC_INTERFACE
class CollectionKind(str, Enum):
    """The three kinds of collection a submenu can list."""

    POSTS = "posts"
    TERMS = "terms"
    USERS_BY_ROLE = "users_by_role"


# PUBLIC_INTERFACE
class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# PUBLIC_INTERFACE
class ListRequest(BaseModel):
    """
    A bounded list query against one collection of the host.

    `limit` is the number of items displayed; the fetcher asks the host for one more
    to find out whether a "See more" link is needed.
    """

    model_config = ConfigDict(frozen=True)

    collection_kind: CollectionKind = Field(..., description="Kind of collection to list")
    collection_id: str = Field(..., description="Post type, taxonomy or role slug", min_length=1)
    limit: int = Field(..., ge=1, description="Maximum number of items to return")
    sort_field: str = Field(..., description="Record field to order by")
    sort_direction: SortDirection = Field(default=SortDirection.ASC, description="Ordering direction")

    @field_validator("collection_id", "sort_field")
    @classmethod
    def strip_identifier(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("identifier must not be blank")
        return s


# PUBLIC_INTERFACE
class MenuEntry(BaseModel):
    """
    One registered submenu page.

    Mirrors the arguments of the host's submenu registration call: the visible page
    title, the HTML menu label, the capability required to see it and the link target.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "parent_slug": "edit.php?post_type=page",
                "page_title": "About us",
                "menu_title": '<span aria-hidden="true">&nbsp;&nbsp;-&nbsp;</span>About us',
                "capability": "edit_pages",
                "menu_slug": "https://example.test/wp-admin/post.php?post=12&action=edit",
            }
        },
    )

    parent_slug: str = Field(..., description="Slug of the parent menu entry")
    page_title: str = Field(..., description="Plain (escaped) title")
    menu_title: str = Field(..., description="HTML label shown in the sidebar")
    capability: str = Field(..., description="Capability required to see the entry")
    menu_slug: str = Field(..., description="Target URL, or '#' for non-clickable headers")


# PUBLIC_INTERFACE
class MenuEnvelope(BaseModel):
    entries: List[MenuEntry] = Field(..., description="Registered submenu entries, in order")
    total: int = Field(..., description="Number of entries")


# PUBLIC_INTERFACE
class ListResultOut(BaseModel):
    """
    Serialized bounded list result.
    """

    items: List[Dict[str, Any]] = Field(..., description="At most `limit` records in sort order")
    has_more: bool = Field(..., description="True when more records exist beyond `limit`")
    limit: int = Field(..., description="Limit applied to the query")
