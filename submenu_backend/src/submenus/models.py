from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set, TypedDict


# PUBLIC_INTERFACE
class PostRecord(TypedDict):
    """
    A published content item of some post type.

    Fields:
    - id: Unique integer identifier
    - title: Post title as stored (not escaped)
    - post_type: Post type slug, e.g. 'page'
    - status: Publication status, e.g. 'publish' or 'draft'
    - lang: Language slug or None when the host is monolingual
    """

    id: int
    title: str
    post_type: str
    status: str
    lang: Optional[str]


# PUBLIC_INTERFACE
class TermRecord(TypedDict):
    """A taxonomy term."""

    term_id: int
    name: str
    taxonomy: str
    lang: Optional[str]


# PUBLIC_INTERFACE
class UserRecord(TypedDict):
    """A user account; display_name may be empty."""

    id: int
    display_name: str
    user_login: str
    role: str


@dataclass(frozen=True)
class PostTypeObject:
    name: str
    public: bool = True
    edit_capability: Optional[str] = None


@dataclass(frozen=True)
class TaxonomyObject:
    name: str
    public: bool = True
    object_type: List[str] = field(default_factory=lambda: ["post"])
    edit_capability: Optional[str] = None


@dataclass(frozen=True)
class RoleObject:
    name: str
    label: str
    capabilities: Set[str] = field(default_factory=set)
