from __future__ import annotations

import json
from abc import ABC, abstractmethod
from functools import lru_cache
from threading import RLock
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .errors import CollectionNotFound, QueryFailure
from .logging_config import get_logger
from .models import PostRecord, PostTypeObject, RoleObject, TaxonomyObject, TermRecord, UserRecord
from .schemas import CollectionKind, SortDirection
from .settings import get_settings
from .utils import add_query_arg

logger = get_logger(__name__)

# Filters each collection kind understands; anything else is a malformed query.
_SUPPORTED_FILTERS = {
    CollectionKind.POSTS: {"status", "lang"},
    CollectionKind.TERMS: {"lang"},
    CollectionKind.USERS_BY_ROLE: set(),
}


# PUBLIC_INTERFACE
class Host(ABC):
    """
    Abstract contract for the content host whose admin sidebar is being decorated.

    The host owns the content, the capability model, translations and the admin URL
    layout. Submenu code only ever reads from it.
    """

    @abstractmethod
    def query_collection(
        self,
        kind: CollectionKind,
        collection_id: str,
        filters: Mapping[str, Any],
        limit: int,
        sort_field: str,
        sort_direction: SortDirection,
    ) -> List[Dict[str, Any]]:
        """
        Return at most `limit` records of the collection ordered by `sort_field`.

        Raises:
            CollectionNotFound: the collection is unknown.
            QueryFailure: the query could not be run (e.g. unsupported filter or field).
        """

    @abstractmethod
    def collection_exists(self, kind: CollectionKind, collection_id: str) -> bool:
        """Return True if the post type, taxonomy or role is registered."""

    @abstractmethod
    def public_post_types(self) -> List[str]:
        """Return the slugs of all public post types, in registration order."""

    @abstractmethod
    def public_taxonomies(self) -> List[str]:
        """Return the slugs of all public taxonomies, in registration order."""

    @abstractmethod
    def role_names(self) -> List[str]:
        """Return the slugs of all roles, in registration order."""

    @abstractmethod
    def get_post_type(self, name: str) -> Optional[PostTypeObject]:
        ...

    @abstractmethod
    def get_taxonomy(self, name: str) -> Optional[TaxonomyObject]:
        ...

    @abstractmethod
    def get_role(self, name: str) -> Optional[RoleObject]:
        ...

    @abstractmethod
    def count_users_by_role(self) -> Dict[str, int]:
        """Return the number of users per role slug."""

    @abstractmethod
    def user_can(self, actor: Optional[str], capability: str) -> bool:
        """Return True if the user with login `actor` holds `capability`."""

    @abstractmethod
    def translate(self, text: str, domain: str) -> str:
        ...

    @abstractmethod
    def translate_role(self, label: str) -> str:
        ...

    @abstractmethod
    def theme_textdomain(self) -> Optional[str]:
        ...

    @abstractmethod
    def default_language(self) -> Optional[str]:
        """Return the default content language, or None on a monolingual host."""

    @abstractmethod
    def admin_url(self, path: str = "") -> str:
        ...

    @abstractmethod
    def edit_term_link(self, term_id: int, taxonomy: str, post_type: str = "post") -> str:
        """Return the edit screen URL of a term, or '' if the taxonomy is unknown."""


def _sort_key(field: str):
    def key(record: Mapping[str, Any]):
        value = record[field]
        if isinstance(value, str):
            return (0, value.casefold())
        if value is None:
            return (1, "")
        return (0, value)

    return key


class InMemoryHost(Host):
    """
    Thread-safe in-memory host suitable for testing and the default runtime.
    """

    def __init__(self, base_url: str = "http://localhost") -> None:
        self._lock = RLock()
        self._base_url = base_url.rstrip("/")
        self._post_types: Dict[str, PostTypeObject] = {}
        self._taxonomies: Dict[str, TaxonomyObject] = {}
        self._roles: Dict[str, RoleObject] = {}
        self._posts: List[PostRecord] = []
        self._terms: List[TermRecord] = []
        self._users: List[UserRecord] = []
        self._translations: Dict[str, Dict[str, str]] = {}
        self._default_language: Optional[str] = None
        self._theme_textdomain: Optional[str] = None

    # Registration

    def register_post_type(
        self, name: str, public: bool = True, edit_capability: Optional[str] = None
    ) -> PostTypeObject:
        obj = PostTypeObject(name=name, public=public, edit_capability=edit_capability)
        with self._lock:
            self._post_types[name] = obj
        return obj

    def register_taxonomy(
        self,
        name: str,
        object_type: Optional[Sequence[str]] = None,
        public: bool = True,
        edit_capability: Optional[str] = None,
    ) -> TaxonomyObject:
        obj = TaxonomyObject(
            name=name,
            public=public,
            object_type=list(object_type or ["post"]),
            edit_capability=edit_capability,
        )
        with self._lock:
            self._taxonomies[name] = obj
        return obj

    def add_role(self, name: str, label: str, capabilities: Iterable[str] = ()) -> RoleObject:
        obj = RoleObject(name=name, label=label, capabilities=set(capabilities))
        with self._lock:
            self._roles[name] = obj
        return obj

    def add_post(
        self, post_id: int, title: str, post_type: str, status: str = "publish", lang: Optional[str] = None
    ) -> PostRecord:
        record: PostRecord = {"id": post_id, "title": title, "post_type": post_type, "status": status, "lang": lang}
        with self._lock:
            self._posts.append(record)
        return record

    def add_term(self, term_id: int, name: str, taxonomy: str, lang: Optional[str] = None) -> TermRecord:
        record: TermRecord = {"term_id": term_id, "name": name, "taxonomy": taxonomy, "lang": lang}
        with self._lock:
            self._terms.append(record)
        return record

    def add_user(self, user_id: int, user_login: str, role: str, display_name: str = "") -> UserRecord:
        record: UserRecord = {"id": user_id, "display_name": display_name, "user_login": user_login, "role": role}
        with self._lock:
            self._users.append(record)
        return record

    def add_translation(self, domain: str, text: str, translated: str) -> None:
        with self._lock:
            self._translations.setdefault(domain, {})[text] = translated

    def set_default_language(self, lang: Optional[str]) -> None:
        self._default_language = lang

    def set_theme_textdomain(self, domain: Optional[str]) -> None:
        self._theme_textdomain = domain

    # Host contract

    def collection_exists(self, kind: CollectionKind, collection_id: str) -> bool:
        with self._lock:
            if kind == CollectionKind.POSTS:
                return collection_id in self._post_types
            if kind == CollectionKind.TERMS:
                return collection_id in self._taxonomies
            return collection_id in self._roles

    def query_collection(
        self,
        kind: CollectionKind,
        collection_id: str,
        filters: Mapping[str, Any],
        limit: int,
        sort_field: str,
        sort_direction: SortDirection,
    ) -> List[Dict[str, Any]]:
        if not self.collection_exists(kind, collection_id):
            raise CollectionNotFound(kind.value, collection_id)

        unsupported = set(filters) - _SUPPORTED_FILTERS[kind]
        if unsupported:
            raise QueryFailure(f"Unsupported filter(s) for {kind.value}: {', '.join(sorted(unsupported))}")
        if limit < 0:
            raise QueryFailure("limit must be >= 0")

        with self._lock:
            if kind == CollectionKind.POSTS:
                records: List[Mapping[str, Any]] = [p for p in self._posts if p["post_type"] == collection_id]
            elif kind == CollectionKind.TERMS:
                records = [t for t in self._terms if t["taxonomy"] == collection_id]
            else:
                records = [u for u in self._users if u["role"] == collection_id]

            for name, value in filters.items():
                records = [r for r in records if r.get(name) == value]

            if records and sort_field not in records[0]:
                raise QueryFailure(f"Cannot order {kind.value} by {sort_field!r}")

            ordered = sorted(
                records,
                key=_sort_key(sort_field),
                reverse=sort_direction == SortDirection.DESC,
            )
            # Return copies to avoid external mutation
            return [dict(r) for r in ordered[:limit]]

    def public_post_types(self) -> List[str]:
        with self._lock:
            return [name for name, obj in self._post_types.items() if obj.public]

    def public_taxonomies(self) -> List[str]:
        with self._lock:
            return [name for name, obj in self._taxonomies.items() if obj.public]

    def role_names(self) -> List[str]:
        with self._lock:
            return list(self._roles)

    def get_post_type(self, name: str) -> Optional[PostTypeObject]:
        with self._lock:
            return self._post_types.get(name)

    def get_taxonomy(self, name: str) -> Optional[TaxonomyObject]:
        with self._lock:
            return self._taxonomies.get(name)

    def get_role(self, name: str) -> Optional[RoleObject]:
        with self._lock:
            return self._roles.get(name)

    def count_users_by_role(self) -> Dict[str, int]:
        with self._lock:
            counts = {name: 0 for name in self._roles}
            for user in self._users:
                counts[user["role"]] = counts.get(user["role"], 0) + 1
            return counts

    def user_can(self, actor: Optional[str], capability: str) -> bool:
        if not actor:
            return False
        with self._lock:
            user = next((u for u in self._users if u["user_login"] == actor), None)
            if user is None:
                return False
            role = self._roles.get(user["role"])
            return role is not None and capability in role.capabilities

    def translate(self, text: str, domain: str) -> str:
        return self._translations.get(domain, {}).get(text, text)

    def translate_role(self, label: str) -> str:
        return self.translate(label, "default")

    def theme_textdomain(self) -> Optional[str]:
        return self._theme_textdomain

    def default_language(self) -> Optional[str]:
        return self._default_language

    def admin_url(self, path: str = "") -> str:
        return f"{self._base_url}/wp-admin/{path.lstrip('/')}"

    def edit_term_link(self, term_id: int, taxonomy: str, post_type: str = "post") -> str:
        if taxonomy not in self._taxonomies:
            return ""
        args: Dict[str, Any] = {"taxonomy": taxonomy, "tag_ID": term_id}
        if post_type != "post":
            args["post_type"] = post_type
        return add_query_arg(args, self.admin_url("term.php"))

    # Seeding

    def register_core_types(self) -> "InMemoryHost":
        """Register the post types, taxonomies and roles every fresh install has."""
        self.register_post_type("post", edit_capability="edit_posts")
        self.register_post_type("page", edit_capability="edit_pages")
        self.register_post_type("attachment", edit_capability="upload_files")
        self.register_taxonomy("category", ["post"], edit_capability="manage_categories")
        self.register_taxonomy("post_tag", ["post"], edit_capability="manage_categories")
        self.register_taxonomy("post_format", ["post"])
        self.add_role(
            "administrator",
            "Administrator",
            {"read", "edit_posts", "edit_pages", "manage_categories", "upload_files", "list_users", "edit_users"},
        )
        self.add_role("editor", "Editor", {"read", "edit_posts", "edit_pages", "manage_categories", "upload_files"})
        self.add_role("author", "Author", {"read", "edit_posts", "upload_files"})
        self.add_role("contributor", "Contributor", {"read", "edit_posts"})
        self.add_role("subscriber", "Subscriber", {"read"})
        return self

    def load_fixture(self, data: Mapping[str, Any]) -> "InMemoryHost":
        """
        Seed the host from a fixture mapping.

        Recognized keys: base_url, default_language, theme_textdomain, post_types,
        taxonomies, roles, posts, terms, users, translations ({domain: {text: translated}}).
        """
        if "base_url" in data:
            self._base_url = str(data["base_url"]).rstrip("/")
        if "default_language" in data:
            self.set_default_language(data["default_language"])
        if "theme_textdomain" in data:
            self.set_theme_textdomain(data["theme_textdomain"])
        for pt in data.get("post_types", []):
            self.register_post_type(pt["name"], pt.get("public", True), pt.get("edit_capability"))
        for tax in data.get("taxonomies", []):
            self.register_taxonomy(
                tax["name"], tax.get("object_type"), tax.get("public", True), tax.get("edit_capability")
            )
        for role in data.get("roles", []):
            self.add_role(role["name"], role.get("label", role["name"].title()), role.get("capabilities", []))
        for post in data.get("posts", []):
            self.add_post(post["id"], post["title"], post["post_type"], post.get("status", "publish"), post.get("lang"))
        for term in data.get("terms", []):
            self.add_term(term["term_id"], term["name"], term["taxonomy"], term.get("lang"))
        for user in data.get("users", []):
            self.add_user(user["id"], user["user_login"], user["role"], user.get("display_name", ""))
        for domain, strings in data.get("translations", {}).items():
            for text, translated in strings.items():
                self.add_translation(domain, text, translated)
        return self


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_host() -> Host:
    """
    Return the process-wide host.
    - Core post types, taxonomies and roles are always registered
    - SUBMENU_FIXTURE_PATH, when set, seeds content from a JSON file
    """
    settings = get_settings()
    host = InMemoryHost().register_core_types()
    if settings.fixture_path:
        with open(settings.fixture_path, "r", encoding="utf-8") as f:
            host.load_fixture(json.load(f))
        logger.info("Loaded host fixture from %s", settings.fixture_path)
    return host
