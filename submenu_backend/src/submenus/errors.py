from __future__ import annotations


class SubmenuError(Exception):
    """Base class for errors raised by a content host."""


class CollectionNotFound(SubmenuError):
    """The post type, taxonomy or role is unknown to the host."""

    def __init__(self, kind: str, collection_id: str) -> None:
        super().__init__(f"Unknown {kind} collection: {collection_id!r}")
        self.kind = kind
        self.collection_id = collection_id


class QueryFailure(SubmenuError):
    """The host could not run a collection query (e.g. a malformed filter)."""
