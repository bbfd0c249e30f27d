from submenus.host import InMemoryHost


class CountingHost(InMemoryHost):
    """In-memory host recording every collection query; can be told to fail."""

    def __init__(self) -> None:
        super().__init__(base_url="https://example.test")
        self.queries = []
        self.fail_with = None

    def query_collection(self, kind, collection_id, filters, limit, sort_field, sort_direction):
        self.queries.append(
            {"kind": kind, "collection_id": collection_id, "filters": dict(filters), "limit": limit}
        )
        if self.fail_with is not None:
            raise self.fail_with
        return super().query_collection(kind, collection_id, filters, limit, sort_field, sort_direction)


def seed_site(host: InMemoryHost) -> InMemoryHost:
    host.register_core_types()
    host.register_post_type("event", edit_capability="edit_events")
    host.register_taxonomy("event_type", ["event"], edit_capability="manage_event_types")
    host.add_user(1, "admin", "administrator", "Site Admin")
    host.add_user(2, "ed", "editor", "Eddie Editor")
    host.add_user(3, "author1", "author", "")
    host.add_user(4, "sub", "subscriber", "Sam Subscriber")
    host.add_post(10, "Contact", "page")
    host.add_post(11, "About", "page")
    host.add_post(12, "Hidden draft", "page", status="draft")
    host.add_post(20, "Spring Fair", "event")
    host.add_term(5, "News", "category")
    host.add_term(6, "Concerts", "event_type")
    return host
