import os

from fastapi.testclient import TestClient

os.environ.setdefault("ENABLE_BASIC_AUTH", "false")

from submenus.host import InMemoryHost, get_host  # noqa: E402
from submenus.main import app  # noqa: E402
from submenus.settings import Settings, get_settings  # noqa: E402

from helpers import seed_site  # noqa: E402

site = seed_site(InMemoryHost(base_url="https://example.test"))
for i in range(21):
    site.add_post(100 + i, f"Report {i:02d}", "event")

app.dependency_overrides[get_host] = lambda: site
app.dependency_overrides[get_settings] = lambda: Settings(default_limit=20)

client = TestClient(app)


def as_actor(login):
    return {"X-Actor": login}


class TestHealth:
    def test_health_check(self):
        res = client.get("/")
        assert res.status_code == 200
        data = res.json()
        assert data["message"] == "Healthy"
        assert isinstance(data["default_limit"], int)


class TestSubmenuEntries:
    def test_admin_entries(self):
        res = client.get("/api/v1/submenus/", headers=as_actor("admin"))
        assert res.status_code == 200
        body = res.json()
        assert body["total"] == len(body["entries"])
        parents = {e["parent_slug"] for e in body["entries"]}
        assert "edit.php?post_type=page" in parents
        assert "edit.php?post_type=event" in parents
        assert "users.php" in parents

    def test_event_overflow_gets_see_more(self):
        res = client.get("/api/v1/submenus/", headers=as_actor("admin"))
        events = [e for e in res.json()["entries"] if e["parent_slug"] == "edit.php?post_type=event"]
        # 22 published events, limit 20
        assert len(events) == 21
        assert events[-1]["page_title"] == "See more →"
        assert events[-1]["menu_slug"] == "https://example.test/wp-admin/edit.php?post_type=event"

    def test_editor_has_no_user_entries(self):
        res = client.get("/api/v1/submenus/", headers=as_actor("ed"))
        assert res.status_code == 200
        assert all(e["parent_slug"] != "users.php" for e in res.json()["entries"])

    def test_missing_actor_gets_empty_list(self):
        res = client.get("/api/v1/submenus/")
        assert res.status_code == 200
        assert res.json() == {"entries": [], "total": 0}


class TestAssetsEndpoint:
    def test_assets_for_editor(self):
        res = client.get("/api/v1/submenus/assets", headers=as_actor("ed"))
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("text/html")
        assert res.text.startswith("<style>")

    def test_assets_for_subscriber(self):
        res = client.get("/api/v1/submenus/assets", headers=as_actor("sub"))
        assert res.status_code == 200
        assert res.text == ""


class TestCollections:
    def test_twenty_one_of_limit_twenty(self):
        site.register_post_type("report")
        for i in range(21):
            site.add_post(500 + i, f"Quarter {i:02d}", "report")
        res = client.get("/api/v1/submenus/collections/posts/report?limit=20")
        assert res.status_code == 200
        body = res.json()
        assert len(body["items"]) == 20
        assert body["has_more"] is True
        assert body["limit"] == 20
        assert body["items"][0]["title"] == "Quarter 00"

    def test_exact_limit(self):
        res = client.get("/api/v1/submenus/collections/posts/page?limit=2")
        body = res.json()
        assert [p["title"] for p in body["items"]] == ["About", "Contact"]
        assert body["has_more"] is False

    def test_order_override(self):
        res = client.get("/api/v1/submenus/collections/posts/page?order=desc")
        assert [p["title"] for p in res.json()["items"]] == ["Contact", "About"]

    def test_terms_and_users(self):
        res_terms = client.get("/api/v1/submenus/collections/terms/category")
        assert [t["name"] for t in res_terms.json()["items"]] == ["News"]
        res_users = client.get("/api/v1/submenus/collections/users_by_role/editor")
        assert [u["user_login"] for u in res_users.json()["items"]] == ["ed"]

    def test_unknown_collection_is_empty(self):
        res = client.get("/api/v1/submenus/collections/terms/does_not_exist")
        assert res.status_code == 200
        assert res.json() == {"items": [], "has_more": False, "limit": 20}

    def test_limit_zero_rejected(self):
        res = client.get("/api/v1/submenus/collections/posts/page?limit=0")
        assert res.status_code == 422
        body = res.json()
        assert body.get("error") == "ValidationError"
        assert body.get("message") == "Request validation failed"
        assert isinstance(body.get("detail"), list)

    def test_unknown_kind_rejected(self):
        res = client.get("/api/v1/submenus/collections/comments/page")
        assert res.status_code == 422
        assert res.json().get("error") == "ValidationError"

    def test_invalid_order(self):
        res = client.get("/api/v1/submenus/collections/posts/page?order=sideways")
        assert res.status_code == 400
        assert res.json()["detail"] == "order must be 'asc' or 'desc'"
