import json
import threading

from submenus.context import RequestContext, build_submenu_config
from submenus.host import InMemoryHost
from submenus.settings import Settings, get_settings


class TestSubmenuConfig:
    def test_core_exclusions(self, host, settings):
        config = build_submenu_config(host, settings)
        assert config.post_types == ("page", "event")
        assert config.taxonomies == ("category", "post_tag", "event_type")
        assert config.user_roles == ("administrator", "editor", "author", "contributor")
        assert config.post_types_sort_desc == ()

    def test_private_types_are_not_eligible(self, host, settings):
        host.register_post_type("internal_log", public=False)
        host.register_taxonomy("internal_tax", public=False)
        config = build_submenu_config(host, settings)
        assert "internal_log" not in config.post_types
        assert "internal_tax" not in config.taxonomies

    def test_configured_exclusions_are_added(self, host):
        settings = Settings(
            excluded_post_types=("event",),
            excluded_taxonomies=("post_tag",),
            excluded_roles=("contributor",),
            desc_sorted_post_types=("page",),
        )
        config = build_submenu_config(host, settings)
        assert config.post_types == ("page",)
        assert config.taxonomies == ("category", "event_type")
        assert config.user_roles == ("administrator", "editor", "author")
        assert config.post_types_sort_desc == ("page",)


class CountingRegistryHost(InMemoryHost):
    def __init__(self):
        super().__init__()
        self.post_type_lookups = 0

    def public_post_types(self):
        self.post_type_lookups += 1
        return super().public_post_types()


class TestRequestContext:
    def test_config_computed_once_per_context(self, settings):
        host = CountingRegistryHost().register_core_types()
        context = RequestContext(host, settings, "admin")
        first = context.config
        second = context.config
        assert first is second
        assert host.post_type_lookups == 1

    def test_refresh_config_recomputes(self, settings):
        host = CountingRegistryHost().register_core_types()
        context = RequestContext(host, settings)
        assert "book" not in context.config.post_types
        host.register_post_type("book")
        assert "book" not in context.config.post_types
        assert "book" in context.refresh_config().post_types
        assert host.post_type_lookups == 2

    def test_separate_contexts_do_not_share_snapshots(self, settings):
        host = CountingRegistryHost().register_core_types()
        RequestContext(host, settings).config
        host.register_post_type("book")
        assert "book" in RequestContext(host, settings).config.post_types

    def test_textdomain_precedence(self, host):
        assert RequestContext(host, Settings()).textdomain == "default"
        host.set_theme_textdomain("my-theme")
        assert RequestContext(host, Settings()).textdomain == "my-theme"
        assert RequestContext(host, Settings(textdomain="custom")).textdomain == "custom"

    def test_translate_uses_textdomain(self, host):
        host.set_theme_textdomain("my-theme")
        host.add_translation("my-theme", "See more →", "Voir plus →")
        assert RequestContext(host, Settings()).translate("See more →") == "Voir plus →"

    def test_user_counts_cached(self, host, settings):
        context = RequestContext(host, settings)
        counts = context.user_counts
        host.add_user(99, "late", "editor")
        assert context.user_counts is counts
        assert counts["editor"] == 1

    def test_capabilities_come_from_role(self, host, settings):
        assert RequestContext(host, settings, "admin").current_actor_can("list_users")
        assert not RequestContext(host, settings, "ed").current_actor_can("list_users")
        assert not RequestContext(host, settings, None).current_actor_can("edit_posts")
        assert not RequestContext(host, settings, "nobody").current_actor_can("edit_posts")


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("ADMIN_SUBMENU_DEFAULT_LIMIT", "ADMIN_SUBMENU_TEXTDOMAIN", "SUBMENU_FIXTURE_PATH"):
            monkeypatch.delenv(name, raising=False)
        s = get_settings()
        assert s.default_limit == 20
        assert s.textdomain is None
        assert s.fixture_path is None

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("ADMIN_SUBMENU_DEFAULT_LIMIT", "5")
        monkeypatch.setenv("ADMIN_SUBMENU_EXCLUDED_POST_TYPES", "event, book ,")
        monkeypatch.setenv("ADMIN_SUBMENU_TEXTDOMAIN", "custom")
        s = get_settings()
        assert s.default_limit == 5
        assert s.excluded_post_types == ("event", "book")
        assert s.textdomain == "custom"

    def test_invalid_limit_falls_back(self, monkeypatch):
        monkeypatch.setenv("ADMIN_SUBMENU_DEFAULT_LIMIT", "0")
        assert get_settings().default_limit == 20
        monkeypatch.setenv("ADMIN_SUBMENU_DEFAULT_LIMIT", "lots")
        assert get_settings().default_limit == 20


class TestFixtureLoading:
    def test_load_fixture_file(self, tmp_path):
        data = {
            "base_url": "https://cms.test/",
            "default_language": "en",
            "post_types": [{"name": "event"}],
            "posts": [{"id": 1, "title": "Gala", "post_type": "event", "lang": "en"}],
            "users": [{"id": 7, "user_login": "boss", "role": "administrator"}],
        }
        path = tmp_path / "fixture.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        host = InMemoryHost().register_core_types()
        host.load_fixture(json.loads(path.read_text(encoding="utf-8")))
        assert host.admin_url("edit.php") == "https://cms.test/wp-admin/edit.php"
        assert host.default_language() == "en"
        assert "event" in host.public_post_types()
        assert host.user_can("boss", "list_users")


class TestHostLocking:
    def test_object_lookups_wait_for_the_lock(self, host):
        results = []

        def lookup():
            results.append(
                (host.get_post_type("page").name, host.get_taxonomy("category").name, host.get_role("editor").label)
            )

        worker = threading.Thread(target=lookup)
        with host._lock:
            worker.start()
            worker.join(timeout=0.2)
            assert worker.is_alive()
            assert results == []
        worker.join(timeout=5)
        assert results == [("page", "category", "Editor")]
