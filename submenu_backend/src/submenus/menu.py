from __future__ import annotations

from html import escape
from typing import Any, Dict, List, Optional

from .context import RequestContext
from .logging_config import get_logger
from .schemas import MenuEntry
from .urls import generate_submenu_url

logger = get_logger(__name__)

ITEM_PREFIX = '<span aria-hidden="true">&nbsp;&nbsp;-&nbsp;</span>'
SEE_MORE = "See more →"


# PUBLIC_INTERFACE
class MenuRegistry:
    """Collects submenu pages in registration order."""

    def __init__(self) -> None:
        self._entries: List[MenuEntry] = []

    def add_submenu_page(
        self, parent_slug: str, page_title: str, menu_title: str, capability: str, menu_slug: str
    ) -> MenuEntry:
        entry = MenuEntry(
            parent_slug=parent_slug,
            page_title=page_title,
            menu_title=menu_title,
            capability=capability,
            menu_slug=menu_slug,
        )
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> List[MenuEntry]:
        return list(self._entries)

    def children_of(self, parent_slug: str) -> List[MenuEntry]:
        return [e for e in self._entries if e.parent_slug == parent_slug]


def _see_more_label(context: RequestContext) -> str:
    return f'<span class="see-more-link">{escape(context.translate(SEE_MORE))}</span>'


# PUBLIC_INTERFACE
def register_all_submenus(context: RequestContext, registry: Optional[MenuRegistry] = None) -> MenuRegistry:
    """
    Register every dynamic submenu the current actor may see.

    Nothing is registered unless the actor can edit posts; user submenus additionally
    need the list_users capability.
    """
    registry = registry if registry is not None else MenuRegistry()
    if not context.current_actor_can("edit_posts"):
        return registry

    config = context.config
    for post_type in config.post_types:
        register_post_type_submenus(context, registry, post_type)

    for taxonomy in config.taxonomies:
        register_taxonomy_submenus(context, registry, taxonomy)

    if context.current_actor_can("list_users"):
        register_user_submenus(context, registry)

    logger.debug("Registered %d submenu entries for actor %r", len(registry.entries), context.actor)
    return registry


def register_post_type_submenus(context: RequestContext, registry: MenuRegistry, post_type: str) -> None:
    """Register one entry per post and a "See more" link under the post type's menu."""
    data = context.fetcher.fetch_posts(
        post_type,
        context.default_limit,
        descending=post_type in context.config.post_types_sort_desc,
    )
    if not data.items:
        return

    post_type_obj = context.host.get_post_type(post_type)
    parent_slug = f"edit.php?post_type={post_type}"
    capability = (post_type_obj.edit_capability if post_type_obj else None) or "edit_posts"

    for post in data.items:
        title = escape(post["title"])
        registry.add_submenu_page(
            parent_slug,
            title,
            ITEM_PREFIX + title,
            capability,
            generate_submenu_url(context.host, "post", post),
        )

    if data.has_more:
        registry.add_submenu_page(
            parent_slug,
            context.translate(SEE_MORE),
            _see_more_label(context),
            capability,
            generate_submenu_url(context.host, "see_more_posts", None, {"post_type": post_type}),
        )


def register_taxonomy_submenus(context: RequestContext, registry: MenuRegistry, taxonomy: str) -> None:
    """Register one entry per term and a "See more" link under the taxonomy's menu."""
    data = context.fetcher.fetch_terms(taxonomy, context.default_limit)
    if not data.items:
        return

    taxonomy_obj = context.host.get_taxonomy(taxonomy)
    post_type = taxonomy_obj.object_type[0] if taxonomy_obj and taxonomy_obj.object_type else "post"
    parent_slug = f"edit-tags.php?taxonomy={taxonomy}"
    if post_type != "post":
        parent_slug += f"&post_type={post_type}"
    capability = (taxonomy_obj.edit_capability if taxonomy_obj else None) or "manage_categories"
    extra = {"taxonomy": taxonomy, "post_type": post_type}

    for term in data.items:
        name = escape(term["name"])
        registry.add_submenu_page(
            parent_slug,
            name,
            ITEM_PREFIX + name,
            capability,
            generate_submenu_url(context.host, "term", term, extra),
        )

    if data.has_more:
        registry.add_submenu_page(
            parent_slug,
            context.translate(SEE_MORE),
            _see_more_label(context),
            capability,
            generate_submenu_url(context.host, "see_more_terms", None, extra),
        )


def _role_header(role_name: str, total: int) -> str:
    return (
        f'<span class="role-name">{escape(role_name)}</span>'
        '<span class="dotted-line" aria-hidden="true"></span>'
        f'<span class="user-count">({int(total)})</span>'
    )


def _display_name(user: Dict[str, Any]) -> str:
    return user.get("display_name") or user["user_login"]


def register_user_submenus(context: RequestContext, registry: MenuRegistry) -> None:
    """
    Register users grouped by role under the Users menu.

    Each role with users gets a non-clickable header showing the role's user count,
    one entry per user and, when the role has more users than the limit, a link to
    the role-filtered user list.
    """
    if not context.current_actor_can("list_users"):
        return

    parent_slug = "users.php"
    capability = "list_users"

    for role in context.config.user_roles:
        data = context.fetcher.fetch_users_by_role(role, context.default_limit)
        if not data.items:
            continue

        role_obj = context.host.get_role(role)
        role_name = context.host.translate_role(role_obj.label) if role_obj else role
        total = context.user_counts.get(role, len(data.items))

        registry.add_submenu_page(
            parent_slug,
            f"{role_name} ({total})",
            _role_header(role_name, total),
            capability,
            "#",
        )

        for user in data.items:
            display_name = escape(_display_name(user))
            registry.add_submenu_page(
                parent_slug,
                display_name,
                ITEM_PREFIX + display_name,
                capability,
                generate_submenu_url(context.host, "user", user),
            )

        if data.has_more:
            registry.add_submenu_page(
                parent_slug,
                context.translate("See more %s").replace("%s", role_name, 1),
                _see_more_label(context),
                capability,
                generate_submenu_url(context.host, "user_role", None, {"role": role}),
            )
