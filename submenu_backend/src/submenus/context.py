from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from .fetcher import BoundedListFetcher
from .host import Host
from .logging_config import get_logger
from .settings import Settings

logger = get_logger(__name__)

EXCLUDED_POST_TYPES: Tuple[str, ...] = (
    "post", "attachment", "revision", "nav_menu_item", "custom_css",
    "customize_changeset", "oembed_cache", "user_request", "wp_block",
    "wp_template", "wp_template_part", "wp_global_styles", "wp_navigation",
    # ACF internals
    "acf-field-group", "acf-field",
    # Formidable Forms
    "frm_form", "frm_display", "frm_style", "frm_styles", "frm_payment", "frm_notification",
    # Ninja Forms submissions
    "nf_sub",
)

EXCLUDED_TAXONOMIES: Tuple[str, ...] = (
    "post_format", "nav_menu", "link_category", "wp_theme",
    "wp_template_part_area", "language", "term_language",
    "post_translations", "term_translations",
    "acf-field-group-category",
)

EXCLUDED_ROLES: Tuple[str, ...] = ("subscriber",)


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class SubmenuConfig:
    """
    Which collections get a submenu.

    Fields:
    - post_types: public post types minus exclusions
    - taxonomies: public taxonomies minus exclusions
    - user_roles: all roles minus exclusions
    - post_types_sort_desc: post types listed by title descending (e.g. years)
    """

    post_types: Tuple[str, ...]
    taxonomies: Tuple[str, ...]
    user_roles: Tuple[str, ...]
    post_types_sort_desc: Tuple[str, ...]


def _without(names: Sequence[str], excluded: Sequence[str]) -> Tuple[str, ...]:
    skip = set(excluded)
    return tuple(n for n in names if n not in skip)


# PUBLIC_INTERFACE
def build_submenu_config(host: Host, settings: Settings) -> SubmenuConfig:
    """Compute the eligible post types, taxonomies and roles from the host's registry."""
    return SubmenuConfig(
        post_types=_without(host.public_post_types(), EXCLUDED_POST_TYPES + settings.excluded_post_types),
        taxonomies=_without(host.public_taxonomies(), EXCLUDED_TAXONOMIES + settings.excluded_taxonomies),
        user_roles=_without(host.role_names(), EXCLUDED_ROLES + settings.excluded_roles),
        post_types_sort_desc=tuple(settings.desc_sorted_post_types),
    )


# PUBLIC_INTERFACE
class RequestContext:
    """
    Everything one admin page render needs, created once per request.

    The config snapshot and the per-role user counts are computed on first use and
    kept for the lifetime of the context; `refresh_config()` drops the snapshot.
    """

    def __init__(self, host: Host, settings: Settings, actor: Optional[str] = None) -> None:
        self.host = host
        self.settings = settings
        self.actor = actor
        self.fetcher = BoundedListFetcher(host)
        self._config: Optional[SubmenuConfig] = None
        self._user_counts: Optional[Dict[str, int]] = None
        self._textdomain: Optional[str] = None

    @property
    def config(self) -> SubmenuConfig:
        if self._config is None:
            self._config = build_submenu_config(self.host, self.settings)
            logger.debug(
                "Submenu config: %d post types, %d taxonomies, %d roles",
                len(self._config.post_types),
                len(self._config.taxonomies),
                len(self._config.user_roles),
            )
        return self._config

    def refresh_config(self) -> SubmenuConfig:
        self._config = None
        return self.config

    @property
    def user_counts(self) -> Dict[str, int]:
        if self._user_counts is None:
            self._user_counts = self.host.count_users_by_role()
        return self._user_counts

    @property
    def textdomain(self) -> str:
        """Configured text domain, else the theme's, else 'default'."""
        if self._textdomain is None:
            self._textdomain = self.settings.textdomain or self.host.theme_textdomain() or "default"
        return self._textdomain

    @property
    def default_limit(self) -> int:
        return self.settings.default_limit

    def current_actor_can(self, capability: str) -> bool:
        return self.host.user_can(self.actor, capability)

    def translate(self, text: str) -> str:
        return self.host.translate(text, self.textdomain)
