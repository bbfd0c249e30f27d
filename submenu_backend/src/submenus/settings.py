from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - ADMIN_SUBMENU_DEFAULT_LIMIT: items listed per submenu before "See more" (default: 20)
    - ADMIN_SUBMENU_TEXTDOMAIN: translation domain for labels; falls back to the theme's
    - ADMIN_SUBMENU_EXCLUDED_POST_TYPES: comma-separated post types added to the built-in exclusions
    - ADMIN_SUBMENU_EXCLUDED_TAXONOMIES: comma-separated taxonomies added to the built-in exclusions
    - ADMIN_SUBMENU_EXCLUDED_ROLES: comma-separated roles added to the built-in exclusions
    - ADMIN_SUBMENU_DESC_SORTED_POST_TYPES: comma-separated post types listed by title descending
    - SUBMENU_FIXTURE_PATH: JSON file used to seed the in-memory host
    - LOG_LEVEL: logging level name (default: INFO)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - ENABLE_BASIC_AUTH: 'true' to enable optional HTTP Basic Auth (default: false)
    - BASIC_AUTH_USERNAME: username for basic auth (required when ENABLE_BASIC_AUTH=true)
    - BASIC_AUTH_PASSWORD: password for basic auth (required when ENABLE_BASIC_AUTH=true)
    """

    default_limit: int = DEFAULT_LIMIT
    textdomain: Optional[str] = None
    excluded_post_types: Tuple[str, ...] = ()
    excluded_taxonomies: Tuple[str, ...] = ()
    excluded_roles: Tuple[str, ...] = ()
    desc_sorted_post_types: Tuple[str, ...] = ()
    fixture_path: Optional[str] = None
    log_level: str = "INFO"
    cors_allow_origins: Tuple[str, ...] = ("*",)
    enable_basic_auth: bool = False
    basic_auth_username: Optional[str] = None
    basic_auth_password: Optional[str] = None


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_limit(value: str) -> int:
    try:
        limit = int(value.strip())
    except ValueError:
        return DEFAULT_LIMIT
    return limit if limit >= 1 else DEFAULT_LIMIT


def _parse_list(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return _parse_list(value)


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    textdomain = os.getenv("ADMIN_SUBMENU_TEXTDOMAIN", "").strip() or None
    fixture_path = os.getenv("SUBMENU_FIXTURE_PATH", "").strip() or None

    enable_basic_auth = _parse_bool(_get_env("ENABLE_BASIC_AUTH", "false"), False)
    basic_user = os.getenv("BASIC_AUTH_USERNAME") if enable_basic_auth else None
    basic_pass = os.getenv("BASIC_AUTH_PASSWORD") if enable_basic_auth else None

    return Settings(
        default_limit=_parse_limit(_get_env("ADMIN_SUBMENU_DEFAULT_LIMIT", str(DEFAULT_LIMIT))),
        textdomain=textdomain,
        excluded_post_types=tuple(_parse_list(_get_env("ADMIN_SUBMENU_EXCLUDED_POST_TYPES", ""))),
        excluded_taxonomies=tuple(_parse_list(_get_env("ADMIN_SUBMENU_EXCLUDED_TAXONOMIES", ""))),
        excluded_roles=tuple(_parse_list(_get_env("ADMIN_SUBMENU_EXCLUDED_ROLES", ""))),
        desc_sorted_post_types=tuple(_parse_list(_get_env("ADMIN_SUBMENU_DESC_SORTED_POST_TYPES", ""))),
        fixture_path=fixture_path,
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        cors_allow_origins=tuple(_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*"))),
        enable_basic_auth=enable_basic_auth,
        basic_auth_username=basic_user,
        basic_auth_password=basic_pass,
    )
