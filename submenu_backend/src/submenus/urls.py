from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

from .host import Host
from .utils import add_query_arg


class UrlKind(str, Enum):
    POST = "post"
    TERM = "term"
    USER = "user"
    USER_ROLE = "user_role"
    SEE_MORE_POSTS = "see_more_posts"
    SEE_MORE_TERMS = "see_more_terms"


# PUBLIC_INTERFACE
def generate_submenu_url(
    host: Host,
    kind: str,
    obj: Optional[Mapping[str, Any]] = None,
    extra: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Build the admin URL a submenu entry links to.

    Args:
        host: Host providing the admin URL base and term edit links.
        kind: One of the UrlKind values; anything else yields ''.
        obj: The post, term or user record for item links.
        extra: taxonomy / post_type / role for list and "See more" links.

    Returns:
        Absolute admin URL, or '' when no link can be built.
    """
    extra = extra or {}
    try:
        url_kind = UrlKind(kind)
    except ValueError:
        return ""

    if url_kind == UrlKind.POST:
        return add_query_arg({"post": obj["id"], "action": "edit"}, host.admin_url("post.php"))

    if url_kind == UrlKind.TERM:
        if not obj or not obj.get("term_id"):
            return ""
        return host.edit_term_link(
            obj["term_id"], extra.get("taxonomy", ""), extra.get("post_type", "post")
        ) or ""

    if url_kind == UrlKind.USER:
        return add_query_arg({"user_id": obj["id"]}, host.admin_url("user-edit.php"))

    if url_kind == UrlKind.USER_ROLE:
        return add_query_arg({"role": extra.get("role", "")}, host.admin_url("users.php"))

    if url_kind == UrlKind.SEE_MORE_POSTS:
        return add_query_arg({"post_type": extra.get("post_type", "")}, host.admin_url("edit.php"))

    # SEE_MORE_TERMS; post_type is implicit for 'post'
    post_type = extra.get("post_type", "post")
    args = {"taxonomy": extra.get("taxonomy", "")}
    if post_type != "post":
        args["post_type"] = post_type
    return add_query_arg(args, host.admin_url("edit-tags.php"))
