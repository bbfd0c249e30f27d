from __future__ import annotations

from .context import RequestContext

ADMIN_SUBMENU_CSS = """
<style>
  /* Make long submenus scrollable instead of extending off-screen */
  #adminmenu .wp-submenu {
      min-width: 160px !important;
      max-height: 60vh;
      overflow-y: auto;
  }
  #adminmenu .wp-submenu a {
      white-space: normal !important;
      word-wrap: break-word !important;
  }
  /* Indent item links */
  #adminmenu .wp-submenu li a[href*="post.php?post="],
  #adminmenu .wp-submenu li a[href*="term.php?taxonomy="],
  #adminmenu .wp-submenu li a[href*="user-edit.php?user_id="] {
      text-indent: -18px !important;
      padding-left: 26px !important;
      padding-right: 20px !important;
  }
  /* Role headers, e.g. "Editors ....... (5)" */
  #adminmenu .wp-submenu a[href="#"] {
      display: flex !important;
      align-items: baseline !important;
      font-weight: 500 !important;
      color: #bbb !important;
      gap: 8px !important;
  }
  #adminmenu .wp-submenu .role-name {
      flex-shrink: 0 !important;
  }
  #adminmenu .wp-submenu .dotted-line {
      flex: 1 !important;
      height: 1px !important;
      background: repeating-linear-gradient(to right, #888 0px, #888 2px, transparent 2px, transparent 4px) !important;
      min-width: 20px !important;
  }
  #adminmenu .wp-submenu .user-count {
      flex-shrink: 0 !important;
      font-size: 13px !important;
  }
  /* "See more" links */
  #adminmenu .wp-submenu .see-more-link {
    font-weight: 500 !important;
    font-style: italic !important;
    padding-top: 8px !important;
    text-align: right !important;
    display: block;
    margin-top: 0.5rem;
  }
  #adminmenu .wp-submenu li:has(.see-more-link) a:hover {
    box-shadow: none;
  }
</style>
""".strip()


# PUBLIC_INTERFACE
def admin_submenu_assets(context: RequestContext) -> str:
    """Return the <style> block for the admin head, or '' if the actor cannot edit posts."""
    if not context.current_actor_can("edit_posts"):
        return ""
    return ADMIN_SUBMENU_CSS
