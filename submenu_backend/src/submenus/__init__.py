"""
Admin submenus backend package.

Builds dynamically generated admin sidebar submenus listing posts, taxonomy terms
and users by role, with "See more" overflow links. The FastAPI app lives in
`submenus.main`.
"""
