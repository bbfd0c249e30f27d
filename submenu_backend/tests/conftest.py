import os

import pytest

os.environ.setdefault("LOG_LEVEL", "WARNING")

from submenus.errors import QueryFailure  # noqa: E402
from submenus.settings import Settings  # noqa: E402

from helpers import CountingHost, seed_site  # noqa: E402


@pytest.fixture()
def host():
    return seed_site(CountingHost())


@pytest.fixture()
def failing_host():
    h = seed_site(CountingHost())
    h.fail_with = QueryFailure("malformed filter")
    return h


@pytest.fixture()
def settings():
    return Settings(default_limit=20)
