import pytest


@pytest.fixture(autouse=True)
def _isolated_cache():
    # Product lists are cached under a version key; start every test cold.
    from django.core.cache import cache

    cache.clear()
    yield
