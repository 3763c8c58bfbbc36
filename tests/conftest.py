from __future__ import annotations

import os
from pathlib import Path

import pytest

_TEST_TIERS = ("unit", "integration", "end2end")
_LIVE_URL_ENV = "SIMPLE_SEARCH_E2E_URL"


def _tier_for(config: pytest.Config, item: pytest.Item) -> str | None:
    tests_root = (Path(config.rootpath) / "tests").resolve()
    try:
        relative = Path(str(item.fspath)).resolve().relative_to(tests_root)
    except ValueError:
        return None
    head = relative.parts[0] if relative.parts else None
    return head if head in _TEST_TIERS else None


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    for item in items:
        tier = _tier_for(config, item)
        if tier is not None:
            item.add_marker(getattr(pytest.mark, tier))


@pytest.fixture
def live_url() -> str:
    """Return the live service URL, skipping when none is configured."""
    url = os.getenv(_LIVE_URL_ENV, "").strip()
    if not url:
        pytest.skip(f"{_LIVE_URL_ENV} is not set")
    return url
