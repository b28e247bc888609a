from __future__ import annotations

from typing import Any, List

import pytest

from recording import RecordingSurface


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def recording_factory():
    created: List[RecordingSurface] = []

    def _factory(**kwargs: Any) -> RecordingSurface:
        s = RecordingSurface(**kwargs)
        created.append(s)
        return s

    _factory.created = created  # type: ignore[attr-defined]
    return _factory
