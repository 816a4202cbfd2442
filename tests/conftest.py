from __future__ import annotations

import pytest

from .fakes import FakePokeApi, gengar


@pytest.fixture
def api() -> FakePokeApi:
    return FakePokeApi({94: gengar()})
