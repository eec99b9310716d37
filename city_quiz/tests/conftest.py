from __future__ import annotations

import pytest

from city_quiz.models import CityRecord


@pytest.fixture
def make_city():
    def _make(name="Springfield", *, state=None, country="United States",
              latitude=0.0, longitude=0.0, population=None, **extra):
        return CityRecord(
            name=name,
            state=state,
            country=country,
            latitude=latitude,
            longitude=longitude,
            population=population,
            **extra,
        )
    return _make
