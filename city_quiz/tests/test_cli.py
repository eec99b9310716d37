"""
Tests for CLI result formatting.
"""

from __future__ import annotations

import pytest

from city_quiz.__main__ import format_result
from city_quiz.models import Bounds, GuessOutcome, GuessResult
from city_quiz.session import QuizSession


@pytest.fixture
def session(make_city):
    s = QuizSession("world")
    s.use_dataset([
        make_city("Oslo", country="Norway", latitude=59.9, longitude=10.75,
                  population=700_000, national_capital=True),
    ], Bounds.world())
    return s


class TestFormatResult:
    def test_accepted(self, session):
        text = format_result(session.submit("oslo"))
        assert text.splitlines() == [
            "  + Oslo Norway (700,000) *",
            "    1 cities, population 700,000",
        ]

    def test_already_guessed(self, session):
        session.submit("oslo")
        assert format_result(session.submit("OSLO")) == "  = Oslo (already guessed)"

    def test_not_found(self, session):
        assert format_result(session.submit("Atlantis")) == "  ? Atlantis"

    def test_not_ready(self):
        result = GuessResult(outcome=GuessOutcome.NOT_READY, guess="Oslo")
        assert format_result(result) == "  ! dataset not loaded yet"
