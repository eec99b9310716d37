"""
Tests for the guess ledger.
"""

from __future__ import annotations

from city_quiz.ledger import GuessLedger
from city_quiz.models import GuessOutcome


class TestGuessLedger:
    def test_accept_then_duplicate(self, make_city):
        ledger = GuessLedger()
        city = make_city("Paris", country="France")
        assert ledger.accept(city) is GuessOutcome.ACCEPTED
        assert ledger.accept(city) is GuessOutcome.ALREADY_GUESSED
        assert ledger.size() == 1
        assert city in ledger

    def test_same_triple_is_same_city(self, make_city):
        ledger = GuessLedger()
        ledger.accept(make_city("Paris", country="France", population=2_000_000))
        twin = make_city("Paris", country="France", population=5)
        assert ledger.accept(twin) is GuessOutcome.ALREADY_GUESSED
        assert len(ledger) == 1

    def test_same_name_different_state_is_distinct(self, make_city):
        ledger = GuessLedger()
        assert ledger.accept(make_city("Springfield", state="Illinois")) is GuessOutcome.ACCEPTED
        assert ledger.accept(make_city("Springfield", state="Ohio")) is GuessOutcome.ACCEPTED
        assert ledger.size() == 2

    def test_history_most_recent_first(self, make_city):
        ledger = GuessLedger()
        for name in ("A", "B", "C"):
            ledger.accept(make_city(name))
        assert [c.name for c in ledger.history] == ["C", "B", "A"]

    def test_clear(self, make_city):
        ledger = GuessLedger()
        city = make_city("A")
        ledger.accept(city)
        ledger.clear()
        assert ledger.size() == 0
        assert ledger.accept(city) is GuessOutcome.ACCEPTED

    def test_contains_rejects_other_types(self):
        assert ("A", None, "X") not in GuessLedger()
