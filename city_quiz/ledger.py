"""Deduplicating record of accepted guesses for one quiz session."""

from __future__ import annotations

import logging

from city_quiz.models import CityRecord, GuessOutcome

logger = logging.getLogger(__name__)


class GuessLedger:
    """
    Insertion-ordered set of (name, state, country) keys.
    Two dataset rows sharing that triple count as the same city.
    """

    def __init__(self) -> None:
        self._records: dict[tuple, CityRecord] = {}

    def accept(self, record: CityRecord) -> GuessOutcome:
        key = record.key
        if key in self._records:
            logger.debug("Already guessed: %s", key)
            return GuessOutcome.ALREADY_GUESSED
        self._records[key] = record
        return GuessOutcome.ACCEPTED

    def size(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record: object) -> bool:
        return isinstance(record, CityRecord) and record.key in self._records

    @property
    def history(self) -> list[CityRecord]:
        """Accepted cities, most recent first."""
        return list(reversed(self._records.values()))

    def clear(self) -> None:
        self._records.clear()
