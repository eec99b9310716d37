"""
One quiz session: the guess pipeline and all state it mutates.

  raw guess -> normalize/resolve -> ledger (dedup) -> stats + marker

Loading is async and happens once; submissions are synchronous and run the
whole pipeline before returning, so a session never sees a half-applied guess.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from city_quiz.config import get_settings
from city_quiz.ledger import GuessLedger
from city_quiz.loader import DataSource, load_bounds, load_cities
from city_quiz.matcher import CityIndex
from city_quiz.models import (
    Bounds,
    CityRecord,
    DatasetTotals,
    GuessOutcome,
    GuessResult,
    SurfaceSize,
)
from city_quiz.projection import build_marker
from city_quiz.stats import StatsAggregator, dataset_totals

logger = logging.getLogger(__name__)


class QuizSession:
    def __init__(self, mode: Optional[str] = None) -> None:
        self.mode = mode or get_settings().quiz.default_mode
        self.cities: list[CityRecord] = []
        self.bounds: Bounds = Bounds.world()
        self.totals = DatasetTotals()
        self.ledger = GuessLedger()
        self.stats = StatsAggregator()
        self._index: Optional[CityIndex] = None

    @property
    def loaded(self) -> bool:
        return self._index is not None

    async def load(self, source: Optional[DataSource] = None) -> None:
        """Fetch bounds and cities for the mode. Failures degrade, never raise."""
        source = source or DataSource()
        bounds = await load_bounds(self.mode, source)
        cities = await load_cities(self.mode, source)
        self.use_dataset(cities, bounds)

    def use_dataset(self, cities: Sequence[CityRecord], bounds: Optional[Bounds] = None) -> None:
        """Install an already-loaded dataset and open the session for guesses."""
        self.cities = list(cities)
        self.bounds = bounds or Bounds.world()
        self.totals = dataset_totals(self.cities)
        self._index = CityIndex(self.cities)
        logger.info(
            "Session ready: mode=%s cities=%d countries=%d",
            self.mode, self.totals.cities, self.totals.countries,
            extra={"mode": self.mode},
        )

    def submit(self, raw_guess: str, surface: Optional[SurfaceSize] = None) -> GuessResult:
        """Run one guess through the pipeline. Invalid or repeated guesses change nothing."""
        if self._index is None:
            logger.warning("Guess %r received before the dataset finished loading", raw_guess)
            return GuessResult(outcome=GuessOutcome.NOT_READY, guess=raw_guess)

        match = self._index.resolve(raw_guess)
        if match is None:
            return GuessResult(outcome=GuessOutcome.NOT_FOUND, guess=raw_guess)

        outcome = self.ledger.accept(match)
        if outcome is not GuessOutcome.ACCEPTED:
            return GuessResult(outcome=outcome, guess=raw_guess, record=match)

        self.stats.update(match)
        if surface is None:
            quiz = get_settings().quiz
            surface = SurfaceSize(width=quiz.surface_width, height=quiz.surface_height)
        marker = build_marker(match, self.bounds, surface)
        if marker is None:
            logger.warning("Cannot place marker for %s: degenerate bounds %s", match.name, self.bounds)

        logger.info(
            "Accepted %s (%s, %s): %d guessed, population %d",
            match.name, match.state, match.country,
            self.stats.count, self.stats.population_sum,
            extra={"mode": self.mode},
        )
        return GuessResult(
            outcome=outcome,
            guess=raw_guess,
            record=match,
            marker=marker,
            stats=self.stats.snapshot(),
        )

    @property
    def history(self) -> list[CityRecord]:
        return self.ledger.history

    def reset(self) -> None:
        """Start over with the same dataset."""
        self.ledger.clear()
        self.stats.reset()
