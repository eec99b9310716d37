"""
Running quiz statistics.

StatsAggregator is updated once per accepted guess and never decremented.
Every update is O(1): population sum, one counter per population bracket,
north/south extremes, and distinct country/state sets.

dataset_totals() computes the matching denominators from the full dataset.
"""

from __future__ import annotations

from typing import Optional, Sequence

from city_quiz.models import BracketCount, CityRecord, DatasetTotals, StatsSnapshot

# (label, threshold), largest first
POPULATION_BRACKETS: tuple[tuple[str, int], ...] = (
    ("5,000,000", 5_000_000),
    ("1,000,000", 1_000_000),
    ("500,000", 500_000),
    ("100,000", 100_000),
    ("50,000", 50_000),
    ("10,000", 10_000),
)


class StatsAggregator:
    def __init__(self, brackets: Sequence[tuple[str, int]] = POPULATION_BRACKETS) -> None:
        self._brackets = tuple(brackets)
        self.reset()

    def reset(self) -> None:
        self.count = 0
        self.population_sum = 0
        self.bracket_counts: dict[int, int] = {threshold: 0 for _, threshold in self._brackets}
        self.northernmost: Optional[CityRecord] = None
        self.southernmost: Optional[CityRecord] = None
        self.capitals = 0
        self._countries: set[str] = set()
        self._states: set[str] = set()

    def update(self, record: CityRecord) -> None:
        """Fold one accepted city into the totals. Call exactly once per acceptance."""
        population = record.population_or_zero
        self.count += 1
        self.population_sum += population

        # Brackets overlap: a 6M city counts toward every threshold
        for threshold in self.bracket_counts:
            if population >= threshold:
                self.bracket_counts[threshold] += 1

        # Strict comparison keeps the first city seen at a tied latitude
        if self.northernmost is None or record.latitude > self.northernmost.latitude:
            self.northernmost = record
        if self.southernmost is None or record.latitude < self.southernmost.latitude:
            self.southernmost = record

        if record.is_capital:
            self.capitals += 1
        if record.country:
            self._countries.add(record.country)
        if record.state:
            self._states.add(record.state)

    @property
    def countries(self) -> int:
        return len(self._countries)

    @property
    def states(self) -> int:
        return len(self._states)

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(
            count=self.count,
            population_sum=self.population_sum,
            brackets=[
                BracketCount(label=label, threshold=threshold, count=self.bracket_counts[threshold])
                for label, threshold in self._brackets
            ],
            northernmost=self.northernmost,
            southernmost=self.southernmost,
            countries=self.countries,
            states=self.states,
            capitals=self.capitals,
        )


def dataset_totals(
    cities: Sequence[CityRecord],
    brackets: Sequence[tuple[str, int]] = POPULATION_BRACKETS,
) -> DatasetTotals:
    """
    Denominators for the quiz displays. Brackets nobody in the dataset reaches
    are left out, so a small regional mode does not show "0 of 0 cities over 5,000,000".
    """
    bracket_totals = []
    for label, threshold in brackets:
        total = sum(1 for c in cities if c.population_or_zero >= threshold)
        if total > 0:
            bracket_totals.append(BracketCount(label=label, threshold=threshold, count=total))

    return DatasetTotals(
        cities=len(cities),
        population=sum(c.population_or_zero for c in cities),
        brackets=bracket_totals,
        countries=len({c.country for c in cities if c.country}),
        states=len({c.state for c in cities if c.state}),
        capitals=sum(1 for c in cities if c.is_capital),
    )
