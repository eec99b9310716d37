"""
Resolve a typed guess to one city of the active dataset.

An ambiguous name ("Springfield", "San Jose") resolves to the most populous
candidate; equal populations keep the one listed first in the dataset.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from city_quiz.models import CityRecord
from city_quiz.normalize import normalize


def _surface_keys(city: CityRecord) -> set[str]:
    keys = {normalize(city.name)}
    keys.update(normalize(alt) for alt in city.alt_names)
    keys.discard("")
    return keys


def _most_populous(candidates: Iterable[CityRecord]) -> Optional[CityRecord]:
    best: Optional[CityRecord] = None
    for city in candidates:
        if best is None or city.population_or_zero > best.population_or_zero:
            best = city
    return best


def resolve(raw_guess: str, dataset: Sequence[CityRecord]) -> Optional[CityRecord]:
    """Linear scan over the dataset. Returns None when nothing matches."""
    key = normalize(raw_guess)
    if not key:
        return None
    return _most_populous(city for city in dataset if key in _surface_keys(city))


class CityIndex:
    """
    Pre-computed key -> candidates map over a loaded dataset.
    Gives the same answers as resolve() without re-normalizing every city per guess.
    """

    def __init__(self, dataset: Sequence[CityRecord]) -> None:
        self._by_key: dict[str, list[CityRecord]] = {}
        for city in dataset:
            for key in _surface_keys(city):
                self._by_key.setdefault(key, []).append(city)

    def __len__(self) -> int:
        return len(self._by_key)

    def candidates(self, raw_guess: str) -> list[CityRecord]:
        """All cities matching the guess, in dataset order."""
        key = normalize(raw_guess)
        if not key:
            return []
        return list(self._by_key.get(key, []))

    def resolve(self, raw_guess: str) -> Optional[CityRecord]:
        return _most_populous(self.candidates(raw_guess))
