from __future__ import annotations

import argparse
import asyncio
from collections import Counter
from pathlib import Path

from city_quiz.config import DataConfig
from city_quiz.loader import DataSource, load_bounds, load_cities
from city_quiz.normalize import normalize
from city_quiz.stats import dataset_totals


def check(data_dir: Path, mode: str) -> int:
    source = DataSource(DataConfig(data_dir=str(data_dir), data_url=""))
    bounds = asyncio.run(load_bounds(mode, source))
    cities = asyncio.run(load_cities(mode, source))
    totals = dataset_totals(cities)

    print(f"{mode}: {totals.cities} cities, {totals.countries} countries, "
          f"{totals.states} states, {totals.capitals} capitals")
    print(f"bounds: {bounds}")
    if bounds.is_degenerate:
        print("WARNING: degenerate bounds, no markers can be placed")

    problems = 0
    # Rows sharing (name, state, country) are indistinguishable once guessed
    for key, n in Counter(c.key for c in cities).items():
        if n > 1:
            problems += 1
            print(f"duplicate identity {key} x{n}")
    for city in cities:
        if not normalize(city.name):
            problems += 1
            print(f"name normalizes to empty: {city.name!r}")
    return problems


def main() -> None:
    parser = argparse.ArgumentParser(description="Sanity-check a quiz city dataset.")
    parser.add_argument("--data", default="data")
    parser.add_argument("--mode", default="world")
    args = parser.parse_args()

    problems = check(Path(args.data), args.mode)
    raise SystemExit(1 if problems else 0)


if __name__ == "__main__":
    main()
