"""CLI entrypoint for city_quiz."""

from __future__ import annotations

import argparse
import asyncio

from city_quiz.logging_config import setup_logging
from city_quiz.models import GuessOutcome, GuessResult
from city_quiz.session import QuizSession


def main() -> None:
    parser = argparse.ArgumentParser(prog="city-quiz")
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve")

    play_parser = sub.add_parser("play")
    play_parser.add_argument("--mode", default=None)

    guess_parser = sub.add_parser("guess")
    guess_parser.add_argument("names", nargs="+")
    guess_parser.add_argument("--mode", default=None)

    args = parser.parse_args()
    setup_logging(args.log_level)

    if args.command == "serve":
        _serve()
    elif args.command == "play":
        _play(asyncio.run(_open_session(args.mode)))
    elif args.command == "guess":
        _guess_all(asyncio.run(_open_session(args.mode)), args.names)


def _serve() -> None:
    import uvicorn

    from city_quiz.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "city_quiz.api:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=(settings.env == "development"),
        log_level=settings.log_level.lower(),
    )


async def _open_session(mode: str | None) -> QuizSession:
    session = QuizSession(mode)
    await session.load()
    return session


def _guess_all(session: QuizSession, names: list[str]) -> None:
    for name in names:
        _print_result(session.submit(name))
    _print_summary(session)


def _play(session: QuizSession) -> None:
    totals = session.totals
    print(f"City Quiz: {session.mode}")
    print(f"{totals.cities} cities in {totals.countries} countries. Type 'quit' to exit.")

    while True:
        guess = input("city> ").strip()
        if not guess:
            continue
        if guess.lower() in {"quit", "exit", "q"}:
            break
        _print_result(session.submit(guess))

    _print_summary(session)


def _print_result(result: GuessResult) -> None:
    print(format_result(result))


def format_result(result: GuessResult) -> str:
    """One or two display lines for a submitted guess."""
    if not result.accepted:
        if result.outcome is GuessOutcome.ALREADY_GUESSED:
            return f"  = {result.record.name} (already guessed)"
        if result.outcome is GuessOutcome.NOT_READY:
            return "  ! dataset not loaded yet"
        return f"  ? {result.guess}"

    city = result.record
    pop = f"{city.population:,}" if city.population is not None else "unknown"
    pin = " *" if city.is_capital else ""
    place = ", ".join(p for p in (city.state, city.country) if p)
    line = f"  + {city.name} {place} ({pop}){pin}"
    if result.stats is not None:
        line += f"\n    {result.stats.count} cities, population {result.stats.population_sum:,}"
    return line


def _print_summary(session: QuizSession) -> None:
    stats = session.stats.snapshot()
    totals = session.totals

    print("\n" + "-" * 72)
    print(f"Cities guessed:     {stats.count} of {totals.cities}")
    print(f"Population covered: {stats.population_sum:,}")

    guessed = {b.threshold: b.count for b in stats.brackets}
    for bracket in totals.brackets:
        print(f"  {guessed.get(bracket.threshold, 0)} of {bracket.count} cities over {bracket.label}")
    print(f"  {stats.countries} of {totals.countries} countries")
    print(f"  {stats.capitals} of {totals.capitals} capitals")
    print(f"  {stats.states} of {totals.states} territories")

    for label, city in (("Northernmost", stats.northernmost), ("Southernmost", stats.southernmost)):
        if city is not None:
            print(f"{label}: {city.name}, {city.country} ({city.latitude:.2f}°, {city.longitude:.2f}°)")


if __name__ == "__main__":
    main()
