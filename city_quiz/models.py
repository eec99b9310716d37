"""
Pydantic models used across the quiz for validation and serialization.
These are pure data objects with no I/O coupling.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


# ── Enums ──────────────────────────────────────────────────────────────

class GuessOutcome(str, Enum):
    ACCEPTED = "accepted"
    ALREADY_GUESSED = "already_guessed"
    NOT_FOUND = "not_found"
    NOT_READY = "not_ready"


# ── Dataset models ────────────────────────────────────────────────────

class CityRecord(BaseModel):
    """A single city as shipped in a mode's dataset file."""
    name: str = Field(..., min_length=1)
    alt_names: tuple[str, ...] = Field((), alias="altNames")
    state: Optional[str] = None
    country: str = ""
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    population: Optional[int] = Field(None, ge=0)
    national_capital: bool = Field(False, alias="nationalCapital")
    state_capital: bool = Field(False, alias="stateCapital")

    model_config = {"populate_by_name": True, "frozen": True, "extra": "ignore"}

    @field_validator("alt_names", mode="before")
    @classmethod
    def parse_alt_names(cls, v):
        """altNames may be missing, null, or a single string."""
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return v

    @field_validator("state", mode="before")
    @classmethod
    def blank_state_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("country", mode="before")
    @classmethod
    def null_country_is_blank(cls, v):
        return "" if v is None else v

    @field_validator("population", mode="before")
    @classmethod
    def parse_population(cls, v):
        """Population arrives as int, float or null depending on the source."""
        if v is None or v == "":
            return None
        if isinstance(v, float):
            if not math.isfinite(v):
                raise ValueError(f"population must be finite, got {v}")
            return int(round(v))
        return v

    @property
    def key(self) -> tuple[str, Optional[str], str]:
        """Composite identity used to deduplicate guesses."""
        return (self.name, self.state, self.country)

    @property
    def population_or_zero(self) -> int:
        return self.population if self.population is not None else 0

    @property
    def is_capital(self) -> bool:
        return self.national_capital or self.state_capital


class Bounds(BaseModel):
    """Geographic rectangle a mode's map covers."""
    min_lat: float = Field(..., validation_alias=AliasChoices("min_lat", "minLat", "latMin"))
    max_lat: float = Field(..., validation_alias=AliasChoices("max_lat", "maxLat", "latMax"))
    min_lon: float = Field(..., validation_alias=AliasChoices("min_lon", "minLon", "lngMin"))
    max_lon: float = Field(..., validation_alias=AliasChoices("max_lon", "maxLon", "lngMax"))

    model_config = {"frozen": True, "allow_inf_nan": False}

    @classmethod
    def world(cls) -> Bounds:
        return cls(min_lat=-90.0, max_lat=90.0, min_lon=-180.0, max_lon=180.0)

    @property
    def is_degenerate(self) -> bool:
        return self.min_lat == self.max_lat or self.min_lon == self.max_lon


# ── Projection models ─────────────────────────────────────────────────

class SurfaceSize(BaseModel):
    width: float = Field(..., ge=0.0)
    height: float = Field(..., ge=0.0)


class PlanarPoint(BaseModel):
    x: float
    y: float


class Marker(BaseModel):
    """Everything a display needs to draw one guessed city."""
    x: float
    y: float
    radius: float
    fill: str
    title: str


# ── Statistics models ─────────────────────────────────────────────────

class BracketCount(BaseModel):
    label: str
    threshold: int
    count: int = 0


class StatsSnapshot(BaseModel):
    count: int = 0
    population_sum: int = 0
    brackets: list[BracketCount] = Field(default_factory=list)
    northernmost: Optional[CityRecord] = None
    southernmost: Optional[CityRecord] = None
    countries: int = 0
    states: int = 0
    capitals: int = 0


class DatasetTotals(BaseModel):
    """Denominators for the "X of Y" displays, fixed once a dataset is loaded."""
    cities: int = 0
    population: int = 0
    brackets: list[BracketCount] = Field(default_factory=list)
    countries: int = 0
    states: int = 0
    capitals: int = 0


class GuessResult(BaseModel):
    outcome: GuessOutcome
    guess: str
    record: Optional[CityRecord] = None
    marker: Optional[Marker] = None
    stats: Optional[StatsSnapshot] = None

    @property
    def accepted(self) -> bool:
        return self.outcome is GuessOutcome.ACCEPTED


# ── API request/response models ───────────────────────────────────────

class CreateSessionRequest(BaseModel):
    mode: Optional[str] = Field(None, min_length=1, max_length=64)


class GuessRequest(BaseModel):
    guess: str = Field(..., max_length=200)
    width: Optional[float] = Field(None, ge=0.0)
    height: Optional[float] = Field(None, ge=0.0)


class SessionSummary(BaseModel):
    session_id: str
    mode: str
    loaded: bool
    bounds: Bounds
    totals: DatasetTotals
    stats: StatsSnapshot
    history: list[CityRecord] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"
    sessions: int = 0
