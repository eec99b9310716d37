"""
Geographic -> drawing-surface projection and marker styling.

The map images are equirectangular crops, so longitude maps linearly onto x
and latitude linearly onto y, with y growing downward (north is up).
Points outside the bounds are not clipped; they simply land off-surface.
"""

from __future__ import annotations

from typing import Optional

from city_quiz.config import MarkerConfig, get_settings
from city_quiz.models import Bounds, CityRecord, Marker, PlanarPoint, SurfaceSize


def project(lat: float, lon: float, bounds: Bounds, surface: SurfaceSize) -> Optional[PlanarPoint]:
    """
    Map (lat, lon) into surface pixel coordinates.
    Returns None for degenerate bounds (zero-width or zero-height region).
    """
    if bounds.is_degenerate:
        return None
    x = (lon - bounds.min_lon) / (bounds.max_lon - bounds.min_lon) * surface.width
    y = (bounds.max_lat - lat) / (bounds.max_lat - bounds.min_lat) * surface.height
    return PlanarPoint(x=x, y=y)


def marker_radius(population: Optional[int], config: Optional[MarkerConfig] = None) -> float:
    """
    Radius grows linearly with population between min_radius and max_radius.
    Populations below min_pop (or unknown) get the minimum size.
    """
    cfg = config or get_settings().marker
    pop = max(cfg.min_pop, population if population is not None else cfg.min_pop)
    span = cfg.max_pop - cfg.min_pop
    scale = (pop - cfg.min_pop) / span if span > 0 else 1.0
    scale = min(max(scale, 0.0), 1.0)
    return round(cfg.min_radius + (cfg.max_radius - cfg.min_radius) * scale, 1)


def marker_title(city: CityRecord) -> str:
    pop = f"{city.population:,}" if city.population is not None else "Unknown"
    parts = [city.name, city.state, city.country]
    return f"{', '.join(p for p in parts if p)} ({pop})"


def build_marker(
    city: CityRecord,
    bounds: Bounds,
    surface: SurfaceSize,
    config: Optional[MarkerConfig] = None,
) -> Optional[Marker]:
    """Marker for an accepted city, or None when it cannot be placed."""
    cfg = config or get_settings().marker
    point = project(city.latitude, city.longitude, bounds, surface)
    if point is None:
        return None
    return Marker(
        x=point.x,
        y=point.y,
        radius=marker_radius(city.population, cfg),
        fill=cfg.capital_fill if city.national_capital else cfg.default_fill,
        title=marker_title(city),
    )
