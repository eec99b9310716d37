"""
Tests for projection and marker styling.
"""

from __future__ import annotations

import pytest

from city_quiz.config import MarkerConfig
from city_quiz.models import Bounds, SurfaceSize
from city_quiz.projection import build_marker, marker_radius, marker_title, project

EUROPE = Bounds(min_lat=34.0, max_lat=72.0, min_lon=-25.0, max_lon=45.0)
SURFACE = SurfaceSize(width=800, height=600)
CFG = MarkerConfig(min_pop=100, max_pop=20_000_000, min_radius=3.0, max_radius=12.0)


class TestProject:
    def test_top_left_corner(self):
        point = project(EUROPE.max_lat, EUROPE.min_lon, EUROPE, SURFACE)
        assert point.x == pytest.approx(0.0)
        assert point.y == pytest.approx(0.0)

    def test_bottom_right_corner(self):
        point = project(EUROPE.min_lat, EUROPE.max_lon, EUROPE, SURFACE)
        assert point.x == pytest.approx(800.0)
        assert point.y == pytest.approx(600.0)

    def test_world_center(self):
        point = project(0.0, 0.0, Bounds.world(), SurfaceSize(width=1000, height=500))
        assert point.x == pytest.approx(500.0)
        assert point.y == pytest.approx(250.0)

    def test_outside_bounds_not_clipped(self):
        point = project(80.0, -40.0, EUROPE, SURFACE)
        assert point.x < 0
        assert point.y < 0

    def test_uses_surface_given_per_call(self):
        small = project(53.0, 10.0, EUROPE, SurfaceSize(width=100, height=100))
        large = project(53.0, 10.0, EUROPE, SurfaceSize(width=200, height=200))
        assert large.x == pytest.approx(2 * small.x)
        assert large.y == pytest.approx(2 * small.y)

    @pytest.mark.parametrize("bounds", [
        Bounds(min_lat=10, max_lat=10, min_lon=-20, max_lon=20),
        Bounds(min_lat=-10, max_lat=10, min_lon=5, max_lon=5),
    ])
    def test_degenerate_bounds(self, bounds):
        assert project(10.0, 5.0, bounds, SURFACE) is None


class TestMarkerRadius:
    def test_minimum_for_small_or_unknown(self):
        assert marker_radius(None, CFG) == pytest.approx(3.0)
        assert marker_radius(0, CFG) == pytest.approx(3.0)
        assert marker_radius(100, CFG) == pytest.approx(3.0)

    def test_maximum_is_capped(self):
        assert marker_radius(20_000_000, CFG) == pytest.approx(12.0)
        assert marker_radius(37_000_000, CFG) == pytest.approx(12.0)

    def test_linear_midpoint(self):
        mid = (20_000_000 + 100) // 2
        assert marker_radius(mid, CFG) == pytest.approx(7.5, abs=0.1)


class TestBuildMarker:
    def test_capital_marker(self, make_city):
        city = make_city("Paris", state="Île-de-France", country="France",
                         latitude=48.8566, longitude=2.3522, population=2_148_000,
                         national_capital=True)
        marker = build_marker(city, EUROPE, SURFACE, CFG)
        assert marker.fill == CFG.capital_fill
        assert marker.title == "Paris, Île-de-France, France (2,148,000)"
        assert 0 < marker.x < 800
        assert 0 < marker.y < 600

    def test_state_capital_uses_default_fill(self, make_city):
        city = make_city("Albany", state="New York", state_capital=True, latitude=42.6, longitude=-73.8)
        marker = build_marker(city, Bounds.world(), SURFACE, CFG)
        assert marker.fill == CFG.default_fill

    def test_no_marker_for_degenerate_bounds(self, make_city):
        flat = Bounds(min_lat=10, max_lat=10, min_lon=0, max_lon=1)
        assert build_marker(make_city(), flat, SURFACE, CFG) is None

    def test_title_unknown_population(self, make_city):
        assert marker_title(make_city("Vatican City", country="Vatican City")) == \
            "Vatican City, Vatican City (Unknown)"
