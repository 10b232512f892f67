"""Tests for the toroidal distance field generator."""

import numpy as np
import pytest

from seamtex.core import Point, SiteSet
from seamtex.textures import DistanceFieldGenerator
from seamtex.textures import voronoi
from seamtex.textures.voronoi import DEFAULT_BAND_ELEMENTS


def test_single_site_scenario():
    """4x4 field with one site at the origin."""
    gen = DistanceFieldGenerator(width=4, height=4, sites=SiteSet([Point(0.0, 0.0)]))
    field = gen.generate()

    # Pixel on the site is darkest, the diagonally opposite pixel brightest
    assert field[0, 0] == 0
    assert field[2, 2] == 255
    # d = 0.25: t = 1 - 0.25 / sqrt(0.5), 255 - round(t * 255)
    assert field[1, 0] == 90
    # Neighbors across the wrapped edge see the same distance
    assert field[1, 0] == field[3, 0]
    assert field[0, 1] == field[0, 3]


def test_farthest_pixel_is_white():
    gen = DistanceFieldGenerator(width=32, height=32, num_points=7, seed=5)
    field = gen.generate()
    assert field.max() == 255
    assert 0 <= field.min() <= 255


def test_intensity_increases_with_distance():
    """Pixels nearer a site are never brighter than pixels farther away."""
    gen = DistanceFieldGenerator(width=24, height=24, num_points=5, seed=11)
    distances = gen.nearest_distances().ravel()
    intensity = gen.generate().pixels.ravel()

    order = np.argsort(distances, kind="stable")
    assert np.all(np.diff(intensity[order].astype(int)) >= 0)
    assert intensity[np.argmin(distances)] == intensity.min()


def test_shifted_sites_roll_the_field():
    """Moving every site by whole pixels rolls the field with wraparound."""
    base = SiteSet([Point(0.0, 0.0), Point(0.625, 0.375)])
    shifted = SiteSet([Point(0.25, 0.0), Point(0.875, 0.375)])

    a = DistanceFieldGenerator(width=8, height=8, sites=base).generate()
    b = DistanceFieldGenerator(width=8, height=8, sites=shifted).generate()

    np.testing.assert_array_equal(np.roll(a.pixels, 2, axis=1), b.pixels)


@pytest.mark.parametrize("band_elements", [1, 120, 1000])
def test_band_budget_does_not_change_result(band_elements):
    sites = SiteSet.random(6, np.random.default_rng(2))
    whole = DistanceFieldGenerator(width=20, height=20, sites=sites).generate()
    banded = DistanceFieldGenerator(
        width=20, height=20, sites=sites, band_elements=band_elements
    ).generate()
    assert banded == whole


@pytest.mark.parametrize("num_points, band_elements, expected", [
    (6, 120, 1),
    (6, 1000, 8),
    (6, 1, 1),
    (2000, DEFAULT_BAND_ELEMENTS, 104),
])
def test_band_rows_follow_site_count(num_points, band_elements, expected):
    """Bands shrink as sites are added so each band stays within the budget."""
    gen = DistanceFieldGenerator(
        width=20, height=20, num_points=num_points, seed=0, band_elements=band_elements
    )
    assert gen.band_rows() == expected
    assert gen.band_rows() == 1 or gen.band_rows() * 20 * num_points <= band_elements


def test_many_sites_computed_in_bounded_bands(monkeypatch):
    sizes = []
    real = voronoi.toroidal_distance_grid

    def recording(positions, coords):
        result = real(positions, coords)
        sizes.append(result.size)
        return result

    monkeypatch.setattr(voronoi, "toroidal_distance_grid", recording)
    gen = DistanceFieldGenerator(width=32, height=32, num_points=500, seed=1, band_elements=40_000)
    gen.generate()

    assert len(sizes) == 16
    assert max(sizes) == 2 * 32 * 500
    assert max(sizes) <= 40_000


def test_same_seed_is_deterministic():
    a = DistanceFieldGenerator(width=16, height=16, num_points=4, seed=9).generate()
    b = DistanceFieldGenerator(width=16, height=16, num_points=4, seed=9).generate()
    c = DistanceFieldGenerator(width=16, height=16, num_points=4, seed=10).generate()
    assert a == b
    assert a != c


def test_sites_are_not_modified():
    sites = SiteSet.random(3, np.random.default_rng(0))
    before = sites.coords.copy()
    DistanceFieldGenerator(width=8, height=8, sites=sites).generate()
    np.testing.assert_array_equal(sites.coords, before)


def test_no_sites_rejected():
    gen = DistanceFieldGenerator(width=4, height=4, sites=SiteSet([]))
    with pytest.raises(ValueError, match="at least one site"):
        gen.generate()


def test_zero_max_distance_rejected():
    """A single pixel sitting on the only site has nothing to normalize by."""
    gen = DistanceFieldGenerator(width=1, height=1, sites=SiteSet([Point(0.0, 0.0)]))
    with pytest.raises(ValueError, match="maximum nearest-site distance is zero"):
        gen.generate()


@pytest.mark.parametrize("kwargs", [{"width": 0}, {"height": -1}, {"band_elements": 0}])
def test_invalid_parameters_rejected(kwargs):
    with pytest.raises(ValueError):
        DistanceFieldGenerator(**kwargs)
