"""Tests for the refinement pipeline."""

import numpy as np
import pytest

from seamtex.config import TextureConfig, get_preset
from seamtex.core import IntensityField
from seamtex.filters import directional_blur, normalize
from seamtex.pipeline import PipelineResult, RefinementPipeline, refine

SMALL = dict(size=24, num_points=5, blur_radius=1, seed=12)


@pytest.fixture(scope="module")
def refined_result():
    return RefinementPipeline(TextureConfig(rounds=3, **SMALL)).run()


def test_refine_doubles_radius_each_round():
    rng = np.random.default_rng(0)
    base = IntensityField(rng.integers(0, 256, (10, 10)))
    direction = IntensityField(rng.integers(0, 256, (10, 10)))

    history = refine(base, direction, base_radius=1, rounds=2)

    first = normalize(directional_blur(base, direction, 1))
    second = normalize(directional_blur(first, direction, 2))
    assert history == [first, second]


def test_refine_without_normalization():
    rng = np.random.default_rng(1)
    base = IntensityField(rng.integers(0, 256, (8, 8)))
    direction = IntensityField(rng.integers(0, 256, (8, 8)))

    history = refine(base, direction, base_radius=2, rounds=1, normalize_rounds=False)
    assert history == [directional_blur(base, direction, 2)]


def test_refine_zero_rounds():
    base = IntensityField.full(4, 4, 9)
    assert refine(base, base, base_radius=3, rounds=0) == []


def test_result_shapes(refined_result):
    assert len(refined_result.sites) == 5
    for field in refined_result.fields().values():
        assert field.shape == (24, 24)


def test_rounds_recorded(refined_result):
    assert len(refined_result.rounds) == 3
    assert refined_result.final == refined_result.rounds[-1]
    assert list(refined_result.fields()) == [
        "distance", "noise", "round_0", "round_1", "round_2", "final",
    ]


def test_normalized_rounds_span_full_range(refined_result):
    for field in refined_result.rounds:
        assert field.min() == 0
        assert field.max() == 255


def test_refinement_follows_distance_field(refined_result):
    """The refined texture is the distance field blurred along itself."""
    expected = refine(
        refined_result.distance, refined_result.distance, base_radius=1, rounds=3,
    )
    assert refined_result.final == expected[-1]


def test_same_seed_is_bit_identical(refined_result):
    again = RefinementPipeline(TextureConfig(rounds=3, **SMALL)).run()
    np.testing.assert_array_equal(again.sites.coords, refined_result.sites.coords)
    assert again.distance == refined_result.distance
    assert again.noise == refined_result.noise
    assert again.final == refined_result.final


def test_different_seed_changes_sites(refined_result):
    other = RefinementPipeline(TextureConfig(rounds=3, **{**SMALL, "seed": 13})).run()
    assert not np.array_equal(other.sites.coords, refined_result.sites.coords)


def test_voronoi_preset_skips_refinement():
    config = get_preset("voronoi").with_overrides(**SMALL)
    result = RefinementPipeline(config).run()
    assert result.rounds == []
    assert result.final == result.distance


def test_result_requires_final(refined_result):
    with pytest.raises(TypeError):
        PipelineResult(
            config=refined_result.config,
            sites=refined_result.sites,
            distance=refined_result.distance,
            noise=refined_result.noise,
        )


def test_result_fields_end_with_final(refined_result):
    named = refined_result.fields()
    assert list(named)[-1] == "final"
    assert named["final"] is refined_result.final


def test_noise_blur_preset_uses_noise_direction():
    config = get_preset("noise_blur").with_overrides(**SMALL)
    result = RefinementPipeline(config).run()
    assert result.final == directional_blur(result.distance, result.noise, 1)


def test_noise_base_field():
    config = TextureConfig(rounds=1, base_field="noise", normalize=False, **SMALL)
    result = RefinementPipeline(config).run()
    assert result.final == directional_blur(result.noise, result.distance, 1)


def test_default_config():
    pipeline = RefinementPipeline()
    assert pipeline.config == TextureConfig()
