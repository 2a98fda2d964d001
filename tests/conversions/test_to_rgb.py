import math

import numpy as np

from chronochroma.conversions.to_rgb import hsl_to_rgb, normalize_rgb, np_hsl_to_rgb, np_normalize_rgb
from ..samples import samples_hsl_rgb


def test_hsl_to_rgb():
    for hsl, rgb_exp in samples_hsl_rgb.items():
        assert normalize_rgb(hsl_to_rgb(hsl)) == rgb_exp


def test_hsl_to_rgb_unrounded():
    r, g, b = hsl_to_rgb((0, 0, 0.5))
    assert r == g == b == 127.5


def test_hsl_to_rgb_unset_component():
    assert hsl_to_rgb((math.nan, 1, 0.5)) is None
    assert hsl_to_rgb((0, None, 0.5)) is None


def test_normalize_rgb_wraps():
    assert normalize_rgb((256, -1, 127.5)) == (0, 255, 128)
    assert normalize_rgb((511, 0, 0.49)) == (255, 0, 0)
    assert normalize_rgb(None) is None


def test_hsl_to_rgb_numpy():
    the_matrix = np.array(list(samples_hsl_rgb.keys()), dtype=float)
    expected = np.array(list(samples_hsl_rgb.values()))
    rgb = np_normalize_rgb(np_hsl_to_rgb(the_matrix))

    assert rgb.dtype == np.int64
    assert np.array_equal(rgb, expected)


def test_hsl_to_rgb_numpy_matches_scalar():
    rng = np.random.default_rng(11)
    hsl = np.stack([rng.uniform(0, 360, 50), rng.uniform(0, 1, 50), rng.uniform(0, 1, 50)], axis=-1)
    rgb = np_hsl_to_rgb(hsl)

    for row, out in zip(hsl, rgb):
        assert np.allclose(out, hsl_to_rgb(tuple(row)))
