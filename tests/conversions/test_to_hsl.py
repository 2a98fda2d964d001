import math

import numpy as np

from chronochroma.conversions.to_hsl import rgb_to_hsl, normalize_hsl, np_rgb_to_hsl, np_normalize_hsl
from ..samples import samples_rgb_hsl


def test_rgb_to_hsl():
    for rgb, (h_exp, s_exp, l_exp) in samples_rgb_hsl.items():
        h, s, l = normalize_hsl(rgb_to_hsl(rgb))

        assert h == h_exp
        assert s == s_exp
        assert l == l_exp


def test_rgb_to_hsl_unrounded():
    h, s, l = rgb_to_hsl((255, 128, 0))
    assert abs(h - 30.1176) < 1e-4
    assert s == 1
    assert l == 0.5


def test_achromatic_keeps_default_hue():
    assert rgb_to_hsl((128, 128, 128), 200).h == 200
    assert rgb_to_hsl((128, 128, 128)).h == 0
    assert rgb_to_hsl((0, 0, 0), math.nan).h == 0


def test_rgb_to_hsl_unset_channel():
    assert rgb_to_hsl((None, 0, 0)) is None
    assert rgb_to_hsl((math.nan, 0, 0)) is None


def test_normalize_hsl():
    assert normalize_hsl((370.4, 0.123456, 1.2)) == (10, 0.12, 1)
    assert normalize_hsl((-30, -0.1, 0.5)) == (330, 0, 0.5)
    assert normalize_hsl((30.1176, 0.123456, 0.5), 2) == (30.12, 0.1235, 0.5)
    assert normalize_hsl(None) is None


def test_rgb_to_hsl_numpy():
    the_matrix = np.array(list(samples_rgb_hsl.keys()))
    expected = np.array(list(samples_rgb_hsl.values()))
    hsl = np_normalize_hsl(np_rgb_to_hsl(the_matrix))

    assert np.allclose(hsl, expected)


def test_rgb_to_hsl_numpy_matches_scalar():
    rng = np.random.default_rng(7)
    rgb = rng.integers(0, 256, size=(64, 3))
    hsl = np_rgb_to_hsl(rgb, default_hue=90)

    for row, out in zip(rgb, hsl):
        expected = rgb_to_hsl(tuple(int(c) for c in row), 90)
        assert np.allclose(out, expected)


def test_np_rgb_to_hsl_default_hue_for_grays():
    hsl = np_rgb_to_hsl(np.array([[10, 10, 10], [255, 0, 0]]), default_hue=200)
    assert hsl[0, 0] == 200
    assert hsl[1, 0] == 0
