import math

import numpy as np
import pytest

from elasticbending.analysis.integration import simpson, simpson_weights


def test_weights_pattern():
    np.testing.assert_array_equal(simpson_weights(4), [1.0, 4.0, 2.0, 4.0, 1.0])


def test_exact_for_cubics():
    assert simpson(lambda x: x**3, 0.0, 1.0, 2) == pytest.approx(0.25, abs=1e-15)


def test_sine_integral():
    assert simpson(np.sin, 0.0, math.pi, 500) == pytest.approx(2.0, abs=1e-9)


def test_reversed_bounds_change_sign():
    forward = simpson(np.exp, 0.0, 1.0, 100)
    backward = simpson(np.exp, 1.0, 0.0, 100)
    assert backward == pytest.approx(-forward)
    assert forward == pytest.approx(math.e - 1.0, rel=1e-10)


def test_zero_width_interval():
    assert simpson(np.cos, 0.3, 0.3, 10) == 0.0


@pytest.mark.parametrize("n", [0, 1, 3, 501])
def test_odd_or_too_few_intervals_rejected(n):
    with pytest.raises(ValueError):
        simpson(np.sin, 0.0, 1.0, n)
