#!/usr/bin/env python3
"""
Tests for the blob kernel and the stamping engine.

Verifies:
1. Kernel shape, peak and falloff
2. End-to-end frames for the zero-stamp and single-stamp cases
3. Decay, contrast curve and renormalize
4. Random source substitution and parameter handling
"""

import math
import numpy as np
import pytest
from blob_field.engine import BlobFieldEngine, attenuation_factor, create_engine
from blob_field.errors import InvalidDimensions, InvalidSeed, InvalidStampCount
from blob_field.grid import Grid
from blob_field.kernel import build_blob_kernel, KERNEL_SIZE
from blob_field.wichmann_hill import RandomSource, WichmannHill


class FixedSource(RandomSource):
    """Cycles through a fixed list of draws."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def draw(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


# --- Kernel ---------------------------------------------------------------

def test_kernel_shape_and_peak():
    k = build_blob_kernel()
    assert k.shape == (KERNEL_SIZE, KERNEL_SIZE)
    assert k.max_value() == pytest.approx(0.1)
    assert k.get(8, 8) == k.max_value(), "Peak must sit at the center cell"


def test_kernel_symmetric_and_positive():
    k = build_blob_kernel().data
    assert np.allclose(k, k.T)
    assert np.allclose(k, k[::-1, :])
    assert np.all(k >= 0), "Squared falloff never goes negative"


def test_kernel_corner_overshoot():
    """Corners sit past the zero crossing and square to a small positive."""
    k = build_blob_kernel()
    assert k.get(0, 0) == pytest.approx((1 - 1.1) ** 2 * 0.1)
    assert k.get(0, 0) > 0
    # Zero crossing at d = cap / 1.1; cells near it are the dimmest
    cap = math.sqrt(128)
    assert k.get(8, 0) == pytest.approx((1 - 8 / cap * 1.1) ** 2 * 0.1)
    assert k.get(0, 0) > k.get(1, 1)


def test_kernel_fresh_each_build():
    a = build_blob_kernel()
    a.set(0, 0, 99.0)
    assert build_blob_kernel().get(0, 0) != 99.0


# --- Construction ---------------------------------------------------------

def test_create_engine_validates():
    with pytest.raises(InvalidSeed):
        create_engine(8, 8, (0, 1, 1))
    with pytest.raises(InvalidDimensions):
        create_engine(0, 8, (1, 1, 1))
    with pytest.raises(InvalidDimensions):
        create_engine(8, -3, (1, 1, 1))


def test_new_engine_world_is_zero():
    engine = create_engine(12, 7, (5, 6, 7))
    assert engine.world.shape == (12, 7)
    assert np.all(engine.world.cells == 0.0)
    assert engine.generation == 0


# --- End-to-end -----------------------------------------------------------

def test_step_without_stamps_is_degenerate():
    engine = create_engine(4, 4, (1, 1, 1))
    frame = engine.step(0, 1.0, 0.5)
    assert isinstance(frame, Grid)
    assert len(frame.cells) == 16
    assert np.all(np.isnan(frame.cells)), "All-zero world normalizes to NaN"
    assert np.all(engine.world.cells == 0.0)
    assert engine.random_source.state == (1, 1, 1), "No stamps, no draws"


def test_single_stamp_peak():
    engine = create_engine(64, 64, (100, 100, 100))
    frame = engine.step(1, 1.0, 1.0)

    rng = WichmannHill((100, 100, 100))
    x = int(rng.draw() * 64)
    y = int(rng.draw() * 64)
    assert (x, y) == (44, 33)
    peak_x, peak_y = x - 16 + 8, y - 8 + 8

    assert engine.world.get(peak_x, peak_y) == pytest.approx(0.1)
    assert engine.world.get(peak_x, peak_y) == engine.world.max_value()
    assert frame.get(peak_x, peak_y) == 1.0
    assert frame.get(peak_x, peak_y) == frame.max_value()
    # Exactly the kernel footprint is lit
    assert np.count_nonzero(engine.world.data) == KERNEL_SIZE * KERNEL_SIZE


def test_fixed_source_position():
    engine = BlobFieldEngine(64, 64, random_source=FixedSource([0.5]))
    assert engine.stamp() == (32, 32)
    assert engine.world.get(24, 32) == pytest.approx(0.1)
    assert engine.world.max_value() == engine.world.get(24, 32)


def test_stamp_clipped_at_edges():
    """A stamp at the origin lands mostly off-grid; the rest stays correct."""
    engine = BlobFieldEngine(32, 32, random_source=FixedSource([0.0]))
    engine.step(1, 1.0, 1.0)
    kernel = build_blob_kernel()
    # Offset is (-16, -8): only kernel columns 16 and rows 8..16 land
    assert np.count_nonzero(engine.world.data) == 1 * 9
    assert engine.world.get(0, 0) == pytest.approx(kernel.get(16, 8))
    assert engine.world.get(0, 8) == pytest.approx(kernel.get(16, 16))
    assert engine.world.get(0, 31) == 0.0, "Clipped cells must not wrap"


def test_non_square_world():
    engine = create_engine(40, 20, (3, 3, 3))
    frame = engine.step(25, 1.0, 1.0)
    assert frame.shape == (40, 20)
    assert frame.max_value() == 1.0
    assert engine.stats["stamps"] == 25


# --- Decay / contrast -----------------------------------------------------

def test_attenuation_factor():
    assert attenuation_factor(1.0) == 1.0
    assert attenuation_factor(0.0) == 0.0
    assert attenuation_factor(0.5) == pytest.approx(1 - 0.5 ** 8)
    values = [attenuation_factor(a / 10) for a in range(11)]
    assert values == sorted(values), "Easing must be monotonic"


def test_decay_applied_after_render():
    engine = create_engine(48, 48, (100, 100, 100))
    frame = engine.step(3, 1.0, 1.0)
    before = engine.world.copy()
    frame = engine.step(0, 1.0, 0.5)
    # Output is rendered from the world before decay
    assert np.allclose(frame.data, before.normalize().data)
    assert np.allclose(engine.world.data, before.data * attenuation_factor(0.5))


def test_full_attenuation_clears_world():
    engine = create_engine(32, 32, (9, 9, 9))
    frame = engine.step(5, 1.0, 0.0)
    assert frame.max_value() == 1.0
    assert np.all(engine.world.cells == 0.0)


def test_contrast_curve():
    engine = create_engine(32, 32, (100, 100, 100))
    engine.step(4, 1.0, 1.0)
    base = engine.world.normalize()
    squared = engine.render(2.0)
    assert np.allclose(squared.data, base.data ** 2)
    flat = engine.render(0.0)
    assert np.all(flat.cells == 1.0), "x ** 0 == 1, including 0 ** 0"
    soft = engine.render(0.5)
    assert np.allclose(soft.data, np.sqrt(base.data))


def test_renormalize():
    engine = create_engine(32, 32, (100, 100, 100))
    engine.step(6, 1.0, 0.3)
    peak = engine.world.max_value()
    expected = engine.world.data / peak
    engine.renormalize()
    assert engine.world.max_value() == 1.0
    assert np.allclose(engine.world.data, expected)


def test_renormalize_empty_world_sticks():
    engine = create_engine(24, 24, (100, 100, 100))
    engine.renormalize()
    assert np.all(np.isnan(engine.world.cells))
    engine.step(3, 1.0, 1.0)
    assert np.all(np.isnan(engine.world.cells)), "Stamps add onto NaN"
    engine.clear()
    engine.step(3, 1.0, 1.0)
    assert engine.world.max_value() > 0


# --- Determinism / parameters ---------------------------------------------

def test_seeded_runs_identical():
    a = create_engine(50, 50, (11, 22, 33))
    b = create_engine(50, 50, (11, 22, 33))
    for _ in range(5):
        fa = a.step(7, 1.5, 0.8)
        fb = b.step(7, 1.5, 0.8)
        assert np.array_equal(fa.data, fb.data)
    assert np.array_equal(a.world.data, b.world.data)


def test_negative_stamp_count_rejected():
    engine = create_engine(16, 16, (1, 2, 3))
    with pytest.raises(InvalidStampCount):
        engine.step(-1, 1.0, 0.5)
    with pytest.raises(InvalidStampCount):
        engine.set_params(stamp_count=-4)
    assert engine.generation == 0
    assert engine.random_source.state == (1, 2, 3)


def test_step_uses_engine_params():
    engine = BlobFieldEngine(32, 32, stamp_count=2, contrast=1.0, attenuation=1.0)
    engine.step()
    assert engine.stats["stamps"] == 2
    engine.set_params(stamp_count=3)
    assert engine.get_params() == {"stamp_count": 3, "contrast": 1.0, "attenuation": 1.0}
    engine.step_n(4)
    assert engine.stats["stamps"] == 2 + 12
    assert engine.generation == 5


def test_clear_and_stats():
    engine = create_engine(20, 20, (4, 5, 6))
    engine.step(3, 1.0, 1.0)
    stats = engine.stats
    assert stats["generation"] == 1
    assert stats["mass"] > 0
    assert stats["max"] <= 0.3 + 1e-12
    engine.clear()
    assert engine.stats["mass"] == 0.0
    assert engine.stats["stamps"] == 0
    assert engine.generation == 0


def test_slider_defs_cover_params():
    keys = {d["key"] for d in BlobFieldEngine.get_slider_defs()}
    assert keys == set(BlobFieldEngine(8, 8).get_params())
