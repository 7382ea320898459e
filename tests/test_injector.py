"""Tests for synthetic defect injection."""

import numpy as np
import pytest

from hot_dead_pixel.processing.injector import inject, make_rng
from hot_dead_pixel.processing.pixel_buffer import Coordinate, PixelBuffer


def test_same_seed_same_ground_truth():
    """Injection should be reproducible for a given seed and size."""
    first = inject(PixelBuffer.filled(40, 30, (128, 128, 128)), 25, 25, seed=11)
    second = inject(PixelBuffer.filled(40, 30, (90, 90, 90)), 25, 25, seed=11)
    assert first == second
    assert len(first.hot) == 25
    assert len(first.dead) == 25


def test_different_seeds_differ():
    first = inject(PixelBuffer.filled(40, 30, (128, 128, 128)), 25, 25, seed=1)
    second = inject(PixelBuffer.filled(40, 30, (128, 128, 128)), 25, 25, seed=2)
    assert first != second


def test_generator_instance_matches_int_seed():
    from_seed = inject(PixelBuffer.filled(20, 20, (50, 50, 50)), 10, 10, seed=5)
    from_rng = inject(PixelBuffer.filled(20, 20, (50, 50, 50)), 10, 10, seed=np.random.default_rng(5))
    assert from_seed == from_rng


def test_sites_in_bounds_and_written():
    buffer = PixelBuffer.filled(17, 9, (128, 128, 128))
    truth = inject(buffer, 40, 40, seed=8)
    for site in truth.hot + truth.dead:
        assert 0 <= site.x < 17
        assert 0 <= site.y < 9
    # Dead draws come last, so every dead site must be black
    for site in truth.dead:
        assert buffer.get(site.x, site.y) == (0, 0, 0)
    dead_sites = set(truth.dead)
    for site in truth.hot:
        if site not in dead_sites:
            assert buffer.get(site.x, site.y) == (255, 255, 255)


def test_scripted_sites(grey_buffer, scripted_rng):
    truth = inject(grey_buffer, 1, 1, seed=scripted_rng(5, 5, 3, 3))
    assert truth.hot == (Coordinate(5, 5),)
    assert truth.dead == (Coordinate(3, 3),)
    assert grey_buffer.get(5, 5) == (255, 255, 255)
    assert grey_buffer.get(3, 3) == (0, 0, 0)


def test_duplicate_draws_are_kept(grey_buffer, scripted_rng):
    """A dead draw may overwrite a hot one; both stay in the ground truth."""
    truth = inject(grey_buffer, 2, 1, seed=scripted_rng(4, 4, 4, 4, 4, 4))
    assert truth.hot == (Coordinate(4, 4), Coordinate(4, 4))
    assert truth.dead == (Coordinate(4, 4),)
    assert grey_buffer.get(4, 4) == (0, 0, 0)


def test_zero_counts_leave_buffer_untouched(grey_buffer):
    before = grey_buffer.copy()
    truth = inject(grey_buffer, 0, 0)
    assert truth.is_empty()
    assert grey_buffer == before


def test_negative_count_rejected(grey_buffer):
    with pytest.raises(ValueError):
        inject(grey_buffer, -1, 0)


def test_make_rng_passes_generators_through():
    rng = np.random.default_rng(0)
    assert make_rng(rng) is rng
