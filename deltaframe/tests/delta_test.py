"""
Tests for diff_frames and merge_frames
"""

import sys
from os.path import dirname, join

import pytest
import numpy as np

sys.path.append(join(dirname(dirname(dirname(__file__)))))

from deltaframe.frame import Frame, DimensionMismatchError
from deltaframe.delta import diff_frames, merge_frames, changed_mask

def rgb_frame(rgb, alpha=255):
    """Frame from an (h, w, 3) list or array of RGB values."""
    rgb = np.asarray(rgb, dtype=np.uint8)
    a = np.full(rgb.shape[:2] + (1,), alpha, dtype=np.uint8)
    return Frame(img=np.concatenate([rgb, a], axis=2))

def random_frame(seed, h=16, w=24):
    return rgb_frame(np.random.default_rng(seed).integers(0, 256, (h, w, 3), dtype=np.uint8))

def test_two_by_two_scenario():
    base = rgb_frame([[(10,10,10), (1,2,3)],
                      [(4,5,6),    (7,8,9)]])
    cur  = rgb_frame([[(200,10,10), (1,2,3)],
                      [(4,5,6),     (7,8,9)]])
    (diff, changed) = diff_frames(base, cur)
    assert changed == 1
    assert diff.bounds == base.bounds
    assert tuple(diff.img[0, 0]) == (200, 10, 10, 255)
    assert tuple(diff.img[0, 1]) == (0, 0, 0, 0)
    assert tuple(diff.img[1, 0]) == (0, 0, 0, 0)
    assert tuple(diff.img[1, 1]) == (0, 0, 0, 0)

    merged = merge_frames(base, diff)
    assert tuple(merged.img[0, 0]) == (200, 10, 10, 255)
    assert tuple(merged.img[1, 1]) == (7, 8, 9, 255)
    assert merged == cur

def test_identical_frames():
    f = random_frame(3)
    (diff, changed) = diff_frames(f, random_frame(3))
    assert changed == 0
    assert not diff.img.any()

def test_round_trip():
    a = random_frame(1)
    b = rgb_frame(np.where(np.random.default_rng(2).random((16, 24, 1)) < 0.1,
                           random_frame(2).img[:, :, :3], a.img[:, :, :3]))
    (diff, changed) = diff_frames(a, b)
    assert changed == int(changed_mask(a, b).sum())
    assert 0 < changed < 16*24
    assert merge_frames(a, diff) == b

def test_diff_only_opaque_or_transparent():
    (diff, _) = diff_frames(random_frame(4), random_frame(5))
    assert set(np.unique(diff.img[:, :, 3])) <= {0, 255}

def test_source_alpha_ignored():
    a = rgb_frame([[(10, 20, 30)]], alpha=255)
    b = rgb_frame([[(10, 20, 30)]], alpha=0)
    (diff, changed) = diff_frames(a, b)
    assert changed == 0

    c = rgb_frame([[(11, 20, 30)]], alpha=40)
    (diff, changed) = diff_frames(a, c)
    assert changed == 1
    assert tuple(diff.img[0, 0]) == (11, 20, 30, 255)

def test_merge_partial_alpha_overrides():
    base = rgb_frame([[(1, 1, 1), (2, 2, 2)]])
    diff = Frame(img=np.array([[(50, 60, 70, 1), (9, 9, 9, 0)]], dtype=np.uint8))
    merged = merge_frames(base, diff)
    assert tuple(merged.img[0, 0]) == (50, 60, 70, 1)
    assert tuple(merged.img[0, 1]) == (2, 2, 2, 255)

def test_inputs_not_modified():
    a = random_frame(6)
    b = random_frame(7)
    a_copy = a.img.copy()
    b_copy = b.img.copy()
    (diff, _) = diff_frames(a, b)
    merge_frames(a, diff)
    assert np.array_equal(a.img, a_copy)
    assert np.array_equal(b.img, b_copy)

def test_dimension_mismatch():
    a = random_frame(1, h=4, w=4)
    b = random_frame(1, h=4, w=5)
    with pytest.raises(DimensionMismatchError):
        diff_frames(a, b)
    with pytest.raises(DimensionMismatchError):
        merge_frames(a, b)
