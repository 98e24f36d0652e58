import numpy as np
import pytest

from sticker_cutter import Mask
from sticker_cutter.core.morphology import MorphologyEngine


def random_masks(count=8, seed=0):
    rng = np.random.default_rng(seed)
    for _ in range(count):
        h, w = rng.integers(3, 25, size=2)
        yield Mask(int(w), int(h), rng.random((h, w)) < 0.55)


def square_mask(size, x, y, side):
    mask = Mask.zeros(size, size)
    mask.bits[y:y + side, x:x + side] = 1
    return mask


def test_flood_fill_does_not_wrap_rows():
    passable = np.zeros((3, 3), dtype=bool)
    # (2,0) 과 (0,1) 은 평탄 인덱스로는 연속이지만 이웃이 아님
    passable[0, 2] = True
    passable[1, 0] = True
    visited = MorphologyEngine.flood_fill(passable, [(2, 0)])
    assert visited.sum() == 1
    assert visited[0, 2]


def test_flood_fill_seeds_always_visited():
    passable = np.zeros((4, 4), dtype=bool)
    passable[0, 1] = True
    visited = MorphologyEngine.flood_fill(passable, [(0, 0)])
    assert visited[0, 0] and visited[0, 1]
    assert visited.sum() == 2


def test_flood_fill_ignores_diagonals():
    passable = np.eye(5, dtype=bool)
    visited = MorphologyEngine.flood_fill(passable, [(0, 0)])
    assert visited.sum() == 1


@pytest.mark.parametrize("passes", [0, -3])
def test_erode_non_positive_passes_is_noop(passes):
    mask = square_mask(9, 2, 2, 5)
    before = mask.copy()
    result = MorphologyEngine.erode(mask, passes)
    assert result is mask
    assert result == before


def test_erode_peels_one_ring_per_pass():
    mask = square_mask(11, 2, 2, 7)
    MorphologyEngine.erode(mask, 1)
    assert mask == square_mask(11, 3, 3, 5)
    MorphologyEngine.erode(mask, 2)
    assert mask == square_mask(11, 5, 5, 1)


def test_erode_does_not_treat_image_edge_as_background():
    mask = Mask(4, 4, np.ones((4, 4)))
    MorphologyEngine.erode(mask, 3)
    assert mask.count_foreground() == 16


def test_dilate_grows_diamond():
    mask = square_mask(10, 5, 5, 1)
    MorphologyEngine.dilate(mask, 1)
    assert mask.count_foreground() == 5
    MorphologyEngine.dilate(mask, 1)
    assert MorphologyEngine.count_foreground(mask) == 13


def test_dilate_zero_passes_is_noop():
    mask = square_mask(10, 5, 5, 1)
    before = mask.copy()
    assert MorphologyEngine.dilate(mask, 0) == before


def test_erosion_and_dilation_monotonic():
    for mask in random_masks():
        original = mask.count_foreground()
        for p in range(4):
            assert MorphologyEngine.erode(mask.copy(), p).count_foreground() <= original
            assert MorphologyEngine.dilate(mask.copy(), p).count_foreground() >= original


def test_fill_interior_holes_fills_enclosed_background():
    mask = square_mask(12, 2, 2, 8)
    mask.bits[5:7, 5:7] = 0
    MorphologyEngine.fill_interior_holes(mask)
    assert mask == square_mask(12, 2, 2, 8)


def test_fill_interior_holes_keeps_open_notches():
    mask = square_mask(12, 2, 2, 8)
    # 외곽과 연결된 홈은 구멍이 아님
    mask.bits[5:7, 2:7] = 0
    before = mask.copy()
    MorphologyEngine.fill_interior_holes(mask)
    assert mask == before


def border_reachable_background(mask):
    h, w = mask.bits.shape
    background = mask.bits == 0
    border = [(x, y) for y in range(h) for x in range(w)
              if (x in (0, w - 1) or y in (0, h - 1)) and background[y, x]]
    return MorphologyEngine.flood_fill(background, border)


def test_fill_interior_holes_matches_border_flood_and_is_idempotent():
    for mask in random_masks(seed=7):
        # 외곽에서 4-연결로 도달 가능한 배경만 배경으로 남아야 함
        expected = ~border_reachable_background(mask)
        once = MorphologyEngine.fill_interior_holes(mask.copy())
        assert np.array_equal(once.bits.astype(bool), expected)
        twice = MorphologyEngine.fill_interior_holes(once.copy())
        assert twice == once


def test_fill_interior_holes_diagonal_gap_is_still_a_hole():
    # 대각선으로만 외곽과 닿은 배경은 4-연결 기준으로 구멍
    mask = Mask(3, 3, np.array([[1, 1, 0], [1, 0, 1], [1, 1, 1]]))
    MorphologyEngine.fill_interior_holes(mask)
    assert mask.bits.tolist() == [[1, 1, 0], [1, 1, 1], [1, 1, 1]]
