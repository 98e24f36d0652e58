import numpy as np
import pytest

from sticker_cutter import PixelBuffer


def solid_rgb(width, height, color=(0, 0, 0)):
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[...] = color
    return arr


def paint(arr, x, y, w, h, color):
    arr[y:y + h, x:x + w, :3] = color
    return arr


@pytest.fixture
def make_buffer():
    """(width, height, background, [(x, y, w, h, color), ...]) -> PixelBuffer"""
    def _make(width, height, background=(0, 0, 0), boxes=()):
        arr = solid_rgb(width, height, background)
        for x, y, w, h, color in boxes:
            paint(arr, x, y, w, h, color)
        return PixelBuffer.from_array(arr)
    return _make


@pytest.fixture
def square_sheet(make_buffer):
    """100x100 검정 배경 + (40,40)에서 시작하는 20x20 흰 사각형"""
    return make_buffer(100, 100, (0, 0, 0), [(40, 40, 20, 20, (255, 255, 255))])


@pytest.fixture
def uniform_buffer(make_buffer):
    return make_buffer(10, 10, (120, 130, 140))
