import numpy as np
import pytest

from sticker_cutter import CustomGrid, Mask, Rect, SegmentationConfig, SegmentationMode
from sticker_cutter.processing.segmentation import SegmentDetector, default_grid_lines


def assert_tiles(rects, width, height):
    coverage = np.zeros((height, width), dtype=np.int32)
    for r in rects:
        coverage[r.y:r.y + r.h, r.x:r.x + r.w] += 1
    assert sum(r.area for r in rects) == width * height
    assert np.all(coverage == 1)


def grid_config(x_lines=None, y_lines=None, rows=2, cols=2):
    custom = None
    if x_lines is not None or y_lines is not None:
        custom = CustomGrid(x_lines=x_lines or [], y_lines=y_lines or [])
    return SegmentationConfig(mode=SegmentationMode.GRID, rows=rows, cols=cols,
                              custom_grid=custom).normalized()


def test_grid_lines_split_into_quadrants(make_buffer):
    buf = make_buffer(4, 4)
    rects = SegmentDetector().detect(buf, grid_config([0.5], [0.5]))
    assert rects == [Rect(0, 0, 2, 2), Rect(2, 0, 2, 2), Rect(0, 2, 2, 2), Rect(2, 2, 2, 2)]


@pytest.mark.parametrize("size, xs, ys", [
    ((37, 23), [0.7, 0.13, 0.5], [0.9, 0.33]),
    ((101, 57), [1 / 3, 2 / 3], [0.25, 0.5, 0.75]),
    ((13, 7), [0.0, 1.0, 0.51], []),
])
def test_custom_grid_tiles_buffer(make_buffer, size, xs, ys):
    width, height = size
    rects = SegmentDetector().detect(make_buffer(width, height), grid_config(xs, ys))
    assert_tiles(rects, width, height)


def test_unsorted_lines_are_sorted(make_buffer):
    buf = make_buffer(10, 2)
    rects = SegmentDetector().detect(buf, grid_config([0.8, 0.2], []))
    assert [r.x for r in rects] == [0, 2, 8]
    assert [r.w for r in rects] == [2, 6, 2]


def test_duplicate_lines_yield_degenerate_cells(make_buffer):
    buf = make_buffer(4, 4)
    rects = SegmentDetector().detect(buf, grid_config([0.5, 0.5], [0.5]))
    assert len(rects) == 6
    assert sum(r.is_degenerate for r in rects) == 2
    assert_tiles(rects, 4, 4)


def test_out_of_range_lines_are_clamped(make_buffer):
    buf = make_buffer(10, 10)
    rects = SegmentDetector().detect(buf, grid_config([-0.5, 1.7], []))
    assert_tiles(rects, 10, 10)
    assert [r for r in rects if not r.is_degenerate] == [Rect(0, 0, 10, 10)]


def test_even_grid_is_contiguous(make_buffer):
    buf = make_buffer(10, 7)
    rects = SegmentDetector().detect(buf, grid_config(rows=3, cols=3))
    assert len(rects) == 9
    assert_tiles(rects, 10, 7)
    assert [r.x for r in rects[:3]] == [0, 3, 7]


def test_default_grid_lines():
    grid = default_grid_lines(rows=2, cols=4)
    assert grid.x_lines == [0.25, 0.5, 0.75]
    assert grid.y_lines == [0.5]
    assert default_grid_lines(1, 1) == CustomGrid([], [])


def test_smart_mode_finds_square(square_sheet):
    config = SegmentationConfig(mode=SegmentationMode.SMART, tolerance=20, min_area=100, padding=10)
    rects = SegmentDetector().detect(square_sheet, config)
    # 최대 좌표는 포함 좌표이므로 너비 = 59 + 10 - 30
    assert rects == [Rect(30, 30, 39, 39)]


def test_smart_mode_min_area_is_exclusive(square_sheet):
    config = SegmentationConfig(mode=SegmentationMode.SMART, min_area=400)
    assert SegmentDetector().detect(square_sheet, config) == []


def test_smart_padding_clamped_to_bounds(make_buffer):
    buf = make_buffer(100, 100, (0, 0, 0), [(85, 85, 15, 15, (255, 255, 255))])
    config = SegmentationConfig(mode=SegmentationMode.SMART, min_area=100, padding=10)
    assert SegmentDetector().detect(buf, config) == [Rect(75, 75, 25, 25)]


def test_smart_components_in_raster_order(make_buffer):
    buf = make_buffer(100, 100, (255, 255, 255), [
        (10, 60, 25, 25, (200, 0, 0)),
        (60, 10, 25, 25, (0, 0, 200)),
    ])
    config = SegmentationConfig(mode=SegmentationMode.SMART, min_area=100, padding=0)
    rects = SegmentDetector().detect(buf, config)
    assert rects == [Rect(60, 10, 24, 24), Rect(10, 60, 24, 24)]


def test_smart_diagonal_touch_is_two_components(make_buffer):
    buf = make_buffer(80, 80, (0, 0, 0), [
        (10, 10, 21, 21, (255, 255, 255)),
        (31, 31, 21, 21, (255, 255, 255)),
    ])
    config = SegmentationConfig(mode=SegmentationMode.SMART, min_area=100, padding=0)
    assert len(SegmentDetector().detect(buf, config)) == 2


def test_smart_erosion_detaches_thin_bridge(make_buffer):
    buf = make_buffer(100, 50, (0, 0, 0), [
        (10, 10, 30, 30, (255, 255, 255)),
        (60, 10, 30, 30, (255, 255, 255)),
        (40, 25, 20, 1, (255, 255, 255)),
    ])
    joined = SegmentationConfig(mode=SegmentationMode.SMART, padding=0)
    split = SegmentationConfig(mode=SegmentationMode.SMART, padding=0, erosion_passes=1)
    detector = SegmentDetector()
    assert len(detector.detect(buf, joined)) == 1
    assert len(detector.detect(buf, split)) == 2


def test_smart_detection_is_deterministic(make_buffer):
    buf = make_buffer(64, 64, (250, 250, 250), [
        (5, 5, 22, 22, (10, 10, 10)),
        (35, 8, 24, 20, (30, 120, 30)),
        (12, 40, 40, 20, (30, 30, 160)),
    ])
    config = SegmentationConfig(mode=SegmentationMode.SMART, min_area=50)
    detector = SegmentDetector()
    first = detector.detect(buf, config)
    assert len(first) == 3
    assert detector.detect(buf, config) == first


def test_label_components_irregular_shapes():
    content = Mask.zeros(8, 6)
    content.bits[0:6, 6] = 1                  # 세로 막대, 6 px, 첫 픽셀 (6, 0)
    content.bits[2, 1:4] = 1                  # L 자, 5 px, 첫 픽셀 (1, 2)
    content.bits[3:5, 1] = 1
    rects = SegmentDetector.label_components(content, min_area=0, padding=0)
    assert rects == [Rect(6, 0, 0, 5), Rect(1, 2, 2, 2)]
    assert SegmentDetector.label_components(content, min_area=5, padding=0) == [Rect(6, 0, 0, 5)]


def test_label_components_large_sheet():
    content = Mask.zeros(1024, 1024)
    content.bits[5, 5:8] = 1                  # 3 px 노이즈
    origins = [(20 + 250 * i, 20 + 250 * j) for j in range(4) for i in range(4)]
    for x, y in origins:
        content.bits[y:y + 40, x:x + 40] = 1
    rects = SegmentDetector.label_components(content, min_area=100, padding=10)
    assert rects == [Rect(x - 10, y - 10, 59, 59) for x, y in origins]


def test_detector_uses_injected_mask_generator(square_sheet):
    from sticker_cutter.processing.mask_generator import MaskGenerator

    class CountingGenerator(MaskGenerator):
        calls = 0

        def generate_content_map(self, buffer, tolerance):
            CountingGenerator.calls += 1
            return super().generate_content_map(buffer, tolerance)

    generator = CountingGenerator()
    detector = SegmentDetector(generator)
    assert detector.mask_generator is generator
    detector.detect(square_sheet, SegmentationConfig(min_area=100))
    assert CountingGenerator.calls == 1


def test_core_modules_do_not_import_processing():
    from pathlib import Path

    import sticker_cutter.core as core

    for path in Path(core.__file__).parent.glob("*.py"):
        source = path.read_text(encoding="utf-8")
        assert "..processing" not in source, path.name
        assert "sticker_cutter.processing" not in source, path.name
