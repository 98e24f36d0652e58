#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Segment Detector for Sticker Cutter
시트에서 독립 영역(사각형) 검출: smart(연결 성분) / grid(분할선)
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np
from scipy import ndimage

from ..core.buffers import Mask, PixelBuffer, Rect
from ..core.config import CustomGrid, SegmentationConfig, SegmentationMode
from ..core.morphology import MorphologyEngine
from .mask_generator import MaskGenerator

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def default_grid_lines(rows: int, cols: int) -> CustomGrid:
    """rows x cols 균등 분할선 (내부 선만, 0/1 제외)"""
    rows, cols = max(1, int(rows)), max(1, int(cols))
    return CustomGrid(
        x_lines=[i / cols for i in range(1, cols)],
        y_lines=[j / rows for j in range(1, rows)],
    )


class SegmentDetector:
    """독립 영역 사각형 검출기"""

    def __init__(self, mask_generator: Optional[MaskGenerator] = None):
        self.mask_generator = mask_generator or MaskGenerator()

    # ---------- grid ----------
    @staticmethod
    def _project_lines(lines: Sequence[float], extent: int) -> List[int]:
        """정규화 선 → 0, 1을 포함해 정렬한 픽셀 좌표"""
        normalized = sorted([0.0] + [min(1.0, max(0.0, float(v))) for v in lines] + [1.0])
        return [_round_half_up(v * extent) for v in normalized]

    def detect_grid_lines(self, width: int, height: int, grid: CustomGrid) -> List[Rect]:
        """분할선 사이 셀마다 사각형 하나 (행 우선 순서). 셀들은 버퍼를 정확히 덮는다"""
        xs = self._project_lines(grid.x_lines, width)
        ys = self._project_lines(grid.y_lines, height)
        rects = []
        for r in range(len(ys) - 1):
            for c in range(len(xs) - 1):
                rects.append(Rect(xs[c], ys[r], xs[c + 1] - xs[c], ys[r + 1] - ys[r]))
        return rects

    def detect_even_grid(self, width: int, height: int, rows: int, cols: int) -> List[Rect]:
        return self.detect_grid_lines(width, height, default_grid_lines(rows, cols))

    # ---------- smart ----------
    @staticmethod
    def label_components(content: Mask, min_area: int, padding: int) -> List[Rect]:
        """4-연결 연결 성분 라벨링 (래스터 순서)

        면적 <= min_area 인 성분은 노이즈로 버린다.
        """
        w, h = content.width, content.height
        if w == 0 or h == 0:
            return []
        # 기본 구조 요소 = 십자 (4-연결), 라벨은 래스터 순서로 부여됨
        labels, num = ndimage.label(content.bits)
        if num == 0:
            return []
        areas = np.bincount(labels.ravel(), minlength=num + 1)

        rects = []
        discarded = 0
        for label, (sy, sx) in enumerate(ndimage.find_objects(labels), start=1):
            if int(areas[label]) <= min_area:
                discarded += 1
                continue
            # find_objects 의 stop 은 배타적 → 최대 좌표 = stop - 1
            min_x, max_x = sx.start, sx.stop - 1
            min_y, max_y = sy.start, sy.stop - 1
            x0 = max(0, min_x - padding)
            y0 = max(0, min_y - padding)
            rects.append(Rect(
                x0,
                y0,
                min(w, max_x + padding) - x0,
                min(h, max_y + padding) - y0,
            ))

        logger.debug("label_components: %d kept, %d discarded as noise (<= %d px)",
                     len(rects), discarded, min_area)
        return rects

    def detect_smart(self, buffer: PixelBuffer, config: SegmentationConfig) -> List[Rect]:
        content = self.mask_generator.generate_content_map(buffer, config.tolerance)
        if config.erosion_passes > 0:
            MorphologyEngine.erode(content, config.erosion_passes)
        return self.label_components(content, config.min_area, config.padding)

    def detect(self, buffer: PixelBuffer, config: SegmentationConfig) -> List[Rect]:
        """설정된 모드로 사각형 목록 반환 (같은 입력이면 같은 결과)"""
        if config.mode == SegmentationMode.GRID:
            if config.custom_grid is not None:
                return self.detect_grid_lines(buffer.width, buffer.height, config.custom_grid)
            return self.detect_even_grid(buffer.width, buffer.height, config.rows, config.cols)
        return self.detect_smart(buffer, config)
