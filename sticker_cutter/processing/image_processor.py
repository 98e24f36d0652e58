#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Image Processor for Sticker Cutter
색상 거리 계산 유틸리티
"""

from typing import Tuple

import numpy as np

from ..core.buffers import PixelBuffer

# 허용오차(0-100) → 유클리드 RGB 거리. 최대 거리는 약 441.67 (sqrt(3 * 255^2))
EXTRACTION_DISTANCE_SCALE = 4.42
# 시트 분할(smart) 전용 분류기 스케일
CONTENT_DISTANCE_SCALE = 3.0


class ImageProcessor:
    """RGB 색상 거리 계산"""

    @staticmethod
    def reference_color(buffer: PixelBuffer) -> Tuple[int, int, int]:
        """배경 기준색: 좌상단 (0, 0) 픽셀의 RGB"""
        r, g, b, _ = buffer.pixel(0, 0)
        return (r, g, b)

    @staticmethod
    def squared_distance_map(buffer: PixelBuffer, color: Tuple[int, int, int]) -> np.ndarray:
        """각 픽셀과 기준색 사이의 유클리드 거리 제곱 (H, W) int32

        정수 연산이라 임계값 경계에서 반올림 오차가 없다.
        """
        diff = buffer.rgb.astype(np.int32) - np.asarray(color, dtype=np.int32)
        return np.sum(diff * diff, axis=2, dtype=np.int32)

    @staticmethod
    def extraction_threshold_sq(tolerance: float) -> float:
        """배경 추출용 임계값 제곱: (tolerance * 4.42)^2"""
        t = float(tolerance) * EXTRACTION_DISTANCE_SCALE
        return t * t

    @staticmethod
    def content_threshold_sq(tolerance: float) -> float:
        """smart 분할용 임계값 제곱: (tolerance * 3)^2"""
        t = float(tolerance) * CONTENT_DISTANCE_SCALE
        return t * t
