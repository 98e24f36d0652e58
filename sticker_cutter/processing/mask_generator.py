#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mask Generator for Sticker Cutter
픽셀 전경/배경 분류 및 초기 마스크 생성
"""

import logging

import numpy as np

from ..core.buffers import Mask, PixelBuffer
from ..core.config import ExtractionConfig, ExtractionMethod
from ..core.morphology import MorphologyEngine
from .image_processor import ImageProcessor

logger = logging.getLogger(__name__)


class MaskGenerator:
    """좌상단 기준색 대비 색상 거리로 초기 마스크 생성"""

    @staticmethod
    def _corner_seeds(width: int, height: int):
        return [(0, 0), (width - 1, 0), (0, height - 1), (width - 1, height - 1)]

    def generate_flood_fill_mask(self, buffer: PixelBuffer, tolerance: float) -> Mask:
        """네 모서리에서 동시에 플러드 필. 도달한 픽셀 = 배경(0), 나머지 = 전경(1)

        모서리는 시작 위치일 뿐이고 기준색은 좌상단 하나만 사용한다.
        내부의 배경색 디테일(눈동자 등)은 보존된다.
        """
        w, h = buffer.width, buffer.height
        if w == 0 or h == 0:
            return Mask.zeros(w, h)

        ref = ImageProcessor.reference_color(buffer)
        dist_sq = ImageProcessor.squared_distance_map(buffer, ref)
        similar = dist_sq <= ImageProcessor.extraction_threshold_sq(tolerance)

        background = MorphologyEngine.flood_fill(similar, self._corner_seeds(w, h))
        mask = Mask(w, h, ~background)
        logger.debug("flood fill mask: ref=%s tol=%s fg=%d/%d",
                     ref, tolerance, mask.count_foreground(), w * h)
        return mask

    def generate_global_key_mask(self, buffer: PixelBuffer, tolerance: float) -> Mask:
        """연결성 없이 모든 픽셀에 같은 색상 거리 판정 적용 (내부 구멍까지 제거)"""
        w, h = buffer.width, buffer.height
        if w == 0 or h == 0:
            return Mask.zeros(w, h)

        ref = ImageProcessor.reference_color(buffer)
        dist_sq = ImageProcessor.squared_distance_map(buffer, ref)
        mask = Mask(w, h, dist_sq > ImageProcessor.extraction_threshold_sq(tolerance))
        logger.debug("global key mask: ref=%s tol=%s fg=%d/%d",
                     ref, tolerance, mask.count_foreground(), w * h)
        return mask

    def generate_content_map(self, buffer: PixelBuffer, tolerance: float) -> Mask:
        """smart 분할용 콘텐츠 맵: 기준색과의 거리 > tolerance * 3 이면 콘텐츠(1)

        배경 추출용 분류기(4.42 배율)와는 별개로 유지한다.
        """
        w, h = buffer.width, buffer.height
        if w == 0 or h == 0:
            return Mask.zeros(w, h)

        ref = ImageProcessor.reference_color(buffer)
        dist_sq = ImageProcessor.squared_distance_map(buffer, ref)
        return Mask(w, h, dist_sq > ImageProcessor.content_threshold_sq(tolerance))

    def generate(self, buffer: PixelBuffer, config: ExtractionConfig) -> Mask:
        """설정된 방식으로 초기 마스크 생성"""
        if config.method == ExtractionMethod.GLOBAL_KEY:
            return self.generate_global_key_mask(buffer, config.tolerance)
        return self.generate_flood_fill_mask(buffer, config.tolerance)

    def generate_repaired(self, buffer: PixelBuffer, config: ExtractionConfig) -> Mask:
        """초기 마스크 → 홀 채우기 → 침식 (헤일로 제거)"""
        mask = self.generate(buffer, config)
        if config.fill_holes:
            MorphologyEngine.fill_interior_holes(mask)
        if config.erosion_passes > 0:
            before = mask.count_foreground()
            MorphologyEngine.erode(mask, config.erosion_passes)
            logger.debug("erosion x%d: %d -> %d px",
                         config.erosion_passes, before, mask.count_foreground())
        return mask


def foreground_ratio(mask: Mask) -> float:
    total = mask.width * mask.height
    return float(np.count_nonzero(mask.bits)) / total if total else 0.0
