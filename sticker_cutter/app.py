#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sticker Cutter - Main Processor Class
시트 분할(detect / slice) 및 배경 제거(extract) 공개 진입점
"""

import logging
from typing import List, Optional

from .core.buffers import Mask, PixelBuffer, Rect
from .core.config import ExtractionConfig, SegmentationConfig
from .core.errors import EmptyForegroundError, ProcessingError, StickerCutterError
from .processing.compositor import Compositor
from .processing.mask_generator import MaskGenerator, foreground_ratio
from .processing.segmentation import SegmentDetector

logger = logging.getLogger(__name__)


class StickerProcessor:
    """스티커 추출 파이프라인

    각 호출은 자신의 버퍼와 마스크만 사용하므로 같은 인스턴스를
    여러 스레드에서 서로 다른 이미지에 대해 호출해도 된다.
    """

    def __init__(self,
                 mask_generator: Optional[MaskGenerator] = None,
                 detector: Optional[SegmentDetector] = None,
                 compositor: Optional[Compositor] = None):
        self.mask_generator = mask_generator or MaskGenerator()
        self.detector = detector or SegmentDetector(self.mask_generator)
        self.compositor = compositor or Compositor()

    @staticmethod
    def _describe(buffer: PixelBuffer) -> str:
        return f"{buffer.width}x{buffer.height}"

    # ---------- 시트 분할 ----------
    def detect_segments(self, buffer: PixelBuffer, config: Optional[SegmentationConfig] = None) -> List[Rect]:
        """독립 영역 사각형 검출"""
        config = (config or SegmentationConfig()).normalized()
        try:
            rects = self.detector.detect(buffer, config)
        except StickerCutterError:
            raise
        except Exception as e:
            raise ProcessingError(f"Segment detection failed: {e}") from e

        logger.info("detect_segments(%s, mode=%s): %d rects",
                    self._describe(buffer), config.mode.value, len(rects))
        if not rects:
            logger.warning("No segments detected; try a lower tolerance or min_area")
        return rects

    def slice_image(self, buffer: PixelBuffer, config: Optional[SegmentationConfig] = None) -> List[PixelBuffer]:
        """검출된 사각형마다 크롭 버퍼 생성"""
        rects = self.detect_segments(buffer, config)
        try:
            crops = self.compositor.crop_segments(buffer, rects)
        except StickerCutterError:
            raise
        except Exception as e:
            raise ProcessingError(f"Slicing failed: {e}") from e
        logger.info("slice_image(%s): %d sprites", self._describe(buffer), len(crops))
        return crops

    # ---------- 배경 제거 ----------
    def build_mask(self, buffer: PixelBuffer, config: Optional[ExtractionConfig] = None) -> Mask:
        """초기 마스크 + 홀 채우기 + 침식까지 적용한 복구 마스크"""
        config = (config or ExtractionConfig()).normalized()
        try:
            mask = self.mask_generator.generate_repaired(buffer, config)
        except StickerCutterError:
            raise
        except Exception as e:
            raise ProcessingError(f"Mask generation failed: {e}") from e
        logger.debug("build_mask(%s): foreground %.1f%%",
                     self._describe(buffer), 100.0 * foreground_ratio(mask))
        return mask

    def extract_subject(self, buffer: PixelBuffer, config: Optional[ExtractionConfig] = None) -> PixelBuffer:
        """배경 제거 후 피사체를 정사각형 투명 캔버스 중앙에 배치

        Raises:
            EmptyForegroundError: 마스크 복구 후 피사체가 남지 않았을 때
            ProcessingError: 그 밖의 내부 실패
        """
        config = (config or ExtractionConfig()).normalized()
        mask = self.build_mask(buffer, config)
        try:
            result = self.compositor.extract_subject(buffer, mask, config.border_width)
        except EmptyForegroundError:
            logger.warning("extract_subject(%s): empty foreground (method=%s, tolerance=%s)",
                           self._describe(buffer), config.method.value, config.tolerance)
            raise
        except StickerCutterError:
            raise
        except Exception as e:
            raise ProcessingError(f"Background extraction failed: {e}") from e

        logger.info("extract_subject(%s): %dx%d cutout",
                    self._describe(buffer), result.width, result.height)
        return result
