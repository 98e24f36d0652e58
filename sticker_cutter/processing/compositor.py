#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Compositor for Sticker Cutter
마스크/사각형으로부터 최종 출력 버퍼 합성 (분할 크롭, 배경 제거 컷아웃)
"""

import logging
from typing import Iterable, List, Tuple

import numpy as np

from ..core.buffers import Mask, PixelBuffer, Rect
from ..core.errors import EmptyForegroundError
from ..core.morphology import MorphologyEngine

logger = logging.getLogger(__name__)

MATTE_COLOR = (0, 0, 0, 255)        # 크롭 배경 (불투명 검정)
BORDER_COLOR = (255, 255, 255, 255)  # 다이컷 테두리 (불투명 흰색)
MIN_PADDING = 40
BORDER_PADDING_EXTRA = 20


class Compositor:
    """출력 버퍼 합성기"""

    # ---------- slicing ----------
    @staticmethod
    def _over_matte(src: np.ndarray) -> np.ndarray:
        """source-over 합성으로 불투명 검정 매트 위에 그림 (alpha 항상 255)"""
        alpha = src[:, :, 3:4].astype(np.uint32)
        rgb = (src[:, :, :3].astype(np.uint32) * alpha + 127) // 255
        out = np.empty(src.shape, dtype=np.uint8)
        out[:, :, :3] = rgb.astype(np.uint8)
        out[:, :, 3] = 255
        return out

    def crop_segment(self, buffer: PixelBuffer, rect: Rect) -> PixelBuffer:
        """rect 크기 버퍼를 검정으로 채운 뒤 원본 영역을 (0, 0)에 그림

        버퍼 밖으로 나간 영역은 검정으로 남는다.
        """
        if rect.is_degenerate:
            raise ValueError(f"Cannot allocate crop for degenerate rect {rect}")
        out = np.empty((rect.h, rect.w, 4), dtype=np.uint8)
        out[...] = np.asarray(MATTE_COLOR, dtype=np.uint8)

        sx0, sy0 = max(0, rect.x), max(0, rect.y)
        sx1, sy1 = min(buffer.width, rect.right), min(buffer.height, rect.bottom)
        if sx1 > sx0 and sy1 > sy0:
            region = buffer.pixels[sy0:sy1, sx0:sx1]
            dx, dy = sx0 - rect.x, sy0 - rect.y
            out[dy:dy + (sy1 - sy0), dx:dx + (sx1 - sx0)] = self._over_matte(region)
        return PixelBuffer(rect.w, rect.h, out)

    def crop_segments(self, buffer: PixelBuffer, rects: Iterable[Rect]) -> List[PixelBuffer]:
        """유효한 사각형마다 크롭 버퍼 생성. 퇴화 사각형(w<1 또는 h<1)은 건너뜀"""
        crops = []
        skipped = 0
        for rect in rects:
            if rect.is_degenerate:
                skipped += 1
                continue
            crops.append(self.crop_segment(buffer, rect))
        if skipped:
            logger.debug("crop_segments: skipped %d degenerate rects", skipped)
        return crops

    # ---------- background removal ----------
    @staticmethod
    def output_geometry(bbox: Rect, border_width: int) -> Tuple[int, int, int]:
        """(final_size, off_x, off_y): 정사각형 캔버스 크기와 중앙 정렬 오프셋"""
        square_side = max(bbox.w, bbox.h)
        padding = max(border_width + BORDER_PADDING_EXTRA, MIN_PADDING)
        final_size = square_side + 2 * padding
        off_x = (final_size - bbox.w) // 2
        off_y = (final_size - bbox.h) // 2
        return final_size, off_x, off_y

    @staticmethod
    def build_border_layer(mask: Mask, bbox: Rect, final_size: int,
                           offset: Tuple[int, int], border_width: int) -> Mask:
        """잘라낸 마스크를 오프셋 위치에 놓고 border_width 만큼 팽창"""
        off_x, off_y = offset
        layer = Mask.zeros(final_size, final_size)
        crop = mask.bits[bbox.y:bbox.bottom, bbox.x:bbox.right]
        layer.bits[off_y:off_y + bbox.h, off_x:off_x + bbox.w] = crop
        return MorphologyEngine.dilate(layer, border_width)

    def extract_subject(self, buffer: PixelBuffer, mask: Mask, border_width: int = 0) -> PixelBuffer:
        """마스크 전경만 정사각형 투명 캔버스 중앙에 복사 (이진 컷아웃, 블렌딩 없음)

        Raises:
            EmptyForegroundError: 전경 픽셀이 없을 때
        """
        if (mask.width, mask.height) != (buffer.width, buffer.height):
            raise ValueError(
                f"Mask {mask.width}x{mask.height} does not match buffer "
                f"{buffer.width}x{buffer.height}"
            )
        bbox = mask.bounding_box()
        if bbox is None:
            raise EmptyForegroundError()

        final_size, off_x, off_y = self.output_geometry(bbox, border_width)
        out = np.zeros((final_size, final_size, 4), dtype=np.uint8)

        if border_width > 0:
            border = self.build_border_layer(mask, bbox, final_size, (off_x, off_y), border_width)
            out[border.bits == 1] = np.asarray(BORDER_COLOR, dtype=np.uint8)

        crop_mask = mask.bits[bbox.y:bbox.bottom, bbox.x:bbox.right] == 1
        crop_rgb = buffer.rgb[bbox.y:bbox.bottom, bbox.x:bbox.right]
        dst = out[off_y:off_y + bbox.h, off_x:off_x + bbox.w]
        dst[crop_mask, :3] = crop_rgb[crop_mask]
        dst[crop_mask, 3] = 255

        logger.debug("extract_subject: bbox=%s -> %dx%d (border=%d)",
                     bbox.as_tuple(), final_size, final_size, border_width)
        return PixelBuffer(final_size, final_size, out)
