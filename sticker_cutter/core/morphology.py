#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Morphology Engine for Sticker Cutter
이진 마스크 구조 복구 (홀 채우기, 침식, 팽창, 플러드 필)
"""

import logging
from typing import Iterable, Tuple

import cv2
import numpy as np
from scipy import ndimage

from .buffers import Mask

logger = logging.getLogger(__name__)

# 4-연결 십자 커널
_CROSS_KERNEL = cv2.getStructuringElement(cv2.MORPH_CROSS, (3, 3))


class MorphologyEngine:
    """이진 마스크 형태학 연산"""

    @staticmethod
    def flood_fill(passable: np.ndarray, seeds: Iterable[Tuple[int, int]]) -> np.ndarray:
        """4-연결 영역 확장 (명시적 스택, 재귀 없음)

        Args:
            passable: (H, W) bool, 확장 가능한 픽셀
            seeds: (x, y) 시작 위치. 시드 자체는 passable 여부와 무관하게 방문 처리

        Returns:
            np.ndarray: (H, W) bool, 방문한 픽셀
        """
        h, w = passable.shape[:2]
        total = w * h
        visited = bytearray(total)
        if total == 0:
            return np.zeros((h, w), dtype=bool)
        open_ = passable.astype(np.uint8).tobytes()

        stack = []
        for x, y in seeds:
            if 0 <= x < w and 0 <= y < h:
                i = y * w + x
                if not visited[i]:
                    visited[i] = 1
                    stack.append(i)

        while stack:
            i = stack.pop()
            x = i % w
            for n in (i - 1, i + 1, i - w, i + w):
                if n < 0 or n >= total or visited[n] or not open_[n]:
                    continue
                # 행 경계를 넘는 가짜 이웃 차단
                if abs(n % w - x) > 1:
                    continue
                visited[n] = 1
                stack.append(n)

        return np.frombuffer(bytes(visited), dtype=np.uint8).reshape(h, w).astype(bool)

    @staticmethod
    def fill_interior_holes(mask: Mask) -> Mask:
        """외곽에서 도달할 수 없는 배경(내부 구멍)을 전경으로 채움 (제자리 수정)"""
        if mask.bits.size == 0:
            return mask
        # 기본 구조 요소 = 십자 → 배경은 4-연결로 외곽과 이어져야 함
        filled = ndimage.binary_fill_holes(mask.bits.astype(bool))
        holes = filled & (mask.bits == 0)
        count = int(np.count_nonzero(holes))
        if count:
            mask.bits[holes] = 1
        logger.debug("fill_interior_holes: %d hole pixels filled", count)
        return mask

    @staticmethod
    def erode(mask: Mask, passes: int) -> Mask:
        """전경 경계를 pass당 한 픽셀씩 깎음 (이전 pass 결과 기준, 제자리 수정)

        이미지 밖 이웃은 배경으로 취급하지 않는다.
        """
        if passes <= 0 or mask.bits.size == 0:
            return mask
        # erode 기본 경계값은 최대값 → 외곽이 배경으로 간주되지 않음
        eroded = cv2.erode(mask.bits, _CROSS_KERNEL, iterations=int(passes))
        mask.bits[...] = eroded
        return mask

    @staticmethod
    def dilate(mask: Mask, passes: int) -> Mask:
        """전경 경계를 pass당 한 픽셀씩 확장 (제자리 수정)"""
        if passes <= 0 or mask.bits.size == 0:
            return mask
        dilated = cv2.dilate(mask.bits, _CROSS_KERNEL, iterations=int(passes))
        mask.bits[...] = dilated
        return mask

    @staticmethod
    def count_foreground(mask: Mask) -> int:
        return mask.count_foreground()
