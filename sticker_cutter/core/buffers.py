#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pixel Buffers for Sticker Cutter
RGBA 픽셀 버퍼, 이진 마스크, 사각형 값 타입
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Rect:
    """정수 픽셀 좌표 사각형 (좌상단 원점)"""
    x: int
    y: int
    w: int
    h: int

    @property
    def is_degenerate(self) -> bool:
        return self.w < 1 or self.h < 1

    @property
    def area(self) -> int:
        return max(0, self.w) * max(0, self.h)

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.w, self.h)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Read-only RGBA pixels.
    pixels: (H, W, 4) uint8, 생성 후 변경 불가 (출력은 항상 새 버퍼)
    """
    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid buffer size {self.width}x{self.height}")
        arr = np.asarray(self.pixels)
        if arr.dtype != np.uint8:
            raise ValueError(f"Pixel data must be uint8, got {arr.dtype}")
        expected = self.width * self.height * 4
        if arr.size != expected:
            raise ValueError(
                f"Pixel data has {arr.size} bytes, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )
        # 입력 배열과 메모리를 공유하지 않도록 복사 후 잠금
        arr = np.array(arr, dtype=np.uint8, copy=True).reshape(self.height, self.width, 4)
        arr.setflags(write=False)
        object.__setattr__(self, "pixels", arr)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "PixelBuffer":
        return cls(width, height, np.frombuffer(bytes(data), dtype=np.uint8))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """(H, W, 3) RGB 또는 (H, W, 4) RGBA 배열로부터 생성. RGB는 alpha=255"""
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Expected (H, W, 3|4) array, got shape {arr.shape}")
        arr = arr.astype(np.uint8, copy=False)
        h, w = arr.shape[:2]
        if arr.shape[2] == 3:
            alpha = np.full((h, w, 1), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        return cls(w, h, arr)

    @classmethod
    def filled(cls, width: int, height: int, rgba: Tuple[int, int, int, int]) -> "PixelBuffer":
        arr = np.empty((height, width, 4), dtype=np.uint8)
        arr[...] = np.asarray(rgba, dtype=np.uint8)
        return cls(width, height, arr)

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[:, :, :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[:, :, 3]

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and np.array_equal(self.pixels, other.pixels))

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height})"


@dataclass(eq=False)
class Mask:
    """
    이진 마스크 (1 = 전경/피사체, 0 = 배경).
    bits: (H, W) uint8. Morphology 연산이 제자리에서 수정한다.
    """
    width: int
    height: int
    bits: np.ndarray

    def __post_init__(self):
        bits = np.asarray(self.bits)
        # 2차원 배열은 (H, W) 형태여야 함
        if bits.ndim == 2 and bits.shape != (self.height, self.width):
            raise ValueError(
                f"Mask array shape {bits.shape} does not match "
                f"(height, width) = ({self.height}, {self.width})"
            )
        if bits.size != self.width * self.height:
            raise ValueError(
                f"Mask has {bits.size} cells, expected {self.width * self.height}"
            )
        self.bits = (bits.reshape(self.height, self.width) != 0).astype(np.uint8)

    @classmethod
    def zeros(cls, width: int, height: int) -> "Mask":
        return cls(width, height, np.zeros((height, width), dtype=np.uint8))

    def copy(self) -> "Mask":
        return Mask(self.width, self.height, self.bits.copy())

    def count_foreground(self) -> int:
        return int(np.count_nonzero(self.bits))

    def bounding_box(self) -> Optional[Rect]:
        """전경 픽셀의 tight bounding box (없으면 None)"""
        ys, xs = np.nonzero(self.bits)
        if len(xs) == 0:
            return None
        x_min, x_max = int(xs.min()), int(xs.max())
        y_min, y_max = int(ys.min()), int(ys.max())
        return Rect(x_min, y_min, x_max - x_min + 1, y_max - y_min + 1)

    def __eq__(self, other):
        if not isinstance(other, Mask):
            return NotImplemented
        return (self.width == other.width and self.height == other.height
                and np.array_equal(self.bits, other.bits))

    def __repr__(self):
        return f"Mask({self.width}x{self.height}, fg={self.count_foreground()})"
