#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sticker Cutter Package
플러드 필 기반 배경 제거 + 스프라이트 시트 분할
"""

__version__ = "1.0.0"
__author__ = "Sticker Cutter Team"

from .app import StickerProcessor
from .core import (
    CustomGrid,
    EmptyForegroundError,
    ExtractionConfig,
    ExtractionMethod,
    Mask,
    PixelBuffer,
    ProcessingError,
    Rect,
    SegmentationConfig,
    SegmentationMode,
    SourceDecodeError,
    StickerCutterError,
)

__all__ = [
    'StickerProcessor',
    'PixelBuffer', 'Mask', 'Rect',
    'ExtractionConfig', 'ExtractionMethod', 'SegmentationConfig', 'SegmentationMode', 'CustomGrid',
    'StickerCutterError', 'EmptyForegroundError', 'SourceDecodeError', 'ProcessingError',
]
