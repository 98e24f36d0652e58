#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core utilities for Sticker Cutter
"""

from .buffers import Mask, PixelBuffer, Rect
from .config import (
    CustomGrid,
    ExtractionConfig,
    ExtractionMethod,
    SegmentationConfig,
    SegmentationMode,
    TolerancePreset,
)
from .errors import EmptyForegroundError, ProcessingError, SourceDecodeError, StickerCutterError
from .morphology import MorphologyEngine

__all__ = [
    'PixelBuffer', 'Mask', 'Rect',
    'ExtractionConfig', 'ExtractionMethod', 'SegmentationConfig', 'SegmentationMode',
    'CustomGrid', 'TolerancePreset',
    'StickerCutterError', 'EmptyForegroundError', 'SourceDecodeError', 'ProcessingError',
    'MorphologyEngine',
]
