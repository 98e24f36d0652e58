#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Processing Module
마스크 생성, 영역 검출 및 출력 합성
"""

from .image_processor import ImageProcessor
from .mask_generator import MaskGenerator
from .compositor import Compositor
from .segmentation import SegmentDetector, default_grid_lines

__all__ = ['ImageProcessor', 'MaskGenerator', 'Compositor', 'SegmentDetector', 'default_grid_lines']
