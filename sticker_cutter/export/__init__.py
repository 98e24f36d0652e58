#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Export Module
이미지 입출력 및 결과 내보내기
"""

from .exporters import (
    export_sprites,
    load_pixel_buffer,
    rects_to_json,
    safe_filename,
    save_png,
    to_pil_image,
)

__all__ = [
    'load_pixel_buffer', 'to_pil_image', 'save_png',
    'safe_filename', 'export_sprites', 'rects_to_json',
]
