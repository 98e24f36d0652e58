#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data Exporters for Sticker Cutter
이미지 디코딩 / PNG 내보내기 / 사각형 JSON 내보내기
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..core.buffers import PixelBuffer, Rect
from ..core.errors import SourceDecodeError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_pixel_buffer(path: PathLike) -> PixelBuffer:
    """이미지 파일을 RGBA PixelBuffer로 디코딩

    Raises:
        SourceDecodeError: 파일이 없거나 디코딩할 수 없을 때
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
            arr = np.asarray(rgba, dtype=np.uint8)
    except (FileNotFoundError, UnidentifiedImageError, Image.DecompressionBombError,
            OSError, ValueError) as e:
        raise SourceDecodeError(f"Cannot decode image {path}: {e}") from e
    logger.debug("loaded %s (%dx%d)", path, arr.shape[1], arr.shape[0])
    return PixelBuffer.from_array(arr)


def to_pil_image(buffer: PixelBuffer) -> Image.Image:
    # (H, W, 4) uint8 → RGBA
    return Image.fromarray(np.ascontiguousarray(buffer.pixels))


def save_png(buffer: PixelBuffer, path: PathLike) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_pil_image(buffer).save(path, format="PNG")
    return path


def safe_filename(name: str, fallback: str = "sticker") -> str:
    """영숫자/공백/하이픈만 남기고 공백은 '_'로, 소문자화"""
    cleaned = re.sub(r"[^a-z0-9\s-]", "", name, flags=re.IGNORECASE).strip()
    cleaned = re.sub(r"\s+", "_", cleaned).lower()
    return cleaned or fallback


def export_sprites(buffers: Iterable[PixelBuffer], out_dir: PathLike, base_name: str) -> List[Path]:
    """<slug>_<n>.png (1부터) 로 저장하고 경로 목록 반환"""
    out_dir = Path(out_dir)
    os.makedirs(out_dir, exist_ok=True)
    slug = safe_filename(base_name)
    paths = []
    for i, buf in enumerate(buffers, start=1):
        paths.append(save_png(buf, out_dir / f"{slug}_{i}.png"))
    logger.info("exported %d sprites to %s", len(paths), out_dir)
    return paths


def rects_to_json(rects: Iterable[Rect], width: int, height: int) -> str:
    """검출 결과 JSON (이미지 크기 + 사각형 목록)"""
    payload = {
        "width": int(width),
        "height": int(height),
        "segments": [
            {"x": int(r.x), "y": int(r.y), "w": int(r.w), "h": int(r.h)} for r in rects
        ],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)
