#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration records for Sticker Cutter
배경 추출 / 시트 분할 설정
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import List, Optional


class ExtractionMethod(str, Enum):
    FLOOD_FILL = "flood_fill"   # 모서리에서 연결된 배경만 제거 (내부 디테일 보존)
    GLOBAL_KEY = "global_key"   # 같은 색상은 모두 제거 (도넛 구멍, 레이스 등)


class SegmentationMode(str, Enum):
    SMART = "smart"
    GRID = "grid"


class TolerancePreset(IntEnum):
    STRICT = 10
    BALANCED = 20
    LOOSE = 40


def _clamp(value, lo, hi):
    return max(lo, min(hi, value))


@dataclass
class ExtractionConfig:
    """배경 제거 설정"""
    method: ExtractionMethod = ExtractionMethod.FLOOD_FILL
    tolerance: float = float(TolerancePreset.BALANCED)  # 0-100
    softness: int = 0            # 0-10, 예약 (출력은 항상 이진)
    erosion_passes: int = 5      # 0-10, 헤일로 제거
    fill_holes: bool = True
    border_width: int = 0        # 0-50 px, 다이컷 흰 테두리
    output_size: int = 1024      # 권장 출력 크기 (참고용)

    def normalized(self) -> "ExtractionConfig":
        """범위를 벗어난 값은 오류 대신 유효 범위로 보정"""
        return replace(
            self,
            method=ExtractionMethod(self.method),
            tolerance=float(_clamp(float(self.tolerance), 0.0, 100.0)),
            softness=int(_clamp(int(self.softness), 0, 10)),
            erosion_passes=int(_clamp(int(self.erosion_passes), 0, 10)),
            fill_holes=bool(self.fill_holes),
            border_width=int(_clamp(int(self.border_width), 0, 50)),
            output_size=max(1, int(self.output_size)),
        )


@dataclass
class CustomGrid:
    """수동 분할선 (0-1 정규화 좌표, 정렬/중복 제거 불필요)"""
    x_lines: List[float] = field(default_factory=list)
    y_lines: List[float] = field(default_factory=list)

    def normalized(self) -> "CustomGrid":
        return CustomGrid(
            x_lines=[float(_clamp(float(v), 0.0, 1.0)) for v in self.x_lines],
            y_lines=[float(_clamp(float(v), 0.0, 1.0)) for v in self.y_lines],
        )


@dataclass
class SegmentationConfig:
    """시트 분할 설정"""
    mode: SegmentationMode = SegmentationMode.SMART
    tolerance: float = float(TolerancePreset.BALANCED)  # 0-100
    padding: int = 10            # smart 모드 trim 여백 (0-50)
    erosion_passes: int = 0      # smart 모드 content map 침식 (0-10)
    rows: int = 2
    cols: int = 2
    min_area: int = 400          # 이 면적 이하 컴포넌트는 노이즈
    custom_grid: Optional[CustomGrid] = None

    def normalized(self) -> "SegmentationConfig":
        return replace(
            self,
            mode=SegmentationMode(self.mode),
            tolerance=float(_clamp(float(self.tolerance), 0.0, 100.0)),
            padding=int(_clamp(int(self.padding), 0, 50)),
            erosion_passes=int(_clamp(int(self.erosion_passes), 0, 10)),
            rows=max(1, int(self.rows)),
            cols=max(1, int(self.cols)),
            min_area=max(0, int(self.min_area)),
            custom_grid=self.custom_grid.normalized() if self.custom_grid is not None else None,
        )
