#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sticker Cutter - Main Entry Point
시트 분할 / 배경 제거 명령줄 도구
"""

import argparse
import logging
import sys

from sticker_cutter import (
    CustomGrid,
    ExtractionConfig,
    ExtractionMethod,
    SegmentationConfig,
    SegmentationMode,
    StickerCutterError,
    StickerProcessor,
)
from sticker_cutter.export import export_sprites, load_pixel_buffer, rects_to_json, save_png
from sticker_cutter.processing import default_grid_lines

logger = logging.getLogger("sticker_cutter.cli")


def _add_segmentation_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("image", help="입력 이미지 경로")
    p.add_argument("--mode", choices=[m.value for m in SegmentationMode], default=SegmentationMode.SMART.value)
    p.add_argument("--tolerance", type=float, default=20.0)
    p.add_argument("--padding", type=int, default=10, help="smart 모드 여백(px)")
    p.add_argument("--erosion", type=int, default=0, help="smart 모드 content map 침식 횟수")
    p.add_argument("--min-area", type=int, default=400)
    p.add_argument("--rows", type=int, default=2)
    p.add_argument("--cols", type=int, default=2)
    p.add_argument("--x-lines", type=float, nargs="*", default=None, help="수동 세로 분할선 (0-1)")
    p.add_argument("--y-lines", type=float, nargs="*", default=None, help="수동 가로 분할선 (0-1)")


def _segmentation_config(args) -> SegmentationConfig:
    custom = None
    if args.x_lines is not None or args.y_lines is not None:
        # 지정하지 않은 축은 rows/cols 균등 분할선으로 채움
        even = default_grid_lines(args.rows, args.cols)
        custom = CustomGrid(
            x_lines=args.x_lines if args.x_lines is not None else even.x_lines,
            y_lines=args.y_lines if args.y_lines is not None else even.y_lines,
        )
    return SegmentationConfig(
        mode=SegmentationMode(args.mode),
        tolerance=args.tolerance,
        padding=args.padding,
        erosion_passes=args.erosion,
        rows=args.rows,
        cols=args.cols,
        min_area=args.min_area,
        custom_grid=custom,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sticker-cutter", description="Sticker sheet slicer and background remover")
    parser.add_argument("-v", "--verbose", action="store_true", help="디버그 로그 출력")
    sub = parser.add_subparsers(dest="command", required=True)

    p_detect = sub.add_parser("detect", help="영역 검출 결과를 JSON으로 출력")
    _add_segmentation_args(p_detect)

    p_slice = sub.add_parser("slice", help="검출된 영역을 PNG로 잘라 저장")
    _add_segmentation_args(p_slice)
    p_slice.add_argument("-o", "--out-dir", default="sprites")
    p_slice.add_argument("--name", default="sprite", help="출력 파일 이름 접두어")

    p_extract = sub.add_parser("extract", help="배경을 제거한 컷아웃 PNG 저장")
    p_extract.add_argument("image")
    p_extract.add_argument("-o", "--output", default="cutout.png")
    p_extract.add_argument("--method", choices=[m.value for m in ExtractionMethod],
                           default=ExtractionMethod.FLOOD_FILL.value)
    p_extract.add_argument("--tolerance", type=float, default=20.0)
    p_extract.add_argument("--erosion", type=int, default=5)
    p_extract.add_argument("--no-fill-holes", action="store_true")
    p_extract.add_argument("--border", type=int, default=0, help="흰 테두리 두께(px)")
    return parser


def main(argv=None) -> int:
    """메인 함수"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    processor = StickerProcessor()

    try:
        buffer = load_pixel_buffer(args.image)
        if args.command == "detect":
            rects = processor.detect_segments(buffer, _segmentation_config(args))
            print(rects_to_json(rects, buffer.width, buffer.height))
        elif args.command == "slice":
            sprites = processor.slice_image(buffer, _segmentation_config(args))
            for path in export_sprites(sprites, args.out_dir, args.name):
                print(path)
        else:
            config = ExtractionConfig(
                method=ExtractionMethod(args.method),
                tolerance=args.tolerance,
                erosion_passes=args.erosion,
                fill_holes=not args.no_fill_holes,
                border_width=args.border,
            )
            cutout = processor.extract_subject(buffer, config)
            print(save_png(cutout, args.output))
    except StickerCutterError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
