#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Errors for Sticker Cutter
"""


class StickerCutterError(Exception):
    """모든 파이프라인 오류의 기본 클래스"""


class EmptyForegroundError(StickerCutterError):
    """마스크 복구 후 전경 픽셀이 하나도 없음"""

    def __init__(self, message: str = "No subject detected. Try a looser tolerance."):
        super().__init__(message)


class SourceDecodeError(StickerCutterError):
    """원본 이미지를 디코딩할 수 없음"""


class ProcessingError(StickerCutterError):
    """공개 진입점에서 내부 실패를 하나의 오류로 변환"""
