"""
services/attachments.py

첨부파일(시험지 스캔) 처리
- 프론트에서 FileReader.readAsDataURL 로 만든 data URL 문자열을 그대로 저장합니다.
  예: "data:image/png;base64,iVBORw0KGgo..."
"""

import base64
import binascii
import logging
from typing import Tuple

from config.settings import settings

logger = logging.getLogger(__name__)

MAX_ATTACHMENT_BYTES = settings.MAX_UPLOAD_MB * 1000 * 1000


def decode_data_url(data: str) -> Tuple[str, bytes]:
    """data URL → (media_type, 원본 bytes). 형식이 잘못되면 ValueError"""
    if not data.startswith("data:") or "," not in data:
        raise ValueError("attachment must be a data URL")

    header, payload = data[5:].split(",", 1)
    params = header.split(";")
    if "base64" not in params[1:]:
        raise ValueError("attachment data URL must be base64 encoded")

    media_type = params[0] or "application/octet-stream"
    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"attachment is not valid base64: {e}") from e
    return media_type, content


def detect_kind(media_type: str) -> str:
    """image/* 는 image, 그 외는 pdf"""
    return "image" if media_type.startswith("image/") else "pdf"


def check_size(content: bytes) -> None:
    if len(content) > MAX_ATTACHMENT_BYTES:
        logger.info(f"첨부파일 용량 초과: {len(content)} bytes")
        raise ValueError(f"attachment too large (max {settings.MAX_UPLOAD_MB}MB)")
