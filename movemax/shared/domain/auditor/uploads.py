"""Checks applied to uploaded images before they reach the vision provider."""

import base64
from typing import Optional

from movemax.shared.core.configuration import UploadConfig
from movemax.shared.core.exceptions import UploadValidationError


def validate_upload(content_type: str, size: int, config: Optional[UploadConfig] = None) -> None:
    """Raise ``UploadValidationError`` for oversized or non-image files."""
    limits = config or UploadConfig()
    if size > limits.max_image_bytes:
        megabytes = limits.max_image_bytes // (1024 * 1024)
        raise UploadValidationError(f"Image must be under {megabytes}MB")
    if not (content_type or "").startswith(limits.allowed_mime_prefix):
        raise UploadValidationError("Please upload an image file")


def encode_upload(data: bytes, content_type: str, config: Optional[UploadConfig] = None) -> str:
    """Validate and return the base64 payload sent inline to the provider."""
    validate_upload(content_type, len(data), config)
    return base64.b64encode(data).decode("ascii")


def to_data_url(image_b64: str, content_type: str) -> str:
    """Data URL form stored on records (floorplans, audit photos)."""
    return f"data:{content_type};base64,{image_b64}"
