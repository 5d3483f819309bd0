"""Image parts for multimodal prompts."""
from __future__ import annotations

import base64
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".heif": "image/heif",
}
DEFAULT_MIME_TYPE = "application/octet-stream"


def infer_mime_type(file_path: Union[str, Path]) -> str:
    """Guess an image MIME type from the file extension (case-insensitive)."""
    return _MIME_TYPES.get(Path(file_path).suffix.lower(), DEFAULT_MIME_TYPE)


def image_part_from_data(data: bytes, mime_type: str) -> Dict[str, Any]:
    """Inline ``data`` as a base64 ``inlineData`` part."""
    return {
        "inlineData": {
            "mimeType": mime_type,
            "data": base64.b64encode(data).decode("ascii"),
        }
    }


def image_part_from_file(file_path: Union[str, Path], mime_type: Optional[str] = None) -> Dict[str, Any]:
    """Read ``file_path`` and inline it; the MIME type is inferred when omitted.

    Raises:
        OSError: the file cannot be read.
    """
    data = Path(file_path).read_bytes()
    return image_part_from_data(data, mime_type or infer_mime_type(file_path))


def image_part_from_url(url: str) -> Dict[str, Any]:
    """Reference a remote image by URI (``fileData`` part)."""
    return {"fileData": {"fileUri": url}}


def create_multimodal_content(text: str, image_parts: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """Content object with the text part first, then the image parts."""
    return {"parts": [{"text": text}, *image_parts]}


__all__ = [
    "DEFAULT_MIME_TYPE",
    "create_multimodal_content",
    "image_part_from_data",
    "image_part_from_file",
    "image_part_from_url",
    "infer_mime_type",
]
