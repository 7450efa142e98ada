"""
Tenant Cache - Payload Serialization

JSON encoding shared by the backends. Stored payloads carry no header or
expiry metadata, only the JSON document.
"""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def to_json(value: Any) -> str:
    """Serialize value to a JSON string (non-ASCII kept as-is)."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def from_json(data: str | bytes | None, key: str) -> Any | None:
    """
    Deserialize a stored payload.

    Returns None if data is None or is not valid JSON, so a corrupted entry
    reads as a cache miss.
    """
    if data is None:
        return None
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data)
    except (ValueError, UnicodeDecodeError) as e:
        preview = data[:100] if isinstance(data, (str, bytes)) else None
        logger.warning(
            f"Discarding undecodable cache payload for key '{key}': {e}",
            extra={"key": key, "data_preview": repr(preview), "error": str(e)},
        )
        return None
