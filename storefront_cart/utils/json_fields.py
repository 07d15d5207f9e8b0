# storefront_cart/utils/json_fields.py
"""
Text columns holding JSON (variant selections, catalog image lists).

Decoding never raises: a malformed value falls back to an empty container
and is logged, so a single bad row cannot break a cart read.
"""
import json
from typing import Any, Dict, List, Optional

from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)


def dump_variant_selections(selections: Dict[str, str] | None) -> str:
    return json.dumps(selections or {}, sort_keys=True)


def load_variant_selections(raw: str | None) -> Dict[str, str]:
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not parse variant selections {raw!r}: {e}")
        return {}
    if not isinstance(value, dict):
        logger.warning(f"Variant selections are not a mapping: {raw!r}")
        return {}
    selections = {}
    for k, v in value.items():
        if not isinstance(v, str):
            logger.warning(f"Dropping non-string variant selection {k!r}={v!r}")
            continue
        selections[str(k)] = v
    return selections


def load_images(raw: str | None) -> List[Dict[str, Any]]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not parse product group images: {e}")
        return []
    if not isinstance(value, list):
        logger.warning(f"Product group images are not a list: {raw!r}")
        return []
    images = []
    for img in value:
        if not isinstance(img, dict) or not isinstance(img.get("url"), str) or not img["url"]:
            logger.warning(f"Dropping malformed image entry: {img!r}")
            continue
        images.append(img)
    return images


def pick_thumbnail(images: List[Dict[str, Any]]) -> Optional[str]:
    """First image flagged isThumbnail, else the first image, else None."""
    urls = [img for img in images if isinstance(img.get("url"), str) and img["url"]]
    for img in urls:
        if img.get("isThumbnail"):
            return img["url"]
    if urls:
        return urls[0]["url"]
    return None
