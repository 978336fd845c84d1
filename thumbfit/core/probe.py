from __future__ import annotations

import io
import logging
from typing import Optional

from PIL import Image

from thumbfit.core.bounds import NaturalSize
from thumbfit.core.cache import ProbeCache
from thumbfit.core.hashing import content_hash

logger = logging.getLogger(__name__)


def probe_natural_size(data: bytes) -> NaturalSize:
    """Read the natural size from the image header without decoding pixels."""
    with Image.open(io.BytesIO(data)) as image:
        width, height = image.size
    return NaturalSize(width=width, height=height)


def probe_cached(data: bytes, cache: Optional[ProbeCache] = None) -> tuple[str, NaturalSize]:
    key = content_hash(data)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return key, cached

    natural = probe_natural_size(data)
    logger.debug("Probed %s: %s x %s", key, natural.width, natural.height)
    if cache is not None:
        cache.set(key, natural)
    return key, natural
