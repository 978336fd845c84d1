from __future__ import annotations

import hashlib


def content_hash(data: bytes) -> str:
    hasher = hashlib.blake2b(digest_size=16)
    hasher.update(data)
    return hasher.hexdigest()
