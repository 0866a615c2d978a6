"""Deterministic cache keys."""

import hashlib
import json
from typing import Any, Mapping


def cache_key(rendered_prompt: str, fingerprint_fields: Mapping[str, Any]) -> str:
    """Derive the cache key for one generation request.

    The key is a SHA-256 digest over the rendered prompt and the canonical
    JSON of the identifying fields (sorted keys, no whitespace), so equal
    inputs always map to equal keys regardless of mapping order.

    Args:
        rendered_prompt: Fully substituted user prompt
        fingerprint_fields: Identifying fields such as child id and age bucket

    Returns:
        Hex digest
    """
    canonical = json.dumps(
        dict(fingerprint_fields), sort_keys=True, separators=(",", ":"), default=str
    )
    digest = hashlib.sha256()
    digest.update(rendered_prompt.encode("utf-8"))
    digest.update(b"\x00")
    digest.update(canonical.encode("utf-8"))
    return digest.hexdigest()
