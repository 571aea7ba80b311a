"""
Random identifier generation for targets that hold a UUID instead of a slug.
"""

from __future__ import annotations

import logging
import random
import uuid

logger = logging.getLogger(__name__)


def _pseudo_random_uuid4() -> uuid.UUID:
    """Build a v4 layout from the non-cryptographic generator."""
    value = random.getrandbits(128)
    value &= ~(0xF000 << 64)
    value |= 0x4000 << 64
    value &= ~(0xC000 << 48)
    value |= 0x8000 << 48
    return uuid.UUID(int=value)


def generate_uuid_v4() -> str:
    """
    Return a random version-4 identifier in canonical lower-case form.

    Falls back to ``random`` when the operating system cannot supply strong
    randomness; the version and variant bits are set either way.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        logger.warning("No strong random source available; using pseudo-random UUID fallback.")
        return str(_pseudo_random_uuid4())
