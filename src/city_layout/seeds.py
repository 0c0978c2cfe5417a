"""Stable seed derivation.

Python's built-in ``hash()`` is salted per process, so it cannot be used to
turn seed strings into generator seeds that reproduce across runs.
"""

from hashlib import blake2s


def derive_seed(seed: str, *parts: object) -> int:
    """Create a stable non-negative 32-bit seed from a seed string and parts.

    Parts are joined by their ``repr`` so that ``1`` and ``"1"`` differ.
    """
    data = "|".join([seed, *(repr(p) for p in parts)]).encode("utf-8")
    digest = blake2s(data, digest_size=4).digest()
    return int.from_bytes(digest, "big", signed=False)
