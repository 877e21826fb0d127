"""Small collection helpers and random identifier generators."""

from __future__ import annotations

import random
import string
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

_NAME_LETTERS = string.ascii_letters
_NAME_LENGTH = 32
_SHA256_PREFIX = "sha256:"


def slice_equal(s1: Optional[Sequence[str]], s2: Optional[Sequence[str]]) -> bool:
    """Return True if both sequences hold the same items in the same order.

    ``None`` is treated as an empty sequence.
    """
    return list(s1 or ()) == list(s2 or ())


def slice_subtract(a1: Optional[Iterable[str]], a2: Optional[Iterable[str]]) -> list[str]:
    """Return the items of ``a1`` that do not occur in ``a2``, keeping order."""
    excluded = set(a2 or ())
    return [item for item in (a1 or ()) if item not in excluded]


def string_map_subtract(
    m1: Optional[Mapping[str, str]], m2: Optional[Mapping[str, str]]
) -> dict[str, str]:
    """Return the entries of ``m1`` that are missing from ``m2`` or differ in value."""
    other = m2 or {}
    return {
        key: value
        for key, value in (m1 or {}).items()
        if key not in other or other[key] != value
    }


def struct_map_subtract(
    m1: Optional[Mapping[str, Any]], m2: Optional[Iterable[str]]
) -> dict[str, Any]:
    """Return the entries of ``m1`` whose keys are not present in ``m2``."""
    excluded = set(m2 or ())
    return {key: value for key, value in (m1 or {}).items() if key not in excluded}


def rand_name() -> str:
    """Generate a random 32-character container name made of ASCII letters."""
    return "".join(random.choices(_NAME_LETTERS, k=_NAME_LENGTH))


def generate_random_sha256() -> str:
    """Generate a random 64-character hexadecimal SHA-256 string."""
    return generate_random_prefixed_sha256()[len(_SHA256_PREFIX):]


def generate_random_prefixed_sha256() -> str:
    """Generate a random SHA-256 string prefixed with ``sha256:``."""
    return _SHA256_PREFIX + random.randbytes(32).hex()