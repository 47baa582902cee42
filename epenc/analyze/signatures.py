from __future__ import annotations

import hashlib
from collections.abc import Iterable, Sequence

from epenc.model import DiscTitle

FINGERPRINT_LENGTH = 8


def fingerprint_from_ticks(ticks: int, chapter_ticks: Sequence[int]) -> str:
    """Digest of a title's total ticks followed by its chapter tick list.

    The ticks and the comma-joined chapter list are concatenated without a
    separator and hashed with SHA-256; the first 8 hex characters are kept.
    """
    payload = f"{ticks}{','.join(str(t) for t in chapter_ticks)}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


def fingerprint_from_blocks(blocks: int) -> str:
    """Block-count fingerprint, used when the scanner gives no chapter ticks."""
    return str(blocks)


def find_duplicates(titles: Iterable[DiscTitle]) -> dict[tuple[str, int], DiscTitle]:
    """Map the ``ident`` of every repeated title to the first title it duplicates.

    Titles are duplicates when they share ``(disc_path, fingerprint)``.
    Matching fingerprints on different disc paths are never duplicates.
    """
    first_seen: dict[tuple[str, str], DiscTitle] = {}
    duplicates: dict[tuple[str, int], DiscTitle] = {}
    for title in titles:
        original = first_seen.setdefault(title.dedup_key, title)
        if original is not title:
            duplicates[title.ident] = original
    return duplicates
