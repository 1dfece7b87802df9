"""Locale-aware name ordering that does not depend on the process locale.

``locale.strxfrm`` follows ``LC_COLLATE`` and degrades to code-point order
under the C locale, which puts ``"Beta"`` before ``"alpha"``.  The key below
mirrors the default Unicode collation closely enough for display names:
accents and case are ignored at the primary level, then accents, then case
with lowercase first.
"""

from __future__ import annotations

import unicodedata


def _strip_marks(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(name: str) -> tuple[str, str, tuple[bool, ...], str]:
    """Return a sort key for *name*."""

    normalized = unicodedata.normalize("NFC", name)
    base = _strip_marks(normalized)
    return (
        base.casefold(),
        normalized.casefold(),
        tuple(ch.isupper() for ch in base),
        normalized,
    )


__all__ = ["collation_key"]
