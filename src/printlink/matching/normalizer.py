"""Text canonicalization for filename comparison."""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize(text: str | None) -> str:
    """Strip diacritics, lowercase, collapse non-alphanumerics to single spaces.

    ``normalize("Café_Mug--v2.gcode") == "cafe mug v2 gcode"``. Idempotent.
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM.sub(" ", stripped.lower()).strip()
