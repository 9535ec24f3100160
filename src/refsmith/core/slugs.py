"""Deterministic text to identifier transform used for anchors and URLs."""

from __future__ import annotations

import re
import unicodedata

from slugify import slugify as _transliterate


_NON_ALNUM = re.compile(r"[\W_]+")


def slugify(text: str) -> str:
    """Return a lowercase, hyphen-separated, ASCII-safe identifier for ``text``.

    Runs of anything that is not a letter or a digit collapse to a single
    hyphen before transliteration, so apostrophes and underscores separate
    words instead of gluing them together. Transliteration is lossy: characters
    without an ASCII rendering are dropped.

        >>> slugify("Hello, World!")
        'hello-world'
        >>> slugify("!!!")
        ''
    """
    text = unicodedata.normalize("NFC", text)
    text = _NON_ALNUM.sub("-", text)
    # Trims and collapses hyphens, keeps only [-a-z0-9].
    return _transliterate(text, separator="-", lowercase=True)


__all__ = ["slugify"]
