"""URL slug generation."""

from __future__ import annotations

import re
import unicodedata

_SEPARATOR = "-"
_UNSAFE = re.compile(r"[^a-z0-9\s_-]+")
_RUNS = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """Return a lower-case, dash separated, ASCII-only slug for ``text``.

    ``"Hello World!!"`` becomes ``"hello-world"``; accented letters are
    transliterated (``"Café"`` -> ``"cafe"``) and ``@`` is spelled ``at``.
    An input with no usable characters yields an empty string.
    """
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    lowered = ascii_text.replace("@", f"{_SEPARATOR}at{_SEPARATOR}").lower()
    cleaned = _UNSAFE.sub("", lowered)
    return _RUNS.sub(_SEPARATOR, cleaned).strip(_SEPARATOR)
