"""Filesystem-safe site identifiers derived from URLs."""

from __future__ import annotations

MAX_IDENTIFIER_LENGTH = 50

_STRIP_PREFIXES = ("https://", "http://", "www.")
_REPLACED_CHARS = str.maketrans({c: "_" for c in "/:?&="})


def _strip_prefix(text: str, prefix: str) -> str:
    return text[len(prefix):] if text.startswith(prefix) else text


def sanitize(url: str) -> str:
    """Return the site identifier used to name the artifacts of *url*.

    The scheme and a leading ``www.`` are stripped, ``/ : ? & =`` become
    ``_`` and the result is cut to :data:`MAX_IDENTIFIER_LENGTH` characters.
    Distinct URLs can map to the same identifier.

    >>> sanitize("https://www.Example.com/a?b=c&d=e")
    'Example.com_a_b_c_d_e'
    """
    name = url
    for prefix in _STRIP_PREFIXES:
        name = _strip_prefix(name, prefix)
    name = name.translate(_REPLACED_CHARS)
    return name[:MAX_IDENTIFIER_LENGTH]
