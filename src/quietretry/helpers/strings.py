"""Literal (non-regex) string splitting."""

from __future__ import annotations


def split_literal(text: str | None, separator: str) -> list[str]:
    """Split *text* on every occurrence of *separator*, taken literally.

    ``None`` yields an empty list and an empty separator yields ``[text]``.
    Joining the result with *separator* gives back *text*.
    """
    if text is None:
        return []
    if not separator:
        return [text]
    return text.split(separator)
