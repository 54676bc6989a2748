"""Name-casing helpers used to match record field names to object members."""

from __future__ import annotations

import re

_WORD_SPLIT = re.compile(r"[_\-\s]+")


def title_cased_name(name: str) -> str:
    """snake_case / kebab-case / lower ➜ TitleCase (``user_name`` ➜ ``UserName``)."""
    return "".join(part[:1].upper() + part[1:] for part in _WORD_SPLIT.split(name) if part)


def member_key(name: str) -> str:
    """Casing- and underscore-insensitive key: ``UserName``, ``user_name`` ➜ ``username``."""
    return _WORD_SPLIT.sub("", name).lower()


__all__ = ["member_key", "title_cased_name"]
