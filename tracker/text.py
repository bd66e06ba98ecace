# -*- coding: utf-8 -*-
"""Name folding shared by catalog de-duplication, ordering and search."""

from __future__ import annotations

import unicodedata
from typing import Iterable, List, Tuple


def fold(name: str) -> str:
    """Case- and diacritic-insensitive form of ``name``.

    "  Crème Brûlée " and "creme brulee" fold to the same key.
    """
    decomposed = unicodedata.normalize("NFKD", (name or "").strip())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def sort_key(name: str) -> Tuple[str, str]:
    # Raw name breaks ties between names that fold identically.
    return (fold(name), name)


def same_name(a: str, b: str) -> bool:
    return fold(a) == fold(b)


def contains_name(names: Iterable[str], name: str) -> bool:
    key = fold(name)
    return any(fold(existing) == key for existing in names)


def dedupe_names(names: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for name in names:
        key = fold(name)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(name)
    return out


def sorted_names(names: Iterable[str]) -> List[str]:
    return sorted(names, key=sort_key)


def matching(names: Iterable[str], query: str) -> List[str]:
    """Catalog search: names whose folded form contains the folded query."""
    needle = fold(query)
    if not needle:
        return list(names)
    return [name for name in names if needle in fold(name)]
