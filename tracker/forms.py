# -*- coding: utf-8 -*-
"""Parsing of raw form text before it reaches a view-model."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

_LEADING_NUMBER = re.compile(r"^\s*(\d[\d.,]*|[.,]\d+)")
_GROUPED = re.compile(r"^[1-9]\d{0,2}(?:[.,]\d{3})+$")


@dataclass(frozen=True)
class WorkoutDraft:
    exercise_name: str
    reps: int
    sets: int
    weight: Optional[float]


def _to_float(text: str) -> Optional[float]:
    try:
        value = float(text.strip().replace(",", "."))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_count(text: Optional[str]) -> Optional[int]:
    """Positive whole number (reps, sets), else ``None``."""
    try:
        value = int((text or "").strip())
    except ValueError:
        return None
    return value if value >= 1 else None


def parse_weight(text: Optional[str]) -> Tuple[bool, Optional[float]]:
    """Returns ``(ok, weight)``; blank input is a valid bodyweight entry."""
    trimmed = (text or "").strip()
    if not trimmed:
        return True, None
    value = _to_float(trimmed)
    if value is None or value < 0:
        return False, None
    return True, value


def parse_workout_form(
    exercise_name: Optional[str],
    reps_text: Optional[str],
    sets_text: Optional[str],
    weight_text: Optional[str] = None,
) -> Optional[WorkoutDraft]:
    name = (exercise_name or "").strip()
    reps = parse_count(reps_text)
    sets = parse_count(sets_text)
    ok, weight = parse_weight(weight_text)
    if not name or reps is None or sets is None or not ok:
        return None
    return WorkoutDraft(exercise_name=name, reps=reps, sets=sets, weight=weight)


def _plain_number(token: str) -> Optional[str]:
    """Drop thousands separators and use "." for the decimal point.

    "," followed by exactly three digits after a non-zero lead ("1,000") groups
    thousands, as does a repeated separator ("1.000.000"). Any other single
    separator is the decimal point. With both present, the last one is.
    """
    token = token.rstrip(".,")
    if "," in token and "." in token:
        decimal = max(token.rfind(","), token.rfind("."))
        whole = token[:decimal]
        if not _GROUPED.match(whole) and not whole.isdigit():
            return None
        return whole.replace(",", "").replace(".", "") + "." + token[decimal + 1 :]
    separators = token.count(",") + token.count(".")
    if _GROUPED.match(token) and (separators > 1 or "," in token):
        return token.replace(",", "").replace(".", "")
    if separators > 1:
        return None
    return token.replace(",", ".")


def parse_amount(quantity: Optional[str]) -> Optional[float]:
    """Leading number of a free-text quantity.

    "80 g" -> 80.0, "1,5 l" -> 1.5, "1,000 g" -> 1000.0, "0,250 l" -> 0.25.
    """
    match = _LEADING_NUMBER.match(quantity or "")
    if not match:
        return None
    token = _plain_number(match.group(1))
    if not token:
        return None
    return _to_float(token)
