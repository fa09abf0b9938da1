"""Cleanup for model output that arrives wrapped in markdown code fences."""
from __future__ import annotations

import re

_LEADING_FENCE = re.compile(r"^```(?:[A-Za-z0-9_-]+(?=\s))?[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """Remove surrounding ```json / ``` fences and outer whitespace.

    Fences are peeled until none remain, so the result is a fixed point:
    applying it again changes nothing.
    """
    cleaned = text.strip()
    while True:
        peeled = _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", cleaned, count=1), count=1).strip()
        if peeled == cleaned:
            return cleaned
        cleaned = peeled
