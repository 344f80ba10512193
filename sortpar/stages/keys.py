from __future__ import annotations

import functools
import math
import re
import unicodedata
from typing import Tuple, Union

from packaging.version import Version

from sortpar.config import SortStrategy

# Leading strtod-style prefix; anything after it is ignored.
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_DIGIT_RUNS = re.compile(r"(\d+)")

NaturalKey = Tuple[Tuple[int, object, str], ...]
SortKey = Union[str, float, NaturalKey, "VersionKey"]


def general_numeric_key(text: str) -> float:
    """Parse the leading number of ``text``.

    Text without a numeric prefix is worth 0.0, and so is NaN, which keeps
    unparseable lines and NaNs equal to each other instead of breaking the
    ordering.
    """
    m = _FLOAT_PREFIX.match(text)
    if not m:
        return 0.0
    value = float(m.group(1))
    if math.isnan(value):
        return 0.0
    return value


def _digit_run_value(run: str) -> Tuple[int, str]:
    # compared by (length, digits) so runs of any size order by value without int()
    if not run.isascii():
        run = "".join(str(unicodedata.decimal(c)) for c in run)
    digits = run.lstrip("0")
    return len(digits), digits


def natural_key(text: str) -> NaturalKey:
    # "item2" < "item10"; at equal positions a number sorts before text
    key = []
    for part in _DIGIT_RUNS.split(text):
        if not part:
            continue
        if part.isdecimal():
            key.append((0, _digit_run_value(part), part))
        else:
            key.append((1, part, part))
    return tuple(key)


def cmp_values(a, b) -> int:
    return (a > b) - (a < b)


def natural_compare(a: str, b: str) -> int:
    return cmp_values(natural_key(a), natural_key(b))


def parse_version(text: str):
    try:
        return Version(text.strip())
    except ValueError:
        # InvalidVersion, or a release segment past the int() digit limit
        return None


def version_compare(a: str, b: str) -> int:
    """Compare by version precedence, falling back to natural order.

    The fallback kicks in when either side is not a version string, so this
    only works on pairs and cannot be reduced to a per-line key.
    """
    va = parse_version(a)
    vb = parse_version(b)
    if va is None or vb is None:
        return natural_compare(a, b)
    return cmp_values(va, vb)


def key_of(text: str, strategy: SortStrategy) -> SortKey:
    if strategy == SortStrategy.LEXICOGRAPHIC:
        return text
    if strategy == SortStrategy.GENERAL_NUMERIC:
        return general_numeric_key(text)
    if strategy == SortStrategy.NATURAL_ORDER:
        return natural_key(text)
    if strategy == SortStrategy.VERSION_ORDER:
        return VersionKey(text)
    raise ValueError(f"Unknown sort strategy: {strategy}")


@functools.total_ordering
class VersionKey:
    """Wraps filtered text so that ordering goes through ``version_compare``."""

    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text

    def __eq__(self, other):
        if not isinstance(other, VersionKey):
            return NotImplemented
        return version_compare(self.text, other.text) == 0

    def __lt__(self, other):
        if not isinstance(other, VersionKey):
            return NotImplemented
        return version_compare(self.text, other.text) < 0

    __hash__ = None

    def __repr__(self):
        return f"VersionKey({self.text!r})"
