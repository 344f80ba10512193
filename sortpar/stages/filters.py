from __future__ import annotations

import re
from typing import Sequence

from sortpar.config import Filter

# underscore is a word character but not alphanumeric
_NON_DICTIONARY = re.compile(r"[^\w\s]|_")


def strip_leading_blanks(text: str) -> str:
    return text.lstrip()


def dictionary_order(text: str) -> str:
    return _NON_DICTIONARY.sub("", text)


def case_fold(text: str) -> str:
    return text.casefold()


_FILTERS = {
    Filter.STRIP_LEADING_BLANKS: strip_leading_blanks,
    Filter.DICTIONARY_ORDER: dictionary_order,
    Filter.CASE_FOLD: case_fold,
}


def apply_filters(line: str, filters: Sequence[Filter]) -> str:
    """Run ``line`` through each filter in order.

    The filtered text is only used for comparison; the line itself is what
    gets written out.
    """
    for f in filters:
        line = _FILTERS[f](line)
    return line
