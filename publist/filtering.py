# publist/filtering.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import re

from publist.models.publication import Publication

YearRange = Tuple[int, int]

# "/body/flags" literal, e.g. "/smith/i".
_PATTERN_LITERAL = re.compile(r"^/(?P<body>.*)/(?P<flags>[gimsuy]*)$", re.DOTALL)

_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": 0,
    # Global/sticky flags have no effect on a single search.
    "g": 0,
    "y": 0,
}

_YEAR_MIN = 0
_YEAR_MAX = 9999


def compile_pattern(literal: str) -> re.Pattern[str]:
    """
    Compile a filter pattern.

    Either a bare pattern ("Doe") or a slash-delimited literal with inline
    modifiers ("/doe/i"). Raises ValueError on bad syntax.
    """
    m = _PATTERN_LITERAL.match(literal)
    if not m:
        body, flag_chars = literal, ""
    else:
        body, flag_chars = m.group("body"), m.group("flags")

    flags = 0
    for ch in flag_chars:
        flags |= _FLAG_MAP[ch]

    try:
        return re.compile(body, flags)
    except re.error as exc:
        raise ValueError(f"Invalid pattern {literal!r}: {exc}") from exc


def parse_year_range(text: str) -> YearRange:
    """
    Parse "2019-2021" into (2019, 2021).

    A single year means that year only. Either side may be left empty for
    an open bound ("2019-", "-2021").
    """
    raw = text.strip()
    if "-" in raw:
        lo_s, hi_s = (part.strip() for part in raw.split("-", 1))
    else:
        lo_s = hi_s = raw

    if not lo_s and not hi_s:
        raise ValueError(f"Empty year range: {text!r}")

    try:
        lo = int(lo_s) if lo_s else _YEAR_MIN
        hi = int(hi_s) if hi_s else _YEAR_MAX
    except ValueError as exc:
        raise ValueError(f"Invalid year range {text!r}; expected MIN-MAX") from exc

    if lo > hi:
        raise ValueError(f"Invalid year range {text!r}; {lo} is after {hi}")
    return lo, hi


@dataclass
class FilterCriteria:
    """
    Optional predicates applied to every publication. Unset fields impose
    no constraint; set fields are AND-ed together.
    """

    author: Optional[re.Pattern[str]] = None
    title: Optional[re.Pattern[str]] = None
    venue: Optional[re.Pattern[str]] = None
    years: Optional[YearRange] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.author is None
            and self.title is None
            and self.venue is None
            and self.years is None
        )

    def matches(self, pub: Publication) -> bool:
        # Each check reads only the field it needs, so a record is only
        # rejected as malformed for a predicate that was actually supplied.
        if self.author is not None and not self.author.search(pub.joined_names):
            return False
        if self.title is not None and not self.title.search(pub.title):
            return False
        if self.venue is not None and not self.venue.search(pub.venue):
            return False
        if self.years is not None:
            lo, hi = self.years
            if not lo <= pub.year <= hi:
                return False
        return True


def filter_publications(
    publications: Iterable[Publication],
    criteria: Optional[FilterCriteria] = None,
) -> List[Publication]:
    """
    Return the publications satisfying every supplied predicate, in their
    original order.
    """
    pubs = list(publications)
    if criteria is None or criteria.is_empty:
        return pubs
    return [p for p in pubs if criteria.matches(p)]
