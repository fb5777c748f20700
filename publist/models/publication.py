# publist/models/publication.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

# Resolution order for derived fields. Filtering and rendering both go
# through the accessors below, so a record resolves the same way in both.
TITLE_FIELDS: Tuple[str, ...] = ("title", "booktitle", "chaptertitle")
VENUE_FIELDS: Tuple[str, ...] = ("journal", "booktitle", "publisher")


class MalformedRecordError(ValueError):
    """
    Raised when a publication lacks a field that filtering or rendering needs.
    """

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class Publication:
    """
    One bibliographic entry from a DBLP person page.

    Every category (article, inproceedings, book, ...) shares this shape;
    the category is plain data and only changes the emitted BibTeX tag.

    `fields` holds every scalar field other than author/editor as
    (name, value) pairs, in the order they first appear in the source.
    """

    category: str
    authors: Tuple[str, ...] = ()
    editors: Tuple[str, ...] = ()
    fields: Tuple[Tuple[str, str], ...] = ()

    # DBLP record key (e.g. "journals/nature/Doe20"); only used in messages.
    key: Optional[str] = None

    # ------------------------------------------------------------------
    # Generic field access
    # ------------------------------------------------------------------
    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        for k, v in self.fields:
            if k == name:
                return v
        return default

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(k for k, _ in self.fields)

    def _first_of(self, names: Sequence[str], what: str) -> str:
        for name in names:
            value = self.get(name)
            if value is not None:
                return value
        raise MalformedRecordError(
            f"{self.describe()} has no {what} (looked for {', '.join(names)})",
            field=what,
        )

    def describe(self) -> str:
        """Short human-readable label for error messages."""
        if self.key:
            return f"{self.category} record '{self.key}'"
        return f"{self.category} record"

    # ------------------------------------------------------------------
    # Known fields
    # ------------------------------------------------------------------
    @property
    def names(self) -> Tuple[str, ...]:
        """
        Authors, or editors for edited volumes without authors.
        """
        if self.authors:
            return self.authors
        if self.editors:
            return self.editors
        raise MalformedRecordError(
            f"{self.describe()} has neither authors nor editors",
            field="author",
        )

    @property
    def joined_names(self) -> str:
        return " and ".join(self.names)

    @property
    def title(self) -> str:
        return self._first_of(TITLE_FIELDS, "title")

    @property
    def venue(self) -> str:
        return self._first_of(VENUE_FIELDS, "venue")

    @property
    def year(self) -> int:
        raw = self.get("year")
        if raw is None:
            raise MalformedRecordError(f"{self.describe()} has no year", field="year")
        try:
            return int(raw.strip(), 10)
        except ValueError as exc:
            raise MalformedRecordError(
                f"{self.describe()} has a non-numeric year: {raw!r}",
                field="year",
            ) from exc

    @property
    def pages(self) -> Optional[str]:
        return self.get("pages")
