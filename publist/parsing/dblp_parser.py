# publist/parsing/dblp_parser.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import xml.etree.ElementTree as ET

from publist.models.publication import Publication

logger = logging.getLogger(__name__)

PERSON_TAG = "dblpperson"
RECORD_TAG = "r"
NAME_TAGS = ("author", "editor")

# Reserved for the category; a source field of this name is dropped.
RESERVED_FIELDS = ("type",)


class MalformedDocumentError(ValueError):
    """
    Raised when the fetched text is not a DBLP person document.
    """
    pass


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


@dataclass
class PersonPage:
    """
    A parsed DBLP person page: the person's name plus their records in
    source order.
    """

    name: Optional[str]
    publications: List[Publication] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _element_text(el: ET.Element) -> str:
    """
    All descendant text of an element, with surrounding whitespace
    stripped. Titles can carry inline markup such as <i> or <sub>, which is
    flattened here.
    """
    return "".join(el.itertext()).strip()


def _entry_to_publication(category: str, entry: ET.Element) -> Publication:
    authors: List[str] = []
    editors: List[str] = []
    fields: Dict[str, str] = {}

    for child in entry:
        tag = child.tag
        if tag == "author":
            authors.append(_element_text(child))
        elif tag == "editor":
            editors.append(_element_text(child))
        elif tag in RESERVED_FIELDS:
            continue
        elif tag not in fields:
            # Repeated fields (ee, url, ...) keep only their first value.
            fields[tag] = _element_text(child)

    ordered: Tuple[Tuple[str, str], ...] = tuple(fields.items())
    return Publication(
        category=category,
        authors=tuple(authors),
        editors=tuple(editors),
        fields=ordered,
        key=entry.get("key"),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_person_document(xml_text: str) -> ET.Element:
    """
    Parse the XML of a DBLP person page and return its <dblpperson> root.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise MalformedDocumentError(f"Response is not valid XML: {exc}") from exc

    if root.tag != PERSON_TAG:
        raise MalformedDocumentError(
            f"Expected a <{PERSON_TAG}> document, got <{root.tag}>"
        )
    return root


def extract_publications(root: ET.Element) -> List[Publication]:
    """
    Flatten a <dblpperson> tree into publications.

    Each <r> node wraps one or more entries whose tag is the category
    (article, inproceedings, ...). Within an <r>, entries are grouped by
    category, categories in order of first appearance; <r> nodes are
    emitted in document order. Entries are not validated; a record missing
    a field only fails when that field is read.
    """
    publications: List[Publication] = []
    for ref in root.findall(RECORD_TAG):
        by_category: Dict[str, List[ET.Element]] = {}
        for entry in ref:
            by_category.setdefault(entry.tag, []).append(entry)
        for category, entries in by_category.items():
            for entry in entries:
                publications.append(_entry_to_publication(category, entry))
    return publications


def read_person_page(xml_text: str) -> PersonPage:
    root = parse_person_document(xml_text)
    page = PersonPage(name=root.get("name"), publications=extract_publications(root))
    logger.debug("Parsed %d publications for %s", len(page.publications), page.name)
    return page
