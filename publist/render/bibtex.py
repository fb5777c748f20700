# publist/render/bibtex.py

from __future__ import annotations

from typing import Iterable, List
import re

from publist.models.publication import Publication

_NON_KEY_CHARS = re.compile(r"[^a-z0-9]")


def citation_key(pub: Publication) -> str:
    """
    Build a key like 'doe2020deep': last token of the joined names,
    the year, and the first word of the title stripped to [a-z0-9].
    """
    name_part = pub.joined_names.split(" ")[-1].lower()
    title_part = _NON_KEY_CHARS.sub("", pub.title.split(" ")[0].lower())
    return f"{name_part}{pub.year}{title_part}"


def publication_to_bibtex(pub: Publication) -> str:
    """
    Render one publication as a BibTeX entry.

    Values are emitted as-is; BibTeX special characters are not escaped.
    """
    lines: List[str] = [f"@{pub.category}{{{citation_key(pub)},"]
    if pub.authors:
        lines.append(f"  author = {{{' and '.join(pub.authors)}}},")
    if pub.editors:
        lines.append(f"  editor = {{{' and '.join(pub.editors)}}},")
    for name, value in pub.fields:
        lines.append(f"  {name} = {{{value}}},")
    lines.append("}")
    return "\n".join(lines) + "\n"


def publications_to_bibtex(pubs: Iterable[Publication]) -> str:
    """
    Render publications as a BibTeX bundle, each entry followed by a blank line.
    """
    return "".join(publication_to_bibtex(p) + "\n" for p in pubs)
