# publist/render/latex_table.py

from __future__ import annotations

from typing import Iterable, List

from publist.models.publication import Publication

LATEX_TABLE_HEADER = (
    "\\begin{tabular}{|l|l|l|l|l|l|}\n"
    "\\hline\n"
    "S. No. & Authors & Title & Name of the Journal/Conference & Pages & Year \\\\ \\hline\n"
)

LATEX_TABLE_FOOTER = "\\end{tabular}\n"


def publication_to_row(serial: int, pub: Publication) -> str:
    cells = [
        str(serial),
        pub.joined_names,
        pub.title,
        pub.venue,
        pub.pages or "",
        str(pub.year),
    ]
    return " & ".join(cells) + " \\\\ \\hline\n"


def publications_to_latex_table(pubs: Iterable[Publication]) -> str:
    """
    Render publications as a six-column LaTeX tabular, rows numbered from 1.
    """
    parts: List[str] = [LATEX_TABLE_HEADER]
    for serial, pub in enumerate(pubs, start=1):
        parts.append(publication_to_row(serial, pub))
    parts.append(LATEX_TABLE_FOOTER)
    return "".join(parts)
