# publist/render/__init__.py

"""
Renderers turning filtered publications into BibTeX or a LaTeX table.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence, Union

from publist.models.publication import Publication

from .bibtex import citation_key, publication_to_bibtex, publications_to_bibtex
from .latex_table import publications_to_latex_table

logger = logging.getLogger(__name__)


class OutputMode(str, Enum):
    BIBTEX = "bibtex"
    LATEX_TABLE = "latex-table"


def render_publications(
    pubs: Sequence[Publication],
    mode: Union[OutputMode, str],
) -> str:
    """
    Render publications in the given mode.

    Anything other than 'bibtex' renders as a LaTeX table; an unrecognized
    mode is logged as a warning rather than rejected.
    """
    value = mode.value if isinstance(mode, OutputMode) else str(mode)
    if value == OutputMode.BIBTEX.value:
        return publications_to_bibtex(pubs)
    if value != OutputMode.LATEX_TABLE.value:
        logger.warning("Unknown output mode %r; rendering a LaTeX table", value)
    return publications_to_latex_table(pubs)


__all__ = [
    "OutputMode",
    "citation_key",
    "publication_to_bibtex",
    "publications_to_bibtex",
    "publications_to_latex_table",
    "render_publications",
]
