# tests/conftest.py

import pytest

from publist.models.publication import Publication

# Minimal DBLP person export with the two records used across the tests.
PERSON_XML = """<?xml version="1.0" encoding="UTF-8"?>
<dblpperson name="Jane Doe" pid="12/3456" n="2">
  <person key="homepages/12/3456" mdate="2024-01-01">
    <author pid="12/3456">Jane Doe</author>
  </person>
  <r>
    <article key="journals/nature/Doe20" mdate="2020-06-01">
      <author pid="12/3456">Jane Doe</author>
      <title>Deep Learning.</title>
      <journal>Nature</journal>
      <volume>7</volume>
      <pages>1-10</pages>
      <year>2020</year>
      <ee>https://doi.org/10.1000/deep</ee>
      <ee>https://example.org/deep</ee>
    </article>
  </r>
  <r>
    <inproceedings key="conf/icml/Doe19" mdate="2019-07-01">
      <author pid="12/3456">Jane Doe</author>
      <title>Shallow Nets</title>
      <booktitle>ICML</booktitle>
      <year>2019</year>
    </inproceedings>
  </r>
  <coauthors n="0"/>
</dblpperson>
"""


@pytest.fixture
def person_xml() -> str:
    return PERSON_XML


@pytest.fixture
def article() -> Publication:
    return Publication(
        category="article",
        authors=("Jane Doe",),
        fields=(
            ("title", "Deep Learning."),
            ("journal", "Nature"),
            ("pages", "1-10"),
            ("year", "2020"),
        ),
        key="journals/nature/Doe20",
    )


@pytest.fixture
def inproceedings() -> Publication:
    return Publication(
        category="inproceedings",
        authors=("Jane Doe",),
        fields=(
            ("title", "Shallow Nets"),
            ("booktitle", "ICML"),
            ("year", "2019"),
        ),
        key="conf/icml/Doe19",
    )


@pytest.fixture
def edited_volume() -> Publication:
    return Publication(
        category="proceedings",
        editors=("John Roe", "Ann Poe"),
        fields=(
            ("title", "Proceedings of the Workshop on Graphs"),
            ("publisher", "Springer"),
            ("year", "2018"),
        ),
    )
