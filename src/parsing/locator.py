"""Locate labelled table sections in league pages (BeautifulSoup).

A section is a heading (``h4`` on this site) whose text matches a label,
followed by a sibling container holding the data table. Missing sections are
normal (a page with no cup round yet) and yield nothing rather than raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Pattern, Union

from bs4 import BeautifulSoup, Tag

from parsing.errors import MissingSectionError
from parsing.page_shapes import PageShape

Label = Union[str, Pattern[str], PageShape]
Document = Union[str, BeautifulSoup]


def parse_document(html: Document) -> BeautifulSoup:
    if isinstance(html, BeautifulSoup):
        return html
    return BeautifulSoup(html, "html.parser")


def own_rows(table: Tag, *, part: Optional[str] = None) -> list[Tag]:
    """Rows of ``table`` itself (not nested tables), optionally limited to thead/tbody/tfoot.

    Rows without any ``td`` (header rows) are skipped.
    """
    rows: list[Tag] = []
    for tr in table.find_all("tr"):
        if tr.find_parent("table") is not table:
            continue
        section = tr.find_parent(["thead", "tbody", "tfoot"])
        if section is not None and section.find_parent("table") is not table:
            section = None
        name = section.name if section is not None else "tbody"
        if part is not None and name != part:
            continue
        if part is None and name != "tbody":
            continue
        if not tr.find("td"):
            continue
        rows.append(tr)
    return rows


@dataclass
class Section:
    heading: str
    match: re.Match
    table: Tag

    def rows(self) -> list[Tag]:
        return own_rows(self.table)

    def footer_rows(self) -> list[Tag]:
        return own_rows(self.table, part="tfoot")


def _pattern(label: Label) -> Pattern[str]:
    if isinstance(label, PageShape):
        if label.heading is None:
            raise ValueError(f"{label.name} has no heading")
        return label.heading
    if isinstance(label, str):
        return re.compile(re.escape(label))
    return label


def _content_table(heading: Tag) -> Optional[Tag]:
    block = heading.find_next_sibling()
    if block is None:
        return None
    if block.name == "table":
        return block
    return block.find("table", class_="ranking") or block.find("table")


def iter_sections(doc: Document, label: Label, *, heading_tag: str = "h4") -> Iterator[Section]:
    """Yield every section whose heading matches ``label``, top to bottom.

    The iterator is lazy and single-pass; call again for a fresh pass.
    """
    soup = parse_document(doc)
    pattern = _pattern(label)
    for heading in soup.find_all(heading_tag):
        text = heading.get_text(" ", strip=True)
        m = pattern.search(text)
        if not m:
            continue
        table = _content_table(heading)
        if table is None:
            continue
        yield Section(heading=text, match=m, table=table)


def locate_section(doc: Document, label: Label, *, heading_tag: str = "h4") -> Optional[Section]:
    return next(iter_sections(doc, label, heading_tag=heading_tag), None)


def require_section(doc: Document, label: Label, *, heading_tag: str = "h4") -> Section:
    """Strict variant of ``locate_section`` for callers that treat absence as a layout change."""
    section = locate_section(doc, label, heading_tag=heading_tag)
    if section is None:
        name = label.name if isinstance(label, PageShape) else str(label)
        raise MissingSectionError(f"Section {name!r} not found", context={"label": name})
    return section
