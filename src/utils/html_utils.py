"""Cell text and number helpers shared by the extractors."""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional

from bs4 import Tag

NBSP_RE = re.compile(r"&nbsp;?|\xa0")
WS_RE = re.compile(r"\s+")
ID_RE = re.compile(r"id=(\d+)")


def clean_cell(text: str) -> str:
    text = NBSP_RE.sub(" ", text)
    text = WS_RE.sub(" ", text).strip()
    return text


def cell_text(cell: Optional[Tag]) -> str:
    return clean_cell(cell.get_text(" ", strip=True)) if cell is not None else ""


def resolve_name(cell: Optional[Tag]) -> str:
    """Return the link text of a name cell, or the plain cell text without a link."""
    if cell is None:
        return ""
    a = cell.find("a")
    if a is not None:
        return clean_cell(a.get_text(" ", strip=True))
    return cell_text(cell)


def bold_text(cell: Optional[Tag]) -> str:
    if cell is None:
        return ""
    b = cell.find("b")
    return cell_text(b) if b is not None else cell_text(cell)


def parse_decimal(text: str, default: float = 0.0) -> float:
    """Parse a comma-decimal number (``"8,50"`` -> 8.5); unparseable -> default."""
    value = parse_decimal_or_none(text)
    return default if value is None else value


def parse_decimal_or_none(text: str) -> Optional[float]:
    normalized = clean_cell(text).replace(".", "").replace(",", ".") if "," in text else clean_cell(text)
    try:
        value = float(normalized)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_int(text: str, default: int = 0) -> int:
    value = parse_int_or_none(text)
    return default if value is None else value


def parse_int_or_none(text: str) -> Optional[int]:
    try:
        return int(clean_cell(text))
    except ValueError:
        return None


def extract_id(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    m = ID_RE.search(text)
    return m.group(1) if m else None


def cells(row: Tag) -> list[Tag]:
    return row.find_all("td", recursive=False) or row.find_all("td")


def dedupe(seq: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in seq:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out
