"""Read the question/answer rows out of the decoded form HTML."""

import re
import unicodedata
from types import MappingProxyType

from bs4 import BeautifulSoup, Tag
from loguru import logger

from famlyeml.config.constants import DATA_TABLE_ID, QUESTION_CELL_SELECTOR, VALUE_CELL_SELECTOR
from famlyeml.parsers.base import DataTableNotFoundError, FieldTable

# Zero-width space and byte-order mark
_INVISIBLE_PATTERN = re.compile("[\u200b\ufeff]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def clean_text(text: str | None) -> str:
    """Normalize cell text.

    Drops zero-width spaces and BOMs, turns non-breaking spaces into plain
    spaces, collapses whitespace runs, trims, and NFC-normalizes.
    """
    if not text:
        return ""

    cleaned = _INVISIBLE_PATTERN.sub("", text).replace("\xa0", " ")
    cleaned = _WHITESPACE_PATTERN.sub(" ", cleaned).strip()
    return unicodedata.normalize("NFC", cleaned)


def _carries_marker(tag: Tag, marker: str) -> bool:
    # Only class and data-* attributes name the table; links and the like do not
    for name, value in tag.attrs.items():
        if name != "class" and not name.startswith("data-"):
            continue
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        if marker in str(value):
            return True
    return False


def find_data_table(soup: BeautifulSoup, table_id: str = DATA_TABLE_ID) -> Tag:
    """Find the form table by id, falling back to a class/data-* marker.

    Among marked elements a <table> wins; otherwise the first one holding
    rows is used.

    Raises:
        DataTableNotFoundError: If no element with rows carries the marker
    """
    table = soup.find(id=table_id)
    if table is not None:
        return table

    marked = [tag for tag in soup.find_all(True) if _carries_marker(tag, table_id)]
    table = next((tag for tag in marked if tag.name == "table"), None)
    if table is None:
        table = next((tag for tag in marked if tag.find("tr") is not None), None)

    if table is None:
        raise DataTableNotFoundError("Email fields table not found in HTML")

    logger.debug(f"Data table matched by attribute marker on <{table.name}>")
    return table


def tokenize_table(html: str, table_id: str = DATA_TABLE_ID) -> FieldTable:
    """Parse HTML and collect the label/value rows of the data table.

    Args:
        html: Decoded HTML text
        table_id: id (or attribute marker) of the table

    Returns:
        FieldTable with the label lookup and the ordered rows

    Raises:
        DataTableNotFoundError: If the table is missing
    """
    soup = BeautifulSoup(html, "html.parser")
    table = find_data_table(soup, table_id)

    raw: dict[str, str | list[str]] = {}
    pairs: list[tuple[str, str]] = []
    skipped = 0

    for row in table.find_all("tr"):
        label_node = row.select_one(QUESTION_CELL_SELECTOR)
        value_node = row.select_one(VALUE_CELL_SELECTOR)
        if label_node is None or value_node is None:
            skipped += 1
            continue

        label = clean_text(label_node.get_text())
        value = clean_text(value_node.get_text())
        if not label or not value:
            skipped += 1
            continue

        existing = raw.get(label)
        if existing is None:
            raw[label] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            raw[label] = [existing, value]

        pairs.append((label, value))

    logger.debug(f"Tokenized {len(pairs)} rows ({skipped} skipped), {len(raw)} distinct labels")
    return FieldTable(raw=MappingProxyType(raw), pairs=tuple(pairs))
