"""
Registry ingestion: read the GI export and split it into header-keyed rows.

The export is plain delimited text with no quoting. A field that contains
the delimiter is split like any other; this is a known limitation of the
source format and is not worked around here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gi_atlas.errors import SourceReadError

logger = logging.getLogger(__name__)

RawRow = dict[str, str]


def read_source(path: str | Path, encoding: str = "utf-8-sig") -> str:
    """Read the whole export into memory. Any failure is fatal for the run."""
    path = Path(path)
    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(str(path), str(e)) from e
    logger.debug("Read %d characters from %s", len(text), path)
    return text


def parse_rows(text: str, delimiter: str = ",") -> list[RawRow]:
    """
    Split delimited text into rows keyed by the trimmed header names.

    Line 0 is the header. Blank lines are skipped. A row shorter than the
    header gets "" for its missing trailing fields; surplus values are ignored.
    """
    lines = text.split("\n")
    if not lines or not lines[0].strip():
        return []

    # A leading byte-order mark would otherwise stick to the first header
    headers = [h.strip() for h in lines[0].lstrip("\ufeff").split(delimiter)]
    rows: list[RawRow] = []

    for line in lines[1:]:
        if not line.strip():
            continue
        values = line.split(delimiter)
        row: RawRow = {}
        for index, header in enumerate(headers):
            row[header] = values[index].strip() if index < len(values) else ""
        rows.append(row)

    return rows
