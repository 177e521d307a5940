"""CSV-like plant list import and export.

Accepted rows:
    category, plant name
    plant name              (category defaults to Uncategorized)

The first line is dropped when it is a header (``category,name``) or
cannot be read as a row. Every other bad row is skipped and counted;
the rest of the file still imports.
"""

from __future__ import annotations

import csv
import io
import logging

from tracker.catalog import PlantCatalog
from tracker.errors import ParseSkip, TrackerError
from tracker.models import UNCATEGORIZED, ImportResult

logger = logging.getLogger(__name__)

HEADER_WORDS = {"category", "name", "plant", "plant name", "plantname", "plants"}


def _split_fields(line: str) -> list[str]:
    try:
        row = next(csv.reader([line], skipinitialspace=True))
    except (csv.Error, StopIteration):
        return []
    return [f.strip() for f in row]


def parse_row(line: str, line_no: int = 0) -> tuple[str, str]:
    """Parse one line into (name, category). Raises ParseSkip."""
    fields = _split_fields(line)
    if len(fields) == 2:
        category, name = fields
        return name, category or UNCATEGORIZED
    if len(fields) == 1:
        return fields[0], UNCATEGORIZED
    raise ParseSkip(line_no, line, f"expected 1 or 2 fields, got {len(fields)}")


def _is_header(line: str) -> bool:
    fields = _split_fields(line)
    return bool(fields) and all(f.lower() in HEADER_WORDS for f in fields)


def parse_rows(text: str) -> tuple[list[tuple[str, str]], list[ParseSkip]]:
    """Split import text into parsed rows and per-line parse failures."""
    rows: list[tuple[str, str]] = []
    failures: list[ParseSkip] = []
    first = True
    for line_no, line in enumerate((text or "").splitlines(), start=1):
        if not line.strip():
            continue
        if first:
            first = False
            if _is_header(line):
                continue
            try:
                rows.append(parse_row(line, line_no))
            except ParseSkip:
                logger.debug("Dropped unreadable first line %r", line)
            continue
        try:
            rows.append(parse_row(line, line_no))
        except ParseSkip as e:
            failures.append(e)
    return rows, failures


def import_from(catalog: PlantCatalog, text: str) -> ImportResult:
    """Merge plants from import text into the catalog, row by row."""
    rows, failures = parse_rows(text)
    result = ImportResult(skipped=len(failures), errors=[str(e) for e in failures])
    for name, category in rows:
        try:
            catalog.add_plant(name, category)
        except TrackerError as e:
            result.skipped += 1
            result.errors.append(str(e))
        else:
            result.imported += 1
    logger.info("Imported %d plants, skipped %d", result.imported, result.skipped)
    return result


def export_csv(catalog: PlantCatalog) -> str:
    """Catalog as ``category,name`` CSV text with a header line."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["category", "name"])
    for plant in catalog:
        writer.writerow([plant.category, plant.name])
    return buf.getvalue()
