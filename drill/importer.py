"""CSV import: one ``front,back`` card per line."""

import csv
import pathlib

from drill.models import ImportRow


def parse_csv(text: str) -> list[ImportRow]:
    """Parse card rows. Lines without a non-empty front and back are skipped."""
    rows = []
    lines = [line for line in text.splitlines() if line.strip()]
    for fields in csv.reader(lines):
        if len(fields) < 2:
            continue
        front, back = fields[0].strip(), fields[1].strip()
        if front and back:
            rows.append(ImportRow(front=front, back=back))
    return rows


def import_csv_file(session, path: pathlib.Path | str) -> int:
    """Add every card from a CSV file to ``session``. Returns the number added."""
    rows = parse_csv(pathlib.Path(path).read_text(encoding="utf-8"))
    session.add_items(rows)
    return len(rows)
