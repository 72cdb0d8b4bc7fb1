"""Parse IAB taxonomy .tsv files into domain models."""

import csv
import io

from iab_taxonomy.models.record import DatasetKind, Record


def _column_count(kind: DatasetKind) -> int:
    # id, parent, name, tiers..., extension
    return 3 + kind.tier_count + (1 if kind.has_extension else 0)


def parse_taxonomy_tsv(text: str, *, kind: DatasetKind) -> list[Record]:
    """Parse the text of a taxonomy TSV file into records.

    Args:
        text: Full file contents, including the header lines.
        kind: Which taxonomy the file holds; decides the column layout.

    Returns:
        Records in file order.

    Raises:
        ValueError: A row has no id or more columns than the taxonomy defines.
    """
    expected = _column_count(kind)
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")), delimiter="\t", quoting=csv.QUOTE_NONE)
    records: list[Record] = []

    for line_no, row in enumerate(reader, start=1):
        if line_no <= kind.header_lines:
            continue
        cells = [cell.strip() for cell in row]
        # Trailing tabs are common in exported sheets
        while len(cells) > expected and not cells[-1]:
            cells.pop()
        if not any(cells):
            continue
        if len(cells) > expected:
            msg = (
                f"{kind.filename}:{line_no}: expected at most {expected} columns, "
                f"got {len(cells)}"
            )
            raise ValueError(msg)
        cells.extend([""] * (expected - len(cells)))

        record_id, parent_id, name = cells[0], cells[1], cells[2]
        if not record_id:
            msg = f"{kind.filename}:{line_no}: missing unique id"
            raise ValueError(msg)

        tiers = tuple(cells[3 : 3 + kind.tier_count])
        extension = cells[-1] if kind.has_extension else ""
        records.append(
            Record(
                id=record_id,
                parent_id=parent_id or None,
                name=name,
                tiers=tiers,
                extension=extension or None,
            )
        )

    return records
