"""Render a record's fields as labelled detail lines."""

from rich.text import Text

from iab_taxonomy.models.record import DatasetKind, Record


def record_details(record: Record, kind: DatasetKind) -> list[tuple[str, str]]:
    """Label/value pairs describing a record.

    Tiers are joined with " | ", skipping blanks. The extension line only
    appears for taxonomies that have one.
    """
    details = [
        ("Unique ID", record.id),
        ("Parent ID", record.parent_id or ""),
        ("Name", record.name),
        ("Tiers", " | ".join(record.tier_path)),
    ]
    if kind.has_extension:
        details.append(("Extension", record.extension or ""))
    return details


def render_details(record: Record, kind: DatasetKind) -> Text:
    """Detail lines with labels in the taxonomy's accent colour."""
    out = Text()
    for label, value in record_details(record, kind):
        out.append(f"{label}:", style=f"bold {kind.accent}")
        out.append(f" {value}\n")
    return out
