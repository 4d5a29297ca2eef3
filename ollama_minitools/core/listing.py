"""
Reordering of the `ollama list` table.
"""
import logging

logger = logging.getLogger("ollama_minitools.core.listing")

SORT_BY_NAME = "name"
SORT_BY_SIZE = "size"

# Size units reported by `ollama list`, normalized to MB.
# Extend this table if ollama starts reporting other units.
SIZE_UNIT_FACTORS = {
    "B": 1e-6,
    "KB": 1e-3,
    "MB": 1.0,
    "GB": 1e3,
    "TB": 1e6,
}


def parse_size(fields):
    """
    Extract the normalized size (in MB) from the fields of a listing row.

    The row layout is NAME ID SIZE UNIT MODIFIED..., so the size value and
    unit are the third and fourth fields.

    Args:
        fields (list): Whitespace-separated fields of one row

    Returns:
        float: Size in MB, or None if the row has no recognizable size
    """
    if len(fields) < 4:
        return None
    factor = SIZE_UNIT_FACTORS.get(fields[3].upper())
    if factor is None:
        return None
    try:
        return float(fields[2]) * factor
    except ValueError:
        return None


def sort_rows(rows, sort_by):
    """
    Sort listing rows by name (ascending) or by size (descending).

    Rows without a recognizable size are kept, in their original order,
    after the sized ones.

    Args:
        rows (list): Data rows, without the header
        sort_by (str): SORT_BY_NAME or SORT_BY_SIZE

    Returns:
        list: The sorted rows
    """
    if sort_by == SORT_BY_NAME:
        return sorted(rows, key=lambda row: row.split()[0])

    if sort_by == SORT_BY_SIZE:
        sized = []
        unsized = []
        for row in rows:
            size = parse_size(row.split())
            if size is None:
                logger.debug(f"Unrecognized size in row: {row}")
                unsized.append(row)
            else:
                sized.append((size, row))
        sized.sort(key=lambda item: item[0], reverse=True)
        return [row for _, row in sized] + unsized

    raise ValueError(f"Unknown sort key: {sort_by}")


def reorder_listing(output, sort_by=None):
    """
    Reorder the table printed by `ollama list`.

    The first non-empty line is the header and is always emitted first,
    unchanged. Empty lines are dropped.

    Args:
        output (str): Raw output of the list command
        sort_by (str, optional): SORT_BY_NAME, SORT_BY_SIZE or None to keep order

    Returns:
        list: Lines to print, header first
    """
    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        return []
    header, rows = lines[0], lines[1:]
    if sort_by:
        rows = sort_rows(rows, sort_by)
    return [header] + rows
