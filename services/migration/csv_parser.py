"""
CSV parsing for studio export files.

Exports from Mindbody and Vagaro are small, comma separated and quote fields
that contain commas. Values are kept as raw strings; nothing is coerced.
"""

import re
from typing import List

from services.migration.models import Row, freeze_row

LINE_BREAK = re.compile(r'\r?\n')


def parse_csv_line(line: str) -> List[str]:
    """
    Split one physical line into trimmed field values.

    A quote at the start of a field opens quoting; inside quotes a doubled
    quote is a literal quote and a lone quote closes quoting. Commas only
    separate fields outside quotes.
    """
    fields = []
    current = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        ch = line[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < length and line[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                current.append(ch)
        elif ch == '"':
            in_quotes = True
        elif ch == ',':
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1

    fields.append(''.join(current).strip())
    return fields


def parse_csv(content: str) -> List[Row]:
    """
    Parse CSV text into rows keyed by the header line.

    Fewer than two lines (no header, or a header with no data) yields an
    empty list. Blank data lines are skipped. Short lines are back-filled
    with empty strings and values beyond the header are ignored.

    Args:
        content: Raw CSV text

    Returns:
        Rows in file order
    """
    lines = LINE_BREAK.split((content or '').strip())
    if len(lines) < 2:
        return []

    headers = parse_csv_line(lines[0])
    rows = []

    for raw_line in lines[1:]:
        line = raw_line.strip()
        if not line:
            continue

        values = parse_csv_line(line)
        row = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ''
        rows.append(freeze_row(row))

    return rows
