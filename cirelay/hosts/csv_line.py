"""Tokenizer for lines of the host mapping table."""

from __future__ import annotations


def split_csv_line(line: str) -> list[str]:
    """Split ``line`` on commas that sit outside double quotes.

    Quote characters only toggle the quoted state and never reach the
    output. Each field is stripped of surrounding whitespace.

    Examples
    --------
    >>> split_csv_line('host-a, "Build farm, east"')
    ['host-a', 'Build farm, east']
    >>> split_csv_line("")
    []

    """
    if not line.strip():
        return []

    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current.clear()
        else:
            current.append(char)
    fields.append("".join(current).strip())
    return fields
