# crucible/core/parsing.py
#!/usr/bin/env python3
from pathlib import Path
from typing import List, Union

from crucible.core.errors import MalformedGrid
from crucible.core.types import Grid


def parse_row(line: str, lineno: int = 0) -> List[int]:
    out: List[int] = []
    for col, ch in enumerate(line):
        if not ch.isdigit() or not ch.isascii():
            raise MalformedGrid(f"Non-numeric input {ch!r} at line {lineno + 1}, column {col + 1}")
        out.append(int(ch))
    return out


def parse_grid(text: str) -> Grid:
    """One row per line, one decimal digit per cell. Trailing blank lines are ignored."""
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    return Grid.from_rows(parse_row(line, i) for i, line in enumerate(lines))


def load_map(path: Union[str, Path]) -> Grid:
    with open(path, "r") as f:
        return parse_grid(f.read())
