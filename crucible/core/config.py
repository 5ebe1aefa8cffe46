# crucible/core/config.py
#!/usr/bin/env python3
"""
Variants and bundled maps.

Variant resolution follows the viewer convention:
- ENV: CRUCIBLE_VARIANT=standard|ultra
- CLI: --variant=standard|ultra   (part1 / part2 accepted as aliases)
"""

import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from crucible.core.automaton import RunLengthAutomaton

VARIANTS: Dict[str, Tuple[int, int]] = {
    "standard": (0, 3),    # (min_run, max_run)
    "ultra":    (4, 10),
}
ALIASES = {"part1": "standard", "part2": "ultra"}
DEFAULT_VARIANT = "standard"

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"
MAP_FILES = {
    "01_example":       MAP_DIR / "01_example.txt",
    "02_ultra_corridor": MAP_DIR / "02_ultra_corridor.txt",
}


def normalize_variant(name: str) -> str:
    name = name.strip().lower()
    name = ALIASES.get(name, name)
    return name if name in VARIANTS else DEFAULT_VARIANT


def resolve_variant(argv: Optional[List[str]] = None) -> str:
    variant = os.getenv("CRUCIBLE_VARIANT", DEFAULT_VARIANT)
    for arg in (sys.argv if argv is None else argv):
        if arg.startswith("--variant="):
            variant = arg.split("=", 1)[1]
    return normalize_variant(variant)


def automaton_for(variant: str) -> RunLengthAutomaton:
    min_run, max_run = VARIANTS[normalize_variant(variant)]
    return RunLengthAutomaton(min_run=min_run, max_run=max_run)
