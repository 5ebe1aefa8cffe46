# crucible/solve.py
#!/usr/bin/env python3
"""
Minimum heat loss from the top-left to the bottom-right cell.

    crucible-solve part1 < input.txt
    crucible-solve part2 --map maps/01_example.txt
"""

import argparse
import sys
from typing import List, Optional

from crucible.core.config import automaton_for
from crucible.core.dijkstra import reach, shortest_cost
from crucible.core.errors import CrucibleError
from crucible.core.parsing import load_map, parse_grid


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="crucible-solve", description=__doc__.strip().splitlines()[0])
    p.add_argument("part", choices=["part1", "part2"],
                   help="part1: at most 3 straight; part2: 4 to 10 straight")
    p.add_argument("--map", dest="map_path", default=None,
                   help="read the grid from this file instead of stdin")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        grid = load_map(args.map_path) if args.map_path else parse_grid(sys.stdin.read())
        automaton = automaton_for(args.part)
        res = shortest_cost(grid, (0, 0), reach(grid.corner, automaton), automaton)
    except (CrucibleError, OSError) as ex:
        print(f"crucible-solve: {ex}", file=sys.stderr)
        return 1
    print(res)
    return 0


if __name__ == "__main__":
    sys.exit(main())
