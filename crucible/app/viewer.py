# crucible/app/viewer.py
#!/usr/bin/env python3
"""
Crucible Viewer: watch the run-length constrained Dijkstra expand.

Each cell is shaded by its heat loss. Cells with a finalised state are
tinted magenta, cells still on the frontier cyan. The state being expanded
is drawn as an arrow in its facing with its run length beside it; once the
goal is popped the winning walk is drawn as one arrow per step.

- Keyboard:
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [1]/[2]      -> switch map
    [S]/[U]      -> standard / ultra crucible
    [Q]/[ESC]    -> quit

Variant:
- ENV: CRUCIBLE_VARIANT=standard|ultra
- CLI: --variant=standard|ultra
"""

# --- bootstrap import path so `from crucible...` works when run as a script ---
import sys, time
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

from typing import List, Optional, Tuple
import pygame

from crucible.core.config import MAP_FILES, VARIANTS, automaton_for, resolve_variant
from crucible.core.dijkstra import ConstrainedDijkstra, reach
from crucible.core.parsing import load_map
from crucible.core.types import Coord, Grid, SearchState

START: Coord = (0, 0)
PANEL_W = 300
MARGIN = 16
MAP_KEYS = {pygame.K_1: "01_example", pygame.K_2: "02_ultra_corridor"}
VARIANT_KEYS = {pygame.K_s: "standard", pygame.K_u: "ultra"}

BG          = (24, 26, 32)
GRID_LINE   = (0, 0, 0)
COOL        = (40, 44, 70)      # cheapest cell
HOT         = (255, 120, 20)    # dearest cell
CLOSED_TINT = (255, 0, 120, 90)
OPEN_TINT   = (0, 150, 255, 110)
CURSOR      = (255, 210, 0)
PATH        = (0, 255, 200)
TEXT        = (230, 235, 240)


def heat_color(cost: int, lo: int, hi: int) -> Tuple[int, int, int]:
    t = 0.0 if hi == lo else (cost - lo) / (hi - lo)
    return tuple(int(c0 + (c1 - c0) * t) for c0, c1 in zip(COOL, HOT))


class Viewer:
    def __init__(self, grid: Grid, map_key: str, variant: str):
        pygame.init()
        self.font = pygame.font.Font(None, 20)
        self.grid = grid
        self.map_key = map_key
        self.variant = variant
        self.running = False
        self.steps_per_sec = 30
        self._last_step_t = 0.0
        self.clock = pygame.time.Clock()
        self.screen = pygame.display.set_mode((960, 640), pygame.RESIZABLE)
        self._reset()

    # ---------- search ----------
    def _reset(self):
        automaton = automaton_for(self.variant)
        self.algo = ConstrainedDijkstra(name=f"Dijkstra ({self.variant})")
        self.algo.init(self.grid, START, reach(self.grid.corner, automaton), automaton)
        self.status = "idle"
        self.metrics = {}
        self.running = False
        flat = [v for row in self.grid.cells for v in row]
        self._lo, self._hi = min(flat), max(flat)
        pygame.display.set_caption(f"Crucible: {self.map_key} / {self.variant}")

    def _do_step(self):
        res = self.algo.step()
        self.status = res.status
        self.metrics = res.metrics
        if res.status in ("done", "no_path"):
            self.running = False

    def _switch_map(self, key: str):
        try:
            self.grid = load_map(MAP_FILES[key])
        except Exception as ex:
            print(f"Failed to load map {key}: {ex}")
            return
        self.map_key = key
        self._reset()

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            now = time.time()
            if self.running and now - self._last_step_t >= 1.0 / self.steps_per_sec:
                self._last_step_t = now
                self._do_step()
            self._draw()
            self.clock.tick(60)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT or (e.type == pygame.KEYDOWN and e.key in (pygame.K_ESCAPE, pygame.K_q)):
                pygame.quit(); sys.exit(0)
            if e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
            if e.type != pygame.KEYDOWN:
                continue
            if e.key == pygame.K_SPACE and self.status not in ("done", "no_path"):
                self.running = not self.running
            elif e.key == pygame.K_n:
                self._do_step()
            elif e.key == pygame.K_r:
                self._reset()
            elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                self.steps_per_sec = min(240, self.steps_per_sec + 5)
            elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                self.steps_per_sec = max(1, self.steps_per_sec - 5)
            elif e.key in MAP_KEYS:
                self._switch_map(MAP_KEYS[e.key])
            elif e.key in VARIANT_KEYS:
                self.variant = VARIANT_KEYS[e.key]
                self._reset()

    # ---------- drawing ----------
    def _geometry(self) -> Tuple[int, int, int]:
        w, h = self.screen.get_size()
        cs = max(6, min((w - PANEL_W - 2 * MARGIN) // self.grid.cols,
                        (h - 2 * MARGIN) // self.grid.rows))
        return cs, MARGIN, MARGIN

    def _center(self, c: Coord) -> Tuple[int, int]:
        cs, ox, oy = self._geometry()
        return ox + c[1] * cs + cs // 2, oy + c[0] * cs + cs // 2

    def _draw(self):
        self.screen.fill(BG)
        self._draw_cells()
        if self.algo.goal_state is not None:
            self._draw_walk(self.algo.path_states())
        elif self.algo.last_state is not None:
            self._draw_arrow(self.algo.last_state, CURSOR, label=True)
        self._draw_panel()
        pygame.display.flip()

    def _draw_cells(self):
        cs, ox, oy = self._geometry()
        tint = pygame.Surface((cs, cs), pygame.SRCALPHA)
        for r in range(self.grid.rows):
            for c in range(self.grid.cols):
                rect = pygame.Rect(ox + c * cs, oy + r * cs, cs, cs)
                pygame.draw.rect(self.screen, heat_color(self.grid.cells[r][c], self._lo, self._hi), rect)
                if (r, c) in self.algo.closed_set:
                    tint.fill(CLOSED_TINT); self.screen.blit(tint, rect.topleft)
                elif (r, c) in self.algo.open_set:
                    tint.fill(OPEN_TINT); self.screen.blit(tint, rect.topleft)
                pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    def _draw_arrow(self, s: SearchState, color, label: bool = False):
        """Arrow into `s.coord` along the facing the state arrived with."""
        cs = self._geometry()[0]
        cx, cy = self._center(s.coord)
        dr, dc = s.direction.delta
        tail = (cx - dc * cs // 2, cy - dr * cs // 2)
        pygame.draw.line(self.screen, color, tail, (cx, cy), 3)
        wing = max(3, cs // 5)
        pygame.draw.polygon(self.screen, color, [
            (cx + dc * wing, cy + dr * wing),
            (cx - dr * wing, cy + dc * wing),
            (cx + dr * wing, cy - dc * wing),
        ])
        if label:
            txt = self.font.render(str(s.run_length), True, color)
            self.screen.blit(txt, (cx + cs // 3, cy - cs // 2))

    def _draw_walk(self, walk: List[SearchState]):
        for s in walk[1:]:
            self._draw_arrow(s, PATH)

    def _draw_panel(self):
        w, _ = self.screen.get_size()
        x, y = w - PANEL_W + 12, MARGIN
        lo, hi = VARIANTS[self.variant]
        m = self.metrics
        lines = [
            f"map: {self.map_key}",
            f"crucible: {self.variant} (run {lo}..{hi})",
            f"status: {self.status}{' (running)' if self.running else ''}",
            f"states popped: {m.get('popped', 0)}",
            f"frontier entries: {m.get('open_size', 1)}",
            f"cells closed: {m.get('closed_count', 0)}",
        ]
        last = self.algo.last_state
        if last is not None:
            lines.append(f"expanding: {last.coord} {last.direction.name.lower()} x{last.run_length}")
        if m.get("total_cost") is not None:
            lines.append(f"heat loss: {m['total_cost']}  ({m['path_len'] - 1} steps)")
        lines += ["", f"speed: {self.steps_per_sec} steps/s",
                  "SPACE run  N step  R reset  +/- speed",
                  "1/2 map  S/U crucible  Q quit"]
        for text in lines:
            self.screen.blit(self.font.render(text, True, TEXT), (x, y))
            y += 22


def main(variant: Optional[str] = None):
    key = "01_example"
    try:
        grid = load_map(MAP_FILES[key])
    except Exception as ex:
        print(f"Failed to load default map: {ex}")
        sys.exit(1)
    Viewer(grid, key, variant or resolve_variant()).run()


if __name__ == "__main__":
    main()
