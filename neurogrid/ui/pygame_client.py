"""Pygame 2D visualization for a neurogrid run.

Renders terrain by kind, node activations, visited cells and the animat in a
window.  The simulation steps at a configurable tick rate while the display
refreshes at the Pygame frame rate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from neurogrid.simulation.engine import SimulationEngine

from neurogrid.world.entity import TerrainKind

# Colour palette
_BG = (15, 15, 20)
_ANIMAT = (255, 255, 255)
_DEAD = (255, 60, 60)

_TERRAIN_COLOURS: dict[TerrainKind, tuple[int, int, int]] = {
    TerrainKind.GRASS: (40, 110, 40),
    TerrainKind.WATER: (40, 80, 170),
    TerrainKind.STONE: (110, 110, 110),
    TerrainKind.PATH: (200, 170, 90),
    TerrainKind.TRAP: (150, 30, 30),
    TerrainKind.RESOURCE: (230, 200, 40),
}

# Activation overlay colour (magenta glow)
_ACTIVATION_COLOUR = np.array([255, 0, 200], dtype=np.float64)
_VISITED_COLOUR = (255, 255, 255, 50)


class PygameRenderer:
    """Renders a SimulationEngine state into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    # Speed presets: ticks per second at 30 fps
    _SPEED_STEPS: ClassVar[list[float]] = [
        0.5,
        1.0,
        2.0,
        5.0,
        10.0,
        20.0,
        60.0,
    ]

    def __init__(
        self,
        engine: SimulationEngine,
        cell_size: int = 24,
        ticks_per_second: float = 5.0,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            cell_size: Pixel width/height per grid cell.
            ticks_per_second: Simulation ticks per real-time second.
        """
        self.engine = engine
        self.cell_size = cell_size
        self.ticks_per_second = ticks_per_second
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0

        side = (engine.grid.extent + 1) * cell_size
        self._panel_width = 220
        self._win_w = side + self._panel_width
        self._win_h = side

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("neurogrid")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False
        self.replayed = False

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        diffs = [abs(s - tps) for s in self._SPEED_STEPS]
        return diffs.index(min(diffs))

    def run(self, fps: int = 30, max_ticks: int | None = None) -> None:
        """Main loop: handle events, step sim, render.

        Once the animat stops (or ``max_ticks`` is reached) its journey is
        replayed into a trail and the final map stays on screen until the
        window is closed.

        Args:
            fps: Target frames per second.
            max_ticks: Optional tick limit.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0
            self._handle_events()
            if not self.paused and not self.replayed:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    out_of_time = (
                        max_ticks is not None and self.engine.tick >= max_ticks
                    )
                    if out_of_time or not self.engine.step():
                        self.engine.finish()
                        self.replayed = True
                        break
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._speed_index = min(
                        len(self._SPEED_STEPS) - 1,
                        self._speed_index + 1,
                    )
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key == pygame.K_MINUS:
                    self._speed_index = max(0, self._speed_index - 1)
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_terrain()
        self._draw_activation_overlay()
        self._draw_animat()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_terrain(self) -> None:
        """Fill each materialised cell with its terrain colour."""
        cs = self.cell_size
        for entity in self.engine.grid.entities():
            pygame.draw.rect(
                self.screen,
                _TERRAIN_COLOURS[entity.kind],
                (entity.x * cs, entity.y * cs, cs, cs),
            )

    def _draw_activation_overlay(self) -> None:
        """Tint cells by node activation and shade cells already visited."""
        cs = self.cell_size
        grid = self.engine.grid
        side = (grid.extent + 1) * cs
        overlay = pygame.Surface((side, side), pygame.SRCALPHA)
        colour = _ACTIVATION_COLOUR.astype(int).tolist()

        for x in range(grid.extent + 1):
            for y in range(grid.extent + 1):
                node = grid.node_at(x, y)
                if node is not None and node.activation > 0.01:
                    alpha = int(min(node.activation, 1.0) * 90)
                    pygame.draw.rect(
                        overlay,
                        (*colour, alpha),
                        (x * cs, y * cs, cs, cs),
                    )

        for x, y in self.engine.animat.visited:
            pygame.draw.rect(overlay, _VISITED_COLOUR, (x * cs, y * cs, cs, cs))

        self.screen.blit(overlay, (0, 0))

    def _draw_animat(self) -> None:
        """Draw the animat as a dot, red once it has died."""
        cs = self.cell_size
        animat = self.engine.animat
        colour = _ANIMAT if animat.alive else _DEAD
        cx = animat.x * cs + cs // 2
        cy = animat.y * cs + cs // 2
        pygame.draw.circle(self.screen, colour, (cx, cy), max(3, cs // 3))

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = (self.engine.grid.extent + 1) * self.cell_size + 10
        y = 10
        animat = self.engine.animat

        lines = [
            f"Tick: {self.engine.tick}",
            f"Speed: {self.ticks_per_second:.1f} t/s",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            f"Mode: {self.engine.grid.mode}",
            "",
            "--- Animat ---",
            f"Position: {animat.position}",
            f"Steps: {animat.steps}",
            f"Visited: {len(animat.visited)}",
            f"Alive: {animat.alive}",
            f"Trail: {'baked' if self.replayed else len(animat.history)}",
            "",
            "--- Controls ---",
            "SPACE: pause",
            "+/-: speed",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, (200, 200, 200))
            self.screen.blit(surf, (panel_x, y))
            y += 18
