"""
pygame front end for the photosynthesis simulator.

Draws the waterweed, the light filter, a light bulb, the input labels, the
running bubble count and the countdown, and calls simulation.advance() once
per frame.
"""

import os
import random
from typing import Optional, Tuple

import pygame

from bubble_rates import SimulationInputs
from config import CFG, filter_overlay
from logging_config import get_logger
from simulation import RunState, advance, countdown_label, start_run

logger = get_logger(__name__)

# Layout offsets of the info panel
ADJ_R = 30
ADJ_D = 90
LABEL_X = 435 + ADJ_R
ROW_PADDING = 30


class UI:
    def __init__(self, inputs: SimulationInputs, seed: Optional[int] = None):
        pygame.init()
        self.screen = pygame.display.set_mode((CFG.WIDTH, CFG.HEIGHT))
        pygame.display.set_caption("Photosynthesis Simulation")
        self.clock = pygame.time.Clock()

        self.header = pygame.font.SysFont("Arial", CFG.HEADER_SIZE)
        self.subtext = pygame.font.SysFont("Arial", CFG.SUBTEXT_SIZE)
        self.subscript = pygame.font.SysFont("Arial", CFG.SUBTEXT_SIZE - 6)
        self.big = pygame.font.SysFont("Arial", CFG.COUNTDOWN_SIZE)
        self.small = pygame.font.SysFont("Arial", CFG.SMALL_SIZE)

        self.rng = random.Random(seed)
        self.inputs = inputs.clamped()
        self.overlay = filter_overlay(self.inputs.filter_color)
        self.plant = self._load_plant()

        self.state: RunState = start_run(self.inputs, rng=self.rng)
        self.started_at = pygame.time.get_ticks()

    # --------------------
    # Assets
    # --------------------
    def _load_plant(self) -> pygame.Surface:
        size = (CFG.CONTAINER_SIZE, CFG.CONTAINER_SIZE)
        if os.path.exists(CFG.ASSET_PATH):
            image = pygame.image.load(CFG.ASSET_PATH).convert()
            return pygame.transform.smoothscale(image, size)

        logger.warning("Plant image not found at %s, drawing a placeholder", CFG.ASSET_PATH)
        surf = pygame.Surface(size)
        surf.fill((20, 70, 60))
        stems = [(90, -12), (170, 8), (250, -6), (330, 14)]
        for base_x, lean in stems:
            top = (base_x + lean * 4, 30)
            pygame.draw.line(surf, (60, 140, 60), (base_x, size[1]), top, 5)
            for i in range(1, 12):
                t = i / 12
                cx = int(base_x + (top[0] - base_x) * t)
                cy = int(size[1] + (top[1] - size[1]) * t)
                pygame.draw.ellipse(surf, (80, 170, 70), (cx - 22, cy - 5, 20, 10))
                pygame.draw.ellipse(surf, (80, 170, 70), (cx + 2, cy - 5, 20, 10))
        return surf

    # --------------------
    # Drawing
    # --------------------
    def text(self, font: pygame.font.Font, value: str, x: int, baseline: int):
        surf = font.render(value, True, CFG.TEXT)
        self.screen.blit(surf, (x, baseline - font.get_ascent()))

    def draw_bulb(self, center: Tuple[int, int], color):
        cx, cy = center
        pygame.draw.rect(self.screen, CFG.BULB_SOCKET, (cx - 25, cy + 40, 50, 50))
        glass = pygame.Surface((100, 100), pygame.SRCALPHA)
        pygame.draw.circle(glass, color, (50, 50), 50)
        self.screen.blit(glass, (cx - 50, cy - 50))
        pygame.draw.circle(self.screen, CFG.BULB_SOCKET, center, 50, 7)

    def draw_plant(self):
        self.screen.blit(self.plant, (0, 0))
        tint = pygame.Surface((CFG.CONTAINER_SIZE, CFG.CONTAINER_SIZE), pygame.SRCALPHA)
        tint.fill(self.overlay)
        self.screen.blit(tint, (0, 0))
        tint.fill(CFG.NATURAL_BLUE)
        self.screen.blit(tint, (0, 0))

    def draw_labels(self):
        y1 = 30 + 20 + ADJ_D
        y2, y3, y4 = y1 + ROW_PADDING, y1 + 2 * ROW_PADDING, y1 + 3 * ROW_PADDING

        self.text(self.subtext, "CO", LABEL_X, y1)
        self.text(self.subscript, "2", 462 + ADJ_R, y1 + 6)
        self.text(self.subtext, ":", 472 + ADJ_R, y1)
        self.text(self.subtext, "LIGHT:", LABEL_X, y2)
        self.text(self.subtext, "FILTER:", LABEL_X, y3)
        self.text(self.subtext, "BUBBLE COUNT:", LABEL_X, y4)

        self.text(self.header, str(self.inputs.co2), 484 + ADJ_R, y1)
        self.text(self.header, str(self.inputs.light), 501 + ADJ_R, y2)
        self.text(self.header, getattr(self.inputs.filter_color, "value", str(self.inputs.filter_color)),
                  509 + ADJ_R, y3)
        self.text(self.header, str(self.state.visible_count), 587 + ADJ_R, y4)

    def draw_countdown(self):
        value, unit = countdown_label(self.state.countdown)
        self.text(self.big, value, 550 + ADJ_R, 300 + ADJ_D)
        self.text(self.small, unit, 610 + ADJ_R, 285 + ADJ_D)
        self.text(self.small, "remaining", 610 + ADJ_R, 300 + ADJ_D)

        pygame.draw.rect(self.screen, CFG.TEXT, (425 + ADJ_R, ADJ_D, 320, 165), 1)
        pygame.draw.line(self.screen, CFG.TEXT, (615 + ADJ_R, ADJ_D), (615 + ADJ_R, 165 + ADJ_D), 1)

    def draw_bubbles(self):
        for bubble in self.state.bubbles:
            pygame.draw.circle(self.screen, CFG.BUBBLE, (int(bubble.x), int(bubble.y)), 2)

    def draw(self):
        self.screen.fill(CFG.BASE)
        self.draw_bulb((680 + ADJ_R, 60 + ADJ_D), self.overlay[:3] + (160,))
        self.draw_plant()
        self.draw_bubbles()
        self.draw_labels()
        self.draw_countdown()

    # --------------------
    # Loop
    # --------------------
    def restart(self):
        self.state = start_run(self.inputs, rng=self.rng)
        self.started_at = pygame.time.get_ticks()

    def run(self):
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        self.restart()

            advance(self.state, pygame.time.get_ticks() - self.started_at, self.rng)
            self.draw()

            pygame.display.flip()
            self.clock.tick(CFG.FPS)
        pygame.quit()
