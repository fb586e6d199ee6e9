import sys

import pygame
import logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Reduce verbosity of generator modules (only show warnings/errors)
logging.getLogger('zombie_maze.level.connectivity').setLevel(logging.WARNING)
logging.getLogger('zombie_maze.level.maze_carver').setLevel(logging.WARNING)

from zombie_maze.config import (
    WIDTH,
    HEIGHT,
    FPS,
    BG,
    WHITE,
    PLAYER_COL,
    ZOMBIE_COL,
    KEY_COL,
    WALL_COL,
    BULLET_COL,
    HEALTH_BG,
    HEALTH_FG,
)
from zombie_maze.core.errors import MazeGenerationError
from zombie_maze.entities.entities import EntityKind
from zombie_maze.level.config_loader import load_maze_config, resolve_seed
from zombie_maze.systems.camera import Camera
from zombie_maze.systems.simulation import GameSession, GameState

KIND_COLORS = {
    EntityKind.WALL: WALL_COL,
    EntityKind.KEY: KEY_COL,
    EntityKind.ZOMBIE: ZOMBIE_COL,
    EntityKind.BULLET: BULLET_COL,
    EntityKind.PLAYER: PLAYER_COL,
}


def input_velocity(keys, speed: float) -> pygame.math.Vector2:
    """WASD to a velocity; diagonals are normalized to the same speed."""
    v = pygame.math.Vector2(0, 0)
    if keys[pygame.K_w]:
        v.y = -speed
    if keys[pygame.K_s]:
        v.y = speed
    if keys[pygame.K_a]:
        v.x = -speed
    if keys[pygame.K_d]:
        v.x = speed
    if v.x != 0 and v.y != 0:
        v.scale_to_length(speed)
    return v


class Game:
    def __init__(self):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Zombie Maze")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 18)
        self.camera = Camera()

        config = load_maze_config()
        seed = resolve_seed(config)
        logger.info("Starting session with seed %s (%s)", seed, config.seed_mode)
        self.session = GameSession(config, seed=seed)
        self.session.load_level(1)
        self.running = True

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE and self.session.state == GameState.NEXT_LEVEL:
                    self.session.advance_level()
                    self._snap_camera()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                mx = event.pos[0] + self.camera.x
                my = event.pos[1] + self.camera.y
                center = self.session.player.center
                self.session.fire((mx - center.x, my - center.y))

        v = input_velocity(pygame.key.get_pressed(), self.session.config.player_speed)
        self.session.set_player_velocity(v.x, v.y)

    def _world_rect(self) -> pygame.Rect:
        return self.session.collision.world_rect(self.session.level.grid)

    def _snap_camera(self):
        self.camera.update(self.session.player.rect, self._world_rect(), snap=True)

    def draw(self):
        self.screen.fill(BG)
        self.camera.update(self.session.player.rect, self._world_rect())
        for kind, rect in self.session.render_list():
            pygame.draw.rect(self.screen, KIND_COLORS[kind], self.camera.to_screen_rect(rect))

        for agent in self.session.agents:
            if not agent.active:
                continue
            bar = self.camera.to_screen_rect(agent.rect)
            bar.y -= 10
            bar.h = 5
            pygame.draw.rect(self.screen, HEALTH_BG, bar)
            bar.w = int(bar.w * agent.health / max(1, agent.max_health))
            pygame.draw.rect(self.screen, HEALTH_FG, bar)

        hud = f"Keys: {self.session.player.keys}/{self.session.level.get_key_count()}"
        self.screen.blit(self.font.render(hud, True, WHITE), (10, 10))
        level_text = f"Level: {self.session.level_index}"
        self.screen.blit(self.font.render(level_text, True, WHITE), (WIDTH - 110, 10))
        if self.session.state == GameState.NEXT_LEVEL:
            msg = f"Level Complete! Press SPACE to continue to level {self.session.level_index + 1}"
            surf = self.font.render(msg, True, WHITE)
            self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, HEIGHT // 2)))

    def run(self):
        self._snap_camera()
        while self.running:
            self.clock.tick(FPS)
            self.handle_events()
            self.session.update()
            self.draw()
            pygame.display.flip()
        pygame.quit()


if __name__ == '__main__':
    try:
        game = Game()
    except MazeGenerationError:
        logger.exception("Level generation failed")
        pygame.quit()
        sys.exit(1)
    game.run()
