"""
Fixed-tick game session for one run of the maze.

One update() is one tick: move the player, pick up keys, fly bullets, run the
zombie AI, resolve player/zombie contact, drop dead bullets, check the win
condition. Rendering and input polling live outside (see main.py); the
session only exposes what they need.
"""

import logging
import random
from enum import Enum
from typing import List, Optional, Tuple

import pygame

from zombie_maze.ai.agent_controller import AgentController
from zombie_maze.config import BULLET_DAMAGE
from zombie_maze.core.utils import direction_to, make_rng
from zombie_maze.entities.entities import (
    Agent,
    EntityKind,
    Player,
    Projectile,
    entity_from_spec,
)
from zombie_maze.entities.entity_store import EntityStore
from zombie_maze.level.level import Level, generate_level
from zombie_maze.level.level_data import MazeConfig
from zombie_maze.tiles.tile_collision import TileCollision

logger = logging.getLogger(__name__)

Vector2 = pygame.math.Vector2


class GameState(Enum):
    PLAYING = "playing"
    NEXT_LEVEL = "next_level"


class GameSession:
    """Owns the current level, its entities and the shared RNG."""

    def __init__(self, config: Optional[MazeConfig] = None, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        self.config = config or MazeConfig()
        self.seed = seed
        self.rng = rng if rng is not None else make_rng(seed)
        self.collision = TileCollision(self.config.tile_size)
        self.controller = AgentController(self.rng, self.config, self.collision)
        self.store = EntityStore()

        self.level: Optional[Level] = None
        self.player_handle: Optional[int] = None
        self.state = GameState.PLAYING
        self.tick_count = 0
        # True until generation or a simulation tick draws from the RNG
        self._rng_fresh = True

    # --- level lifecycle ---

    @property
    def player(self) -> Optional[Player]:
        if self.player_handle is None:
            return None
        return self.store.get(self.player_handle)

    @property
    def level_index(self) -> int:
        return self.level.level_index if self.level is not None else 0

    def load_level(self, level_index: int) -> Level:
        """
        Generate and install a level.

        Generation errors propagate and leave the previous level untouched.
        """
        # Only a level generated from the untouched RNG can be rebuilt from the
        # session seed alone
        seed = self.seed if self._rng_fresh else None
        self._rng_fresh = False
        level = generate_level(level_index, self.rng, self.config, seed=seed)
        return self.install_level(level)

    def install_level(self, level: Level) -> Level:
        """Replace the running level's entities with those of `level`."""
        self.store.clear()
        for spec in level.create_entities():
            self.store.add(entity_from_spec(spec, level.level_index, self.config.health_per_level))
        self.player_handle = self.store.add(Player(position=level.get_player_start_position()))

        self.level = level
        self.state = GameState.PLAYING
        self.tick_count = 0
        logger.info("Loaded level %d (%d entities, %d keys required)",
                    level.level_index, len(self.store), level.get_key_count())
        return level

    def advance_level(self) -> bool:
        """Move on to the next level once the current one is complete."""
        if self.state != GameState.NEXT_LEVEL:
            return False
        self.load_level(self.level_index + 1)
        return True

    # --- input ---

    def set_player_velocity(self, dx: float, dy: float) -> None:
        self.player.velocity = Vector2(dx, dy)

    def fire(self, direction) -> Optional[int]:
        """Shoot a bullet from the player centre; returns its handle."""
        heading = direction_to((0, 0), direction)
        if heading is None:
            return None
        bullet = Projectile(
            position=Vector2(self.player.center),
            velocity=heading * self.config.bullet_speed,
            lifetime=self.config.bullet_lifetime,
        )
        return self.store.add(bullet)

    # --- simulation ---

    @property
    def agents(self) -> List[Agent]:
        return self.store.of_kind(EntityKind.ZOMBIE)

    @property
    def keys_remaining(self) -> int:
        return sum(1 for key in self.store.of_kind(EntityKind.KEY) if key.active)

    def update(self) -> None:
        if self.level is None or self.state != GameState.PLAYING:
            return
        self.tick_count += 1
        self._rng_fresh = False
        grid = self.level.grid

        self.collision.move_with_rollback(self.player, grid)
        self._collect_keys()
        self._update_bullets()
        for agent in self.agents:
            self.controller.update(agent, self.player.position, grid)
        self._resolve_contacts()
        self.store.remove_inactive(EntityKind.BULLET)

        if self.player.keys >= self.level.get_key_count():
            self.state = GameState.NEXT_LEVEL
            logger.info("Level %d complete after %d ticks", self.level_index, self.tick_count)

    def _collect_keys(self) -> None:
        for key in self.store.of_kind(EntityKind.KEY):
            if key.active and self.collision.resolve_entity_pair(self.player, key):
                key.active = False
                self.player.keys += 1

    def _update_bullets(self) -> None:
        grid = self.level.grid
        for bullet in self.store.of_kind(EntityKind.BULLET):
            if not bullet.active:
                continue
            bullet.position += bullet.velocity
            bullet.lifetime -= 1
            if bullet.lifetime <= 0 or self.collision.resolve_against_grid(bullet, grid):
                bullet.active = False
                continue
            for agent in self.agents:
                if agent.active and self.collision.resolve_entity_pair(bullet, agent):
                    self.controller.take_damage(agent, BULLET_DAMAGE)
                    bullet.active = False
                    break

    def _resolve_contacts(self) -> None:
        """Knock the player away from any zombie it touches."""
        for agent in self.agents:
            if not agent.active or not self.collision.resolve_entity_pair(self.player, agent):
                continue
            self.player.hits_taken += 1
            away = direction_to(agent.position, self.player.position)
            if away is not None:
                knockback = away * (self.config.player_speed * 2)
                self.collision.move_with_rollback(self.player, self.level.grid, knockback)

    # --- render layer ---

    def render_list(self) -> List[Tuple[EntityKind, pygame.Rect]]:
        """Active entities to draw, player last."""
        out = []
        for entity in self.store:
            kind = entity.kind
            if kind == EntityKind.PLAYER:
                continue
            elif kind in (EntityKind.WALL, EntityKind.KEY, EntityKind.ZOMBIE, EntityKind.BULLET):
                if entity.active:
                    out.append((kind, entity.rect))
            else:
                raise ValueError(f"Unknown entity kind: {kind!r}")
        if self.player is not None:
            out.append((EntityKind.PLAYER, self.player.rect))
        return out
