"""
Entity kinds for the maze.

The set of kinds is closed: PLAYER, WALL, KEY, ZOMBIE, BULLET. Code that
needs per-kind behaviour switches on `entity.kind` and raises on anything
it does not know, so adding a kind means visiting every dispatch site.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, NamedTuple, Optional, Tuple, Union

import pygame

from zombie_maze.config import (
    BULLET_LIFETIME,
    BULLET_SIZE,
    KEY_SIZE,
    PLAYER_SIZE,
    TILE,
    ZOMBIE_HEALTH_PER_LEVEL,
    ZOMBIE_SIZE,
)

Vector2 = pygame.math.Vector2


class EntityKind(Enum):
    PLAYER = "player"
    WALL = "wall"
    KEY = "key"
    ZOMBIE = "zombie"
    BULLET = "bullet"


class AgentState(Enum):
    """Zombie AI states. IDLE is reserved and never entered by the controller."""
    PATROL = "patrol"
    CHASE = "chase"
    IDLE = "idle"
    RESPAWNING = "respawning"


class EntitySpec(NamedTuple):
    """(kind, top-left world position) record produced by Level.create_entities()."""
    kind: EntityKind
    position: Tuple[float, float]


def _box(position: Vector2, size: Tuple[int, int]) -> pygame.Rect:
    return pygame.Rect(int(position.x), int(position.y), size[0], size[1])


@dataclass
class Wall:
    kind: ClassVar[EntityKind] = EntityKind.WALL
    position: Vector2
    size: Tuple[int, int] = (TILE, TILE)
    active: bool = True

    @property
    def rect(self) -> pygame.Rect:
        return _box(self.position, self.size)


@dataclass
class Key:
    kind: ClassVar[EntityKind] = EntityKind.KEY
    position: Vector2
    size: Tuple[int, int] = (KEY_SIZE, KEY_SIZE)
    active: bool = True

    @property
    def rect(self) -> pygame.Rect:
        return _box(self.position, self.size)


@dataclass
class Player:
    kind: ClassVar[EntityKind] = EntityKind.PLAYER
    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    size: Tuple[int, int] = (PLAYER_SIZE, PLAYER_SIZE)
    keys: int = 0
    hits_taken: int = 0
    active: bool = True

    @property
    def rect(self) -> pygame.Rect:
        return _box(self.position, self.size)

    @property
    def center(self) -> Vector2:
        return self.position + Vector2(self.size[0] / 2, self.size[1] / 2)


@dataclass
class Agent:
    """A zombie. Killing one only sends it to RESPAWNING; it is never removed."""
    kind: ClassVar[EntityKind] = EntityKind.ZOMBIE
    position: Vector2
    spawn_position: Tuple[float, float]
    max_health: int
    health: Optional[int] = None
    velocity: Vector2 = field(default_factory=Vector2)
    state: AgentState = AgentState.PATROL
    patrol_timer: int = 0
    respawn_timer: int = 0
    size: Tuple[int, int] = (ZOMBIE_SIZE, ZOMBIE_SIZE)
    active: bool = True
    # Set when killed from outside update(); that tick does not count toward respawn
    killed_this_tick: bool = False

    def __post_init__(self):
        self.spawn_position = (float(self.spawn_position[0]), float(self.spawn_position[1]))
        if self.health is None:
            self.health = self.max_health

    @classmethod
    def spawn(cls, position, level_index: int,
              health_per_level: int = ZOMBIE_HEALTH_PER_LEVEL) -> "Agent":
        max_health = health_per_level * level_index
        return cls(position=Vector2(position), spawn_position=tuple(position),
                   max_health=max_health, health=max_health)

    @property
    def rect(self) -> pygame.Rect:
        return _box(self.position, self.size)

    @property
    def is_respawning(self) -> bool:
        return self.state == AgentState.RESPAWNING


@dataclass
class Projectile:
    kind: ClassVar[EntityKind] = EntityKind.BULLET
    position: Vector2
    velocity: Vector2
    lifetime: int = BULLET_LIFETIME
    size: Tuple[int, int] = (BULLET_SIZE, BULLET_SIZE)
    active: bool = True

    @property
    def rect(self) -> pygame.Rect:
        return _box(self.position, self.size)


Entity = Union[Player, Wall, Key, Agent, Projectile]


def entity_from_spec(spec: EntitySpec, level_index: int,
                     health_per_level: int = ZOMBIE_HEALTH_PER_LEVEL) -> Entity:
    """Instantiate the entity described by a level record."""
    kind = spec.kind
    if kind == EntityKind.WALL:
        return Wall(position=Vector2(spec.position))
    elif kind == EntityKind.KEY:
        return Key(position=Vector2(spec.position))
    elif kind == EntityKind.ZOMBIE:
        return Agent.spawn(spec.position, level_index, health_per_level)
    elif kind == EntityKind.PLAYER:
        return Player(position=Vector2(spec.position))
    elif kind == EntityKind.BULLET:
        raise ValueError("Bullets are spawned by the session, not by level records")
    raise ValueError(f"Unknown entity kind: {kind!r}")
