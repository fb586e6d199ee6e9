"""
Zombie AI - per-tick pursuit state machine.

Tick order for an active zombie:
  1. move by current velocity (rolled back if blocked by a wall)
  2. advance the patrol timer; every patrol_interval ticks pick a new
     axis-aligned direction
  3. transition check on the post-move position:
       distance <= detection_radius  -> CHASE, steer straight at the player
       otherwise, CHASE              -> PATROL (velocity kept)

A zombie whose health drops to zero goes to RESPAWNING, stops colliding and
rendering, and comes back at its spawn point in PATROL with full health after
respawn_duration ticks, not counting the tick it died in. IDLE is never
entered.
"""

import logging
import random
from typing import Optional

import pygame

from zombie_maze.core.utils import direction_to
from zombie_maze.entities.entities import Agent, AgentState
from zombie_maze.level.grid import Grid
from zombie_maze.level.level_data import MazeConfig
from zombie_maze.tiles.tile_collision import TileCollision

logger = logging.getLogger(__name__)

Vector2 = pygame.math.Vector2

# right, left, down, up
PATROL_DIRECTIONS = (Vector2(1, 0), Vector2(-1, 0), Vector2(0, 1), Vector2(0, -1))


class AgentController:
    """Drives every zombie of a level, one tick at a time."""

    def __init__(self, rng: random.Random, config: Optional[MazeConfig] = None,
                 collision: Optional[TileCollision] = None):
        self.rng = rng
        self.config = config or MazeConfig()
        self.collision = collision or TileCollision(self.config.tile_size)

    def update(self, agent: Agent, player_pos, grid: Grid) -> None:
        """Advance one zombie by one tick."""
        if agent.is_respawning:
            if agent.killed_this_tick:
                agent.killed_this_tick = False
            else:
                self._tick_respawn(agent)
            return

        if agent.health <= 0:
            self.kill(agent)
            # This update is the kill tick itself
            agent.killed_this_tick = False
            return

        self.collision.move_with_rollback(agent, grid)

        if agent.state == AgentState.PATROL:
            agent.patrol_timer += 1
            if agent.patrol_timer >= self.config.patrol_interval:
                agent.patrol_timer = 0
                agent.velocity = self.pick_patrol_velocity(agent, grid)

        self.check_transition(agent, player_pos)

    def check_transition(self, agent: Agent, player_pos) -> None:
        if not agent.active or agent.is_respawning:
            return

        distance = agent.position.distance_to(Vector2(player_pos))
        if distance <= self.config.detection_radius:
            self.chase(agent, player_pos)
        elif agent.state == AgentState.CHASE:
            agent.state = AgentState.PATROL

    def chase(self, agent: Agent, target_pos) -> None:
        """Steer straight at the target; no path-finding around walls."""
        agent.state = AgentState.CHASE
        heading = direction_to(agent.position, target_pos)
        if heading is not None:
            agent.velocity = heading * self.config.chase_speed

    def pick_patrol_velocity(self, agent: Agent, grid: Grid) -> Vector2:
        """
        Random axis-aligned patrol step.

        Directions whose first step would leave the level are not selected; with
        none left the zombie stands still until the next pick.
        """
        bounds = self.collision.world_rect(grid)
        candidates = []
        for direction in PATROL_DIRECTIONS:
            step = direction * self.config.patrol_speed
            moved = agent.rect.move(int(step.x), int(step.y))
            if bounds.contains(moved):
                candidates.append(step)
        if not candidates:
            return Vector2(0, 0)
        return Vector2(self.rng.choice(candidates))

    def take_damage(self, agent: Agent, amount: int) -> bool:
        """Apply damage; returns True if this hit killed the zombie."""
        if not agent.active or agent.is_respawning:
            return False
        agent.health -= amount
        if agent.health <= 0:
            self.kill(agent)
            return True
        return False

    def kill(self, agent: Agent) -> None:
        agent.active = False
        agent.state = AgentState.RESPAWNING
        agent.respawn_timer = 0
        agent.killed_this_tick = True
        agent.velocity = Vector2(0, 0)
        logger.debug("Zombie from %s down, respawning in %d ticks",
                     agent.spawn_position, self.config.respawn_duration)

    def _tick_respawn(self, agent: Agent) -> None:
        agent.respawn_timer += 1
        if agent.respawn_timer < self.config.respawn_duration:
            return
        agent.respawn_timer = 0
        agent.patrol_timer = 0
        agent.position = Vector2(agent.spawn_position)
        agent.velocity = Vector2(0, 0)
        agent.health = agent.max_health
        agent.state = AgentState.PATROL
        agent.active = True
        logger.debug("Zombie respawned at %s", agent.spawn_position)
