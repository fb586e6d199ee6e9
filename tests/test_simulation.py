import pygame
import pytest

from zombie_maze.core.errors import GenerationExhausted
from zombie_maze.entities.entities import AgentState, EntityKind
from zombie_maze.level.grid import Grid
from zombie_maze.level.level import Level, generate_level
from zombie_maze.level.level_data import LevelParams, MazeConfig
from zombie_maze.systems.simulation import GameSession, GameState
from zombie_maze.tiles.tile_types import TileType

Vector2 = pygame.math.Vector2


def make_level(start, keys, zombies, width=12, height=8, level_index=1):
    """Hand-built level: open room with a solid border."""
    grid = Grid(width, height, TileType.WALL)
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            grid.set(x, y, TileType.OPEN)
    params = LevelParams(level_index=level_index, width=width, height=height,
                         key_count=len(keys), agent_count=len(zombies))
    return Level(params=params, grid=grid, player_start=start,
                 key_positions=list(keys), agent_spawns=list(zombies), tile_size=32)


# --- Fixtures for common test data ---

@pytest.fixture
def session():
    return GameSession(MazeConfig(), seed=17)


@pytest.fixture
def key_level(session):
    # Key right next to the player, zombie far away in the bottom-right corner
    session.install_level(make_level(start=(1, 1), keys=[(2, 1)], zombies=[(10, 6)]))
    return session


@pytest.fixture
def shooting_range(session):
    # Zombie 160 units along the player's row: just outside detection range
    session.install_level(make_level(start=(1, 1), keys=[(10, 6)], zombies=[(6, 1)]))
    return session


# --- Level lifecycle ---

def test_load_first_level(session):
    level = session.load_level(1)
    assert session.level is level
    assert session.level_index == 1
    assert session.keys_remaining == 3
    assert len(session.agents) == 3
    assert session.player.position == level.get_player_start_position()
    assert session.store.get(session.player_handle) is session.player


def test_failed_load_keeps_previous_level(key_level):
    previous = key_level.level
    entity_count = len(key_level.store)
    key_level.config.max_placement_attempts = 0
    with pytest.raises(GenerationExhausted):
        key_level.load_level(2)
    assert key_level.level is previous
    assert len(key_level.store) == entity_count


def test_only_first_level_records_session_seed():
    session = GameSession(MazeConfig(), seed=17)
    first = session.load_level(1)
    assert first.seed == 17
    rebuilt = generate_level(1, config=MazeConfig(), seed=first.seed)
    assert rebuilt.grid.to_rows() == first.grid.to_rows()
    assert rebuilt.key_positions == first.key_positions

    assert session.load_level(2).seed is None


def test_level_loaded_after_ticks_has_no_seed(key_level):
    key_level.update()
    assert key_level.load_level(1).seed is None


def test_advance_requires_completed_level(key_level):
    assert not key_level.advance_level()
    assert key_level.level_index == 1


# --- Keys and winning ---

def test_touching_key_collects_it_and_completes_level(key_level):
    key_level.set_player_velocity(4, 0)
    key_level.update()

    assert key_level.player.keys == 1
    assert key_level.keys_remaining == 0
    assert key_level.state == GameState.NEXT_LEVEL
    assert all(kind != EntityKind.KEY for kind, _ in key_level.render_list())


def test_update_is_frozen_after_win(key_level):
    key_level.set_player_velocity(4, 0)
    key_level.update()
    position = Vector2(key_level.player.position)
    key_level.update()
    assert key_level.tick_count == 1
    assert key_level.player.position == position


def test_advance_to_next_level(key_level):
    key_level.set_player_velocity(4, 0)
    key_level.update()
    assert key_level.advance_level()

    assert key_level.state == GameState.PLAYING
    assert key_level.level_index == 2
    assert key_level.level.grid.size == (22, 17)
    assert key_level.player.keys == 0
    assert key_level.keys_remaining == 4
    assert all(agent.max_health == 4 for agent in key_level.agents)


# --- Bullets ---

def test_fire_without_direction_is_ignored(shooting_range):
    assert shooting_range.fire((0, 0)) is None
    assert shooting_range.store.of_kind(EntityKind.BULLET) == []


def test_bullet_starts_at_player_center(shooting_range):
    handle = shooting_range.fire((0, 3))
    bullet = shooting_range.store.get(handle)
    assert bullet.position == Vector2(48, 48)
    assert bullet.velocity == Vector2(0, 10)


def test_two_bullets_kill_level_one_zombie(shooting_range):
    zombie = shooting_range.agents[0]
    assert zombie.health == 2
    shooting_range.fire((1, 0))
    shooting_range.fire((1, 0))
    for _ in range(14):
        shooting_range.update()

    assert zombie.state == AgentState.RESPAWNING
    assert not zombie.active
    assert shooting_range.store.of_kind(EntityKind.BULLET) == []
    # Respawning zombies are not drawn but stay in the store
    assert zombie in shooting_range.agents
    assert all(kind != EntityKind.ZOMBIE for kind, _ in shooting_range.render_list())


def test_shot_zombie_returns_after_full_respawn_duration(shooting_range):
    zombie = shooting_range.agents[0]
    shooting_range.fire((1, 0))
    shooting_range.fire((1, 0))
    for _ in range(14):
        shooting_range.update()
    assert zombie.is_respawning

    # The kill tick does not count toward the countdown
    for _ in range(shooting_range.config.respawn_duration - 1):
        shooting_range.update()
        assert not zombie.active

    shooting_range.update()
    assert zombie.active
    assert zombie.position == Vector2(192, 32)
    assert zombie.health == zombie.max_health


def test_single_bullet_only_wounds(shooting_range):
    zombie = shooting_range.agents[0]
    shooting_range.fire((1, 0))
    for _ in range(14):
        shooting_range.update()
    assert zombie.health == 1
    assert zombie.active


def test_bullet_dies_on_wall(shooting_range):
    shooting_range.fire((-1, 0))
    shooting_range.update()
    assert len(shooting_range.store.of_kind(EntityKind.BULLET)) == 1
    shooting_range.update()
    assert shooting_range.store.of_kind(EntityKind.BULLET) == []


def test_bullet_expires(session):
    session.config.bullet_lifetime = 3
    session.install_level(make_level(start=(1, 1), keys=[(10, 6)], zombies=[(10, 5)]))
    session.fire((1, 0))
    session.update()
    session.update()
    assert len(session.store.of_kind(EntityKind.BULLET)) == 1
    session.update()
    assert session.store.of_kind(EntityKind.BULLET) == []


# --- Player and zombies ---

def test_contact_counts_hit_and_knocks_player_back(session):
    session.install_level(make_level(start=(2, 1), keys=[(10, 6)], zombies=[(3, 1)]))
    session.set_player_velocity(4, 0)
    session.update()

    assert session.player.hits_taken == 1
    assert session.player.position == Vector2(60, 32)


def test_player_blocked_by_wall(key_level):
    key_level.set_player_velocity(0, -4)
    key_level.update()
    assert key_level.player.position == Vector2(32, 32)


def test_render_list_draws_player_last(key_level):
    rendered = key_level.render_list()
    kinds = [kind for kind, _ in rendered]
    assert kinds[-1] == EntityKind.PLAYER
    assert kinds.count(EntityKind.PLAYER) == 1
    assert kinds.count(EntityKind.KEY) == 1
    assert kinds.count(EntityKind.ZOMBIE) == 1
    assert kinds.count(EntityKind.WALL) == len(key_level.level.grid.wall_cells())


def test_sessions_with_same_seed_replay_identically():
    def run(seed):
        session = GameSession(MazeConfig(), seed=seed)
        session.load_level(1)
        session.set_player_velocity(4, 0)
        for tick in range(300):
            if tick == 100:
                session.set_player_velocity(0, 4)
            if tick % 25 == 0:
                session.fire((1, 1))
            session.update()
        return [(kind, tuple(rect)) for kind, rect in session.render_list()]

    assert run(8) == run(8)


def test_long_run_keeps_everyone_inside_open_tiles():
    session = GameSession(MazeConfig(), seed=3)
    session.load_level(1)
    for _ in range(600):
        session.update()
        for agent in session.agents:
            if agent.active:
                assert not session.collision.resolve_against_grid(agent, session.level.grid)
        assert not session.collision.resolve_against_grid(session.player, session.level.grid)
