import pygame
import pytest

from zombie_maze.entities.entities import (
    Agent,
    EntityKind,
    EntitySpec,
    Key,
    Player,
    Projectile,
    Wall,
    entity_from_spec,
)
from zombie_maze.entities.entity_store import EntityStore

Vector2 = pygame.math.Vector2


# --- Fixtures for common test data ---

@pytest.fixture
def store():
    return EntityStore()


@pytest.fixture
def populated(store):
    handles = {
        "wall": store.add(Wall(position=Vector2(0, 0))),
        "key": store.add(Key(position=Vector2(64, 64))),
        "zombie": store.add(Agent.spawn((96, 96), level_index=1)),
        "bullet": store.add(Projectile(position=Vector2(10, 10), velocity=Vector2(10, 0))),
    }
    return store, handles


# --- Handles ---

def test_handles_are_stable_and_unique(populated):
    store, handles = populated
    assert len(set(handles.values())) == 4
    assert isinstance(store.get(handles["key"]), Key)
    assert store.get(handles["zombie"]).kind == EntityKind.ZOMBIE


def test_removed_handle_is_never_reused(populated):
    store, handles = populated
    removed = store.remove(handles["key"])
    assert isinstance(removed, Key)
    assert store.get(handles["key"]) is None
    assert len(store) == 3

    new_handle = store.add(Key(position=Vector2(0, 0)))
    assert new_handle not in handles.values()


def test_clear_keeps_counting(populated):
    store, handles = populated
    store.clear()
    assert len(store) == 0
    assert store.add(Wall(position=Vector2(0, 0))) > max(handles.values())


def test_remove_unknown_handle(store):
    assert store.remove(42) is None


# --- Queries ---

def test_of_kind_filters(populated):
    store, handles = populated
    assert store.of_kind(EntityKind.BULLET) == [store.get(handles["bullet"])]
    assert len(list(store)) == 4
    assert len(store.of_kind(EntityKind.WALL)) == 1
    assert store.of_kind(EntityKind.PLAYER) == []


def test_remove_inactive_only_touches_one_kind(populated):
    store, handles = populated
    store.get(handles["bullet"]).active = False
    store.get(handles["key"]).active = False

    assert store.remove_inactive(EntityKind.BULLET) == 1
    assert store.get(handles["bullet"]) is None
    # Collected keys stay in the store
    assert store.get(handles["key"]) is not None


def test_iteration_tolerates_mutation(populated):
    store, _ = populated
    for entity in store:
        store.add(Key(position=Vector2(entity.position)))
    assert len(store) == 8


# --- Spec dispatch ---

def test_entity_from_spec_builds_each_kind():
    wall = entity_from_spec(EntitySpec(EntityKind.WALL, (32.0, 0.0)), 1)
    key = entity_from_spec(EntitySpec(EntityKind.KEY, (64.0, 32.0)), 1)
    zombie = entity_from_spec(EntitySpec(EntityKind.ZOMBIE, (96.0, 96.0)), 3)
    player = entity_from_spec(EntitySpec(EntityKind.PLAYER, (32.0, 32.0)), 1)

    assert isinstance(wall, Wall) and wall.rect == pygame.Rect(32, 0, 32, 32)
    assert isinstance(key, Key)
    assert isinstance(zombie, Agent) and zombie.max_health == 6
    assert isinstance(player, Player)


def test_entity_from_spec_rejects_bullets():
    with pytest.raises(ValueError):
        entity_from_spec(EntitySpec(EntityKind.BULLET, (0.0, 0.0)), 1)


def test_entity_from_spec_rejects_unknown_kind():
    with pytest.raises(ValueError):
        entity_from_spec(EntitySpec("ghost", (0.0, 0.0)), 1)


def test_bullet_box_is_small():
    bullet = Projectile(position=Vector2(5.7, 9.2), velocity=Vector2(1, 0))
    assert bullet.rect == pygame.Rect(5, 9, 8, 8)
