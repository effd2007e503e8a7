"""Spawning and despawning of entities around the player."""

import logging
import random
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Optional

_log = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]

SPAWN_INTERVAL = 0.1
"""Seconds between spawn cycles."""

MAX_DESPAWNS_PER_CYCLE = 2


def _length_squared(vector: Vec3) -> float:
    x, y, z = vector
    return x * x + y * y + z * z


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


@dataclass
class SpawnedComponent:
    """Marks an entity as spawned; it is despawned outside this squared radius."""

    spawn_radius_sqr: float


class SpawnWorld:
    """A world holding entity positions and spawned markers."""

    def __init__(self, authoritative: bool = True, track_player: bool = True) -> None:
        self.authoritative = authoritative
        self.track_player = track_player
        self.player_entity: Optional[int] = None
        self.positions: dict[int, Vec3] = {}
        self.spawned: dict[int, SpawnedComponent] = {}
        self.destroy_queue: list[int] = []
        self._next_id = 1

    def create_entity(self, position: Vec3 = (0.0, 0.0, 0.0)) -> int:
        """Create an entity at ``position`` and return its id."""
        entity = self._next_id
        self._next_id += 1
        self.positions[entity] = tuple(float(c) for c in position)  # type: ignore[assignment]
        return entity

    def create_spawned_component(self, entity: int, spawn_radius_sqr: float) -> SpawnedComponent:
        """Attach a spawned marker to an existing entity."""
        if entity not in self.positions:
            raise ValueError(f"no such entity: {entity}")
        if entity in self.spawned:
            raise ValueError(f"entity {entity} already has a spawned component")
        component = SpawnedComponent(spawn_radius_sqr)
        self.spawned[entity] = component
        return component

    def spawned_entities(self) -> Iterator[tuple[int, SpawnedComponent, Vec3]]:
        """Yield every entity that has both a spawned marker and a position."""
        for entity, component in list(self.spawned.items()):
            position = self.positions.get(entity)
            if position is not None:
                yield entity, component, position

    def queue_destroy_entity(self, entity: int) -> None:
        """Mark an entity for destruction."""
        if entity not in self.destroy_queue:
            self.destroy_queue.append(entity)

    def destroy_queued(self) -> list[int]:
        """Remove all queued entities and return their ids."""
        destroyed = list(self.destroy_queue)
        for entity in destroyed:
            self.positions.pop(entity, None)
            self.spawned.pop(entity, None)
            if self.player_entity == entity:
                self.player_entity = None
        self.destroy_queue.clear()
        return destroyed


SpawnFactory = Callable[[SpawnWorld, Vec3], Optional[int]]


@dataclass
class SpawnType:
    """A registered kind of thing to spawn."""

    factory: SpawnFactory
    spawn_radius: float = 0.0
    spawn_radius_sqr: float = 0.0
    spawn_frequency: float = 0.0
    id: int = 0


class SpawnSystem:
    """Spawns registered entity types near the player and despawns far ones."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._next_id = 0
        self._spawn_types: dict[int, SpawnType] = {}
        self._previous_player_position: Vec3 = (0.0, 0.0, 0.0)
        self._time_since_last_update = 0.0

    @property
    def spawn_types(self) -> dict[int, SpawnType]:
        """The registered spawn types by id."""
        return self._spawn_types

    def add_spawn_type(self, factory: SpawnFactory, spawn_density: float, spawn_radius: float) -> int:
        """Register a spawn type and return its id."""
        radius_sqr = spawn_radius**2
        spawn_type = SpawnType(
            factory=factory,
            spawn_radius=spawn_radius,
            spawn_radius_sqr=radius_sqr,
            spawn_frequency=spawn_density * radius_sqr * 4,
            id=self._next_id,
        )
        self._next_id += 1
        self._spawn_types[spawn_type.id] = spawn_type
        return spawn_type.id

    def remove_spawn_type(self, spawn_id: int) -> None:
        """Forget a spawn type; unknown ids are ignored."""
        self._spawn_types.pop(spawn_id, None)

    def update_density(self, spawn_id: int, spawn_density: float) -> bool:
        """Change a spawn type's density; return False if the id is unknown."""
        spawn_type = self._spawn_types.get(spawn_id)
        if spawn_type is None:
            return False
        spawn_type.spawn_frequency = spawn_density * spawn_type.spawn_radius_sqr * 4
        return True

    def clear(self) -> None:
        """Remove all spawn types and reset the timing state."""
        _log.info("Clearing spawn system spawners")
        self._spawn_types.clear()
        self._previous_player_position = (0.0, 0.0, 0.0)
        self._time_since_last_update = 0.0

    def run(self, world: SpawnWorld, elapsed: float) -> None:
        """Advance time and run every spawn cycle that has become due."""
        if not world.authoritative:
            return

        self._time_since_last_update += elapsed

        while self._time_since_last_update > SPAWN_INTERVAL:
            self._time_since_last_update -= SPAWN_INTERVAL

            player_position: Vec3 = (0.0, 0.0, 0.0)
            if world.track_player:
                if world.player_entity is None:
                    continue
                found = world.positions.get(world.player_entity)
                if found is None:
                    _log.warning("SpawnSystem: no position for the active creature")
                    return
                player_position = found

            player_position = (player_position[0], 0.0, player_position[2])

            self._despawn(world, player_position)
            self._spawn(world, player_position)

            self._previous_player_position = player_position

    def _despawn(self, world: SpawnWorld, player_position: Vec3) -> None:
        deleted = 0
        for entity, component, position in world.spawned_entities():
            if deleted >= MAX_DESPAWNS_PER_CYCLE:
                break
            if _length_squared(_sub(player_position, position)) > component.spawn_radius_sqr:
                deleted += 1
                world.queue_destroy_entity(entity)

    def _spawn(self, world: SpawnWorld, player_position: Vec3) -> None:
        for spawn_type in list(self._spawn_types.values()):
            num_attempts = max(int(spawn_type.spawn_frequency * 2), 1)
            for _ in range(num_attempts):
                if self._rng.uniform(0.0, num_attempts) >= spawn_type.spawn_frequency:
                    continue

                radius = spawn_type.spawn_radius
                displacement: Vec3 = (
                    self._rng.uniform(-radius, radius),
                    0.0,
                    self._rng.uniform(-radius, radius),
                )
                squared_distance = _length_squared(displacement)
                previous_displacement = _sub(
                    _add(displacement, player_position), self._previous_player_position
                )
                previous_squared_distance = _length_squared(previous_displacement)

                if not (
                    squared_distance <= spawn_type.spawn_radius_sqr
                    and previous_squared_distance > spawn_type.spawn_radius_sqr
                ):
                    continue

                spawned = spawn_type.factory(world, _add(player_position, displacement))
                if spawned is None:
                    continue
                try:
                    world.create_spawned_component(spawned, spawn_type.spawn_radius_sqr)
                except ValueError as error:
                    _log.error("SpawnSystem failed to add SpawnedComponent: %s", error)