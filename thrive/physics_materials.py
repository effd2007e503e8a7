"""Physics materials for a game world and the collision callbacks between them."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

_log = logging.getLogger(__name__)

MICROBE_COMPONENT = "MicrobeComponent"


class ScriptRunError(Exception):
    """A script function could not be run successfully."""


class _Scripts(Protocol):
    def execute(self, function_name: str, *args: Any) -> Any: ...


@dataclass(frozen=True)
class ContactPoint:
    """One point of contact between two bodies; negative distance is penetration."""

    distance: float
    index0: int = 0
    index1: int = 0


AabbCallback = Callable[[Any, Any, Any], bool]
ContactCallback = Callable[[Any, Any, Any], None]
ManifoldCallback = Callable[[Any, Any, Any, Iterable[ContactPoint]], None]


@dataclass
class MaterialPair:
    """Collision behaviour between two materials."""

    first: "PhysicalMaterial"
    second: "PhysicalMaterial"
    aabb: Optional[AabbCallback] = None
    contact: Optional[ContactCallback] = None
    manifold: Optional[ManifoldCallback] = None

    def set_callbacks(
        self,
        aabb: Optional[AabbCallback] = None,
        contact: Optional[ContactCallback] = None,
        manifold: Optional[ManifoldCallback] = None,
    ) -> "MaterialPair":
        """Set the callbacks run when bodies of these materials meet."""
        self.aabb = aabb
        self.contact = contact
        self.manifold = manifold
        return self


@dataclass(eq=False)
class PhysicalMaterial:
    """A named physics material with the pairs it forms with other materials."""

    name: str
    id: int
    pairs: dict[str, MaterialPair] = field(default_factory=dict)

    def form_pair_with(self, other: "PhysicalMaterial") -> MaterialPair:
        """Create (or replace) the pair between this material and ``other``."""
        pair = MaterialPair(self, other)
        self.pairs[other.name] = pair
        return pair


class PhysicsMaterialManager:
    """Holds the loaded physics materials by name."""

    def __init__(self) -> None:
        self.materials: dict[str, PhysicalMaterial] = {}

    def add(self, material: PhysicalMaterial) -> None:
        """Add a material; raise ValueError if its name or id is already used."""
        if material.name in self.materials:
            raise ValueError(f"material already loaded: {material.name}")
        if any(existing.id == material.id for existing in self.materials.values()):
            raise ValueError(f"material id already used: {material.id}")
        self.materials[material.name] = material

    def get(self, name: str) -> PhysicalMaterial:
        """Return the material called ``name``; raise KeyError if absent."""
        try:
            return self.materials[name]
        except KeyError:
            raise KeyError(f"no such material: {name}") from None

    def pair_for(self, first: str, second: str) -> Optional[MaterialPair]:
        """Return the pair between two named materials, in either order."""
        first_material = self.get(first)
        second_material = self.get(second)
        pair = first_material.pairs.get(second)
        if pair is None:
            pair = second_material.pairs.get(first)
        return pair

    def __contains__(self, name: object) -> bool:
        return name in self.materials

    def __len__(self) -> int:
        return len(self.materials)


class CollisionHandlers:
    """Collision callbacks that forward to script functions."""

    def __init__(self, scripts: _Scripts) -> None:
        self.scripts = scripts

    def _run(self, function_name: str, *args: Any) -> Any:
        return self.scripts.execute(function_name, *args)

    def _notify(self, function_name: str, world: Any, first: Any, second: Any) -> None:
        try:
            self._run(function_name, world, first.owning_entity, second.owning_entity)
        except ScriptRunError as error:
            _log.error("Failed to run script side %s: %s", function_name, error)

    def _query(self, function_name: str, world: Any, first: Any, second: Any) -> bool:
        try:
            return bool(
                self._run(function_name, world, first.owning_entity, second.owning_entity)
            )
        except ScriptRunError as error:
            _log.error("Failed to run script side %s: %s", function_name, error)
            return True

    def cell_hit_floating_organelle(self, world: Any, first: Any, second: Any) -> None:
        """A cell touched a floating organelle."""
        self._notify("cellHitFloatingOrganelle", world, first, second)

    def cell_hit_engulfable(self, world: Any, first: Any, second: Any) -> None:
        """A cell touched an engulfable chunk."""
        self._notify("cellHitEngulfable", world, first, second)

    def cell_hit_damage_chunk(self, world: Any, first: Any, second: Any) -> None:
        """A cell touched a damaging chunk."""
        self._notify("cellHitDamageChunk", world, first, second)

    def cell_on_cell_aabb_hit(self, world: Any, first: Any, second: Any) -> bool:
        """Decide whether two cells collide; True if the script fails."""
        return self._query("beingEngulfed", world, first, second)

    def agent_aabb_hit(self, world: Any, first: Any, second: Any) -> bool:
        """Decide whether a cell and an agent collide; True if the script fails."""
        return self._query("hitAgent", world, first, second)

    def agent_collided(self, world: Any, first: Any, second: Any) -> None:
        """A cell and an agent touched."""
        self._notify("cellHitAgent", world, first, second)

    def cell_on_manifold(
        self, world: Any, first: Any, second: Any, contacts: Iterable[ContactPoint]
    ) -> None:
        """Report each penetrating contact between two cells to the scripts."""
        shape1 = first.shape
        shape2 = second.shape
        if shape1 is None or shape2 is None:
            raise ValueError("some body in physics callback has no shape")

        holder: Optional[Mapping[Any, Any]] = world.script_component_holder(MICROBE_COMPONENT)
        if holder is None:
            raise ValueError("world has no microbe component holder")

        microbes: Optional[tuple[Any, Any]] = None
        applied_effect = False

        for contact in contacts:
            if contact.distance >= 0.0:
                continue
            if microbes is None:
                obj1 = holder.get(first.owning_entity)
                if obj1 is None:
                    return
                obj2 = holder.get(second.owning_entity)
                if obj2 is None:
                    return
                microbes = (obj1, obj2)

            try:
                applied_effect = bool(
                    self._run(
                        "cellOnCellActualContact",
                        world,
                        shape1,
                        microbes[0],
                        shape2,
                        microbes[1],
                        contact.index0,
                        contact.index1,
                        abs(float(contact.distance)),
                        applied_effect,
                    )
                )
            except ScriptRunError as error:
                _log.error("Failed to run script side cell on cell collision: %s", error)
                break


def create_physics_materials(scripts: _Scripts) -> PhysicsMaterialManager:
    """Create the materials of a game world with their collision callbacks."""
    handlers = CollisionHandlers(scripts)

    cell = PhysicalMaterial("cell", 1)
    floating_organelle = PhysicalMaterial("floatingOrganelle", 2)
    agent = PhysicalMaterial("agentCollision", 3)
    engulfable = PhysicalMaterial("engulfableMaterial", 4)
    chunk_damage = PhysicalMaterial("chunkDamageMaterial", 5)

    cell.form_pair_with(floating_organelle).set_callbacks(
        None, handlers.cell_hit_floating_organelle
    )
    cell.form_pair_with(engulfable).set_callbacks(None, handlers.cell_hit_engulfable)
    cell.form_pair_with(chunk_damage).set_callbacks(None, handlers.cell_hit_damage_chunk)
    cell.form_pair_with(agent).set_callbacks(handlers.agent_aabb_hit, handlers.agent_collided)
    cell.form_pair_with(cell).set_callbacks(
        handlers.cell_on_cell_aabb_hit, None, handlers.cell_on_manifold
    )

    manager = PhysicsMaterialManager()
    for material in (cell, floating_organelle, agent, engulfable, chunk_damage):
        manager.add(material)
    return manager