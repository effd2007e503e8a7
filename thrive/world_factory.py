"""Creation of game worlds by numeric type."""

from enum import IntEnum
from typing import Any, Callable

WorldConstructor = Callable[[Any, int], Any]


class ThriveWorldType(IntEnum):
    """Kinds of world the game can create."""

    CELL_STAGE = 1
    MICROBE_EDITOR = 2


class ThriveWorldFactory:
    """Creates worlds of a given type using the supplied constructors."""

    def __init__(
        self,
        cell_stage_factory: WorldConstructor,
        microbe_editor_factory: WorldConstructor,
    ) -> None:
        self._constructors = {
            ThriveWorldType.CELL_STAGE: cell_stage_factory,
            ThriveWorldType.MICROBE_EDITOR: microbe_editor_factory,
        }

    def create_new_world(self, world_type: int, physics_materials: Any, override_id: int) -> Any:
        """Create a world of ``world_type``; raise ValueError for unknown types."""
        try:
            kind = ThriveWorldType(world_type)
        except ValueError:
            raise ValueError(f"unknown world type: {world_type}") from None
        return self._constructors[kind](physics_materials, override_id)