"""Microbial species description."""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

_log = logging.getLogger(__name__)

PLAYER_SPECIES_NAME = "Default"


class MembraneType(IntEnum):
    """Kinds of cell membrane."""

    MEMBRANE = 0
    DOUBLEMEMBRANE = 1
    WALL = 2
    CHITIN = 3


@dataclass
class Species:
    """A microbial species tracked across patches."""

    name: str
    organelles: list[Any] = field(default_factory=list)
    avg_compound_amounts: dict[str, float] = field(default_factory=dict)
    colour: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    is_bacteria: bool = False
    membrane_type: MembraneType = MembraneType.MEMBRANE
    genus: str = ""
    epithet: str = ""
    string_code: str = "no string code set"
    aggression: float = 100.0
    opportunism: float = 100.0
    fear: float = 100.0
    activity: float = 0.0
    focus: float = 0.0
    population: int = 1
    generation: int = 1

    def set_population_from_patches(self, population: int) -> None:
        """Set the global population, clamping negatives to zero."""
        self.population = max(0, population)

    def apply_immediate_population_change(self, change: int) -> None:
        """Apply a population change right away, never going below zero."""
        self.population = max(0, self.population + change)

    def is_player_species(self) -> bool:
        """Return True if this is the player's species."""
        return self.name == PLAYER_SPECIES_NAME

    def get_formatted_name(self, identifier: bool = False) -> str:
        """Return "genus epithet", optionally followed by the internal name."""
        result = f"{self.genus} {self.epithet}"
        if identifier:
            result += f" ({self.name})"
        return result

    def to_json(self, full: bool = False) -> dict[str, Any]:
        """Return a JSON-compatible dict describing this species."""
        r, g, b, a = self.colour
        result: dict[str, Any] = {
            "isBacteria": self.is_bacteria,
            "speciesMembraneType": int(self.membrane_type),
            "name": self.name,
            "genus": self.genus,
            "epithet": self.epithet,
            "stringCode": self.string_code,
            "aggression": self.aggression,
            "opportunism": self.opportunism,
            "fear": self.fear,
            "activity": self.activity,
            "focus": self.focus,
            "population": self.population,
            "generation": self.generation,
            "isPlayerSpecies": self.is_player_species(),
            "color": {"r": r, "g": g, "b": b, "a": a},
        }
        if full:
            _log.warning("Species: to_json: full is not implemented")
        return result