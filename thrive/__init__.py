"""Microbe-stage simulation core: species, name parts, compound processes, spawning, world creation, physics materials and GUI message routing."""

__version__ = "0.1.0"

__all__ = [
    "js_interface",
    "pair_hash",
    "physics_materials",
    "process_system",
    "spawn_system",
    "species",
    "species_name_controller",
    "world_factory",
]