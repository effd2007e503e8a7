# thrive

Core simulation logic for a microbe-stage evolution game. It is plain Python
with no third-party dependencies.

## Modules

- `thrive.species`: the `Species` dataclass and the `MembraneType` enum.
  `set_population_from_patches` and `apply_immediate_population_change` never
  let the population go below zero. `is_player_species` is true for the species
  named `"Default"`. `get_formatted_name` returns `"genus epithet"`, and
  `to_json` returns a JSON-ready dict.
- `thrive.species_name_controller`: `SpeciesNameController` holds the prefix,
  cofix and suffix word lists used to build species names. It loads them with
  `from_file` (a JSON file) or `from_dict`. The `suffixes` list holds the
  consonant suffixes followed by the vowel suffixes.
- `thrive.process_system`: the bio-process simulation.
  - `CompoundType` and `BioProcess` describe compounds and processes.
  - `CompoundBag` stores compound amounts.
  - `ProcessorComponent` holds the capacity of each process.
  - `ProcessSystem.run` runs every process for each entity against the biome's
    dissolved compounds, which are set with `set_process_biome`.
- `thrive.spawn_system`: `SpawnSystem` spawns entities around the player of a
  `SpawnWorld` once every 0.1 seconds of simulated time. In each cycle it
  despawns at most two entities that have left their spawn radius. Spawn types
  are managed with `add_spawn_type`, `update_density`, `remove_spawn_type` and
  `clear`.
- `thrive.world_factory`: `ThriveWorldFactory` creates worlds of a given
  `ThriveWorldType` (`CELL_STAGE` or `MICROBE_EDITOR`) with the constructors you
  supply. It raises `ValueError` for an unknown type.
- `thrive.physics_materials`: `create_physics_materials(scripts)` builds a
  `PhysicsMaterialManager` with five materials: `cell`, `floatingOrganelle`,
  `agentCollision`, `engulfableMaterial` and `chunkDamageMaterial`. It also
  builds the `MaterialPair`s between them. The pair callbacks are methods of
  `CollisionHandlers`, which call the named functions on the `scripts` object
  through its `execute(function_name, *args)` method. A script failure is
  signalled by raising `ScriptRunError`.
- `thrive.js_interface`: routing of GUI calls.
  - `ThriveJSInterface` answers the `thriveVersion` query.
  - `ThriveJSHandler.execute` turns a call into a message list and sends it. It
    raises `JSCallError` for unknown calls or bad arguments.
  - `ThriveJSMessageHandler` dispatches received messages to methods of a game
    object.
- `thrive.pair_hash`: `hash_int_pair`, `hash_pair` (64-bit hash combiners) and
  `contains`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from thrive.process_system import (
    BioProcess, CompoundBag, CompoundType, ProcessorComponent, ProcessSystem,
)

compounds = [CompoundType(0, "glucose"), CompoundType(1, "atp")]
processes = [BioProcess(0, "respiration", inputs={0: 1.0}, outputs={1: 2.0})]
system = ProcessSystem(compounds, processes)

bag = CompoundBag([0, 1], storage_space=100.0)
bag.set_compound(0, 10.0)

processor = ProcessorComponent()
processor.set_capacity(0, 1.0)

system.run({1: (bag, processor)}, elapsed=0.001)
print(bag.amount(0), bag.amount(1))  # 9.0 2.0
```

## What it does not do

This package is a library of game logic only. It has no command-line program,
no rendering or GUI, no game engine loop and no networking or game server. It
has no script interpreter: scripts are any object with an `execute` method that
you pass in. It does not include the game's JSON data files either. Worlds,
game objects and script modules come from the code that uses this package.