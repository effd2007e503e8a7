"""Compound storage and the bio-process simulation that converts compounds."""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

_log = logging.getLogger(__name__)

INITIAL_COMPOUND_PRICE = 0.0
TIME_SCALING_FACTOR = 1000.0


@dataclass(frozen=True)
class CompoundType:
    """Static description of a compound."""

    id: int
    name: str = ""
    is_environmental: bool = False


@dataclass(frozen=True)
class BioProcess:
    """A process turning input compounds into output compounds.

    ``inputs`` and ``outputs`` map compound ids to amounts per unit of capacity.
    """

    id: int
    name: str = ""
    inputs: Mapping[int, float] = field(default_factory=dict)
    outputs: Mapping[int, float] = field(default_factory=dict)


@dataclass
class ProcessorComponent:
    """Specifies which processes a cell can perform and at what capacity."""

    capacities: dict[int, float] = field(default_factory=dict)

    def set_capacity(self, process_id: int, capacity: float) -> None:
        """Set the capacity of one process."""
        self.capacities[process_id] = capacity

    def get_capacity(self, process_id: int) -> float:
        """Return the capacity of one process, 0 if unset."""
        return self.capacities.get(process_id, 0.0)


@dataclass
class CompoundData:
    """Economic information about one stored compound."""

    amount: float = 0.0
    price: float = INITIAL_COMPOUND_PRICE
    used_last_time: float = INITIAL_COMPOUND_PRICE


class CompoundBag:
    """Holds amounts of compounds, limited per compound by the storage space."""

    def __init__(self, compound_ids: Iterable[int] = (), storage_space: float = 0.0) -> None:
        self.storage_space = float(storage_space)
        self.storage_space_occupied = 0.0
        self.compounds: dict[int, CompoundData] = {
            compound_id: CompoundData() for compound_id in compound_ids
        }

    def _entry(self, compound_id: int) -> CompoundData:
        return self.compounds.setdefault(compound_id, CompoundData())

    def amount(self, compound_id: int) -> float:
        """Return the stored amount of a compound."""
        data = self.compounds.get(compound_id)
        return data.amount if data else 0.0

    def storage_space_used(self) -> float:
        """Return the sum of all stored amounts."""
        return sum(data.amount for data in self.compounds.values())

    def give_compound(self, compound_id: int, amount: float) -> None:
        """Add an amount of a compound, capped at the storage space."""
        data = self._entry(compound_id)
        data.amount = min(data.amount + amount, self.storage_space)

    def set_compound(self, compound_id: int, amount: float) -> None:
        """Set the stored amount of a compound."""
        self._entry(compound_id).amount = amount

    def take_compound(self, compound_id: int, to_take: float) -> float:
        """Remove up to ``to_take`` of a compound and return how much was removed."""
        data = self._entry(compound_id)
        taken = to_take if data.amount > to_take else data.amount
        data.amount -= taken
        return taken

    def price(self, compound_id: int) -> float:
        """Return the current price of a compound."""
        data = self.compounds.get(compound_id)
        return data.price if data else INITIAL_COMPOUND_PRICE

    def used_last_time(self, compound_id: int) -> float:
        """Return the price the compound had at the end of the last run."""
        data = self.compounds.get(compound_id)
        return data.used_last_time if data else INITIAL_COMPOUND_PRICE


class ProcessSystem:
    """Runs bio-processes for every entity having a compound bag and a processor."""

    def __init__(self, compounds: Iterable[CompoundType], processes: Iterable[BioProcess]) -> None:
        self._compounds = {compound.id: compound for compound in compounds}
        self._processes = {process.id: process for process in processes}
        self._dissolved: dict[int, float] = {}

    def set_process_biome(self, dissolved: Mapping[int, float]) -> None:
        """Set the dissolved fraction of each compound in the current biome."""
        self._dissolved = dict(dissolved)

    def get_dissolved(self, compound_id: int) -> float:
        """Return how much of a compound is dissolved in the current biome."""
        try:
            return self._dissolved[compound_id]
        except KeyError:
            raise KeyError(f"biome has no data for compound {compound_id}") from None

    def _compound(self, compound_id: int) -> CompoundType:
        try:
            return self._compounds[compound_id]
        except KeyError:
            raise KeyError(f"unknown compound: {compound_id}") from None

    def run(
        self,
        entities: Mapping[int, tuple[CompoundBag, ProcessorComponent]],
        elapsed: float,
        authoritative: bool = True,
    ) -> None:
        """Advance every entity's processes by ``elapsed``."""
        if not authoritative:
            return

        process_limit = elapsed * TIME_SCALING_FACTOR

        for entity_id, (bag, processor) in entities.items():
            for data in bag.compounds.values():
                data.price = 0.0

            for process_id, capacity in processor.capacities.items():
                if capacity <= 0.0:
                    continue
                process = self._processes.get(process_id)
                if process is None:
                    _log.error(
                        "ProcessSystem: run: entity: %s has invalid process: %s, "
                        "process count is: %d",
                        entity_id,
                        process_id,
                        len(self._processes),
                    )
                    continue
                self._run_process(bag, process, capacity, process_limit)

            for compound_id, data in bag.compounds.items():
                if data.amount < 0:
                    _log.error(
                        "ProcessSystem: run: entity: %s has negative amount of "
                        "compound: %s, amount: %f",
                        entity_id,
                        compound_id,
                        data.amount,
                    )
                    data.amount = 0.0
                data.used_last_time = data.price

    def _run_process(
        self,
        bag: CompoundBag,
        process: BioProcess,
        capacity: float,
        process_limit: float,
    ) -> None:
        ratio = capacity / process_limit if process_limit else math.inf
        can_do = True
        environment_modifier = 1.0

        for input_id, input_amount in process.inputs.items():
            compound = self._compound(input_id)
            bag._entry(input_id).price = 1.0
            removed = input_amount * ratio
            if compound.is_environmental:
                environment_modifier *= self.get_dissolved(input_id) / input_amount
                removed *= environment_modifier
            elif bag.amount(input_id) < removed or environment_modifier == 0.0:
                can_do = False

        for output_id, output_amount in process.outputs.items():
            compound = self._compound(output_id)
            bag._entry(output_id).price = 1.0
            added = output_amount * ratio * environment_modifier
            if not compound.is_environmental and (
                bag.amount(output_id) + added > bag.storage_space
                or environment_modifier == 0.0
            ):
                can_do = False

        if not can_do:
            return

        for input_id, input_amount in process.inputs.items():
            if self._compound(input_id).is_environmental:
                continue
            removed = input_amount * ratio * environment_modifier
            data = bag._entry(input_id)
            if data.amount >= removed:
                data.amount -= removed

        for output_id, output_amount in process.outputs.items():
            if self._compound(output_id).is_environmental:
                continue
            bag._entry(output_id).amount += output_amount * ratio * environment_modifier