from types import SimpleNamespace

import pytest

from thrive.physics_materials import (
    CollisionHandlers,
    ContactPoint,
    MaterialPair,
    PhysicalMaterial,
    PhysicsMaterialManager,
    ScriptRunError,
    create_physics_materials,
)


class FakeScripts:
    def __init__(self, result=None, fail=False):
        self.calls = []
        self.result = result
        self.fail = fail

    def execute(self, function_name, *args):
        self.calls.append((function_name, args))
        if self.fail:
            raise ScriptRunError(function_name)
        return self.result


def body(entity, shape="shape"):
    return SimpleNamespace(owning_entity=entity, shape=shape)


def world_with(microbes):
    return SimpleNamespace(
        script_component_holder=lambda name: microbes if name == "MicrobeComponent" else None
    )


def test_materials_created_with_source_names_and_ids():
    manager = create_physics_materials(FakeScripts())
    assert {name: m.id for name, m in manager.materials.items()} == {
        "cell": 1,
        "floatingOrganelle": 2,
        "agentCollision": 3,
        "engulfableMaterial": 4,
        "chunkDamageMaterial": 5,
    }
    assert "pilus" not in manager


def test_pairs_have_expected_callbacks():
    manager = create_physics_materials(FakeScripts())
    agent_pair = manager.pair_for("agentCollision", "cell")
    assert agent_pair.aabb.__func__ is CollisionHandlers.agent_aabb_hit
    assert agent_pair.contact.__func__ is CollisionHandlers.agent_collided
    cell_pair = manager.pair_for("cell", "cell")
    assert cell_pair.aabb.__func__ is CollisionHandlers.cell_on_cell_aabb_hit
    assert cell_pair.contact is None
    assert cell_pair.manifold.__func__ is CollisionHandlers.cell_on_manifold
    organelle_pair = manager.pair_for("cell", "floatingOrganelle")
    assert organelle_pair.aabb is None
    assert organelle_pair.contact.__func__ is CollisionHandlers.cell_hit_floating_organelle


def test_unpaired_materials_have_no_pair():
    manager = create_physics_materials(FakeScripts())
    assert manager.pair_for("agentCollision", "engulfableMaterial") is None


def test_manager_rejects_duplicates_and_unknown_names():
    manager = PhysicsMaterialManager()
    manager.add(PhysicalMaterial("a", 1))
    with pytest.raises(ValueError):
        manager.add(PhysicalMaterial("a", 2))
    with pytest.raises(ValueError):
        manager.add(PhysicalMaterial("b", 1))
    with pytest.raises(KeyError):
        manager.get("missing")
    assert manager.get("a").id == 1


def test_set_callbacks_returns_pair():
    a = PhysicalMaterial("a", 1)
    b = PhysicalMaterial("b", 2)
    pair = a.form_pair_with(b)
    assert isinstance(pair, MaterialPair)
    assert pair.set_callbacks(None, print) is pair
    assert a.pairs["b"].contact is print


@pytest.mark.parametrize(
    "method, script",
    [
        ("cell_hit_floating_organelle", "cellHitFloatingOrganelle"),
        ("cell_hit_engulfable", "cellHitEngulfable"),
        ("cell_hit_damage_chunk", "cellHitDamageChunk"),
        ("agent_collided", "cellHitAgent"),
    ],
)
def test_contact_callbacks_call_scripts(method, script):
    scripts = FakeScripts()
    world = object()
    getattr(CollisionHandlers(scripts), method)(world, body(7), body(9))
    assert scripts.calls == [(script, (world, 7, 9))]


def test_contact_callback_failure_is_swallowed():
    scripts = FakeScripts(fail=True)
    assert CollisionHandlers(scripts).cell_hit_engulfable(None, body(1), body(2)) is None
    assert len(scripts.calls) == 1


@pytest.mark.parametrize(
    "method, script",
    [("cell_on_cell_aabb_hit", "beingEngulfed"), ("agent_aabb_hit", "hitAgent")],
)
def test_aabb_callbacks_return_script_value(method, script):
    scripts = FakeScripts(result=False)
    handlers = CollisionHandlers(scripts)
    assert getattr(handlers, method)(None, body(1), body(2)) is False
    assert scripts.calls[0][0] == script
    failing = CollisionHandlers(FakeScripts(fail=True))
    assert getattr(failing, method)(None, body(1), body(2)) is True


def test_manifold_reports_penetrating_contacts():
    scripts = FakeScripts(result=True)
    world = world_with({1: "m1", 2: "m2"})
    contacts = [ContactPoint(0.5), ContactPoint(-0.25, 3, 4), ContactPoint(-0.5, 5, 6)]
    CollisionHandlers(scripts).cell_on_manifold(world, body(1, "s1"), body(2, "s2"), contacts)
    assert len(scripts.calls) == 2
    name, args = scripts.calls[0]
    assert name == "cellOnCellActualContact"
    assert args == (world, "s1", "m1", "s2", "m2", 3, 4, 0.25, False)
    assert scripts.calls[1][1][-1] is True
    assert scripts.calls[1][1][-2] == 0.5


def test_manifold_stops_without_microbe_component():
    scripts = FakeScripts(result=True)
    world = world_with({1: "m1"})
    CollisionHandlers(scripts).cell_on_manifold(
        world, body(1), body(2), [ContactPoint(-1.0)]
    )
    assert scripts.calls == []


def test_manifold_breaks_on_script_failure():
    scripts = FakeScripts(fail=True)
    world = world_with({1: "m1", 2: "m2"})
    CollisionHandlers(scripts).cell_on_manifold(
        world, body(1), body(2), [ContactPoint(-1.0), ContactPoint(-2.0)]
    )
    assert len(scripts.calls) == 1


def test_manifold_requires_shapes_and_holder():
    handlers = CollisionHandlers(FakeScripts())
    with pytest.raises(ValueError):
        handlers.cell_on_manifold(world_with({}), body(1, None), body(2), [])
    no_holder = SimpleNamespace(script_component_holder=lambda name: None)
    with pytest.raises(ValueError):
        handlers.cell_on_manifold(no_holder, body(1), body(2), [])