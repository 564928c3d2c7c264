import uuid

import pytest

from aurorae.reproduction import ReproductionEngine


@pytest.fixture
def engine(tmp_path):
    return ReproductionEngine.load(tmp_path)


def test_spawn_integration_case(engine):
    first_clone = engine.spawn_instance("Clone V1", ["autonomy", "dream"])
    assert first_clone.id != uuid.UUID(int=0)
    if len(engine.get_active_instances()) < 5:
        nxt = engine.spawn_instance("AutoReproduction", ["economy", "intelligence"])
        assert nxt.id != uuid.UUID(int=0)
    assert len(engine.get_active_instances()) > 0


def test_generations_and_parents(engine):
    first = engine.spawn_instance("Clone V1", ["autonomy", "dream"])
    second = engine.spawn_instance("Clone V2", ["economy"])
    assert first.generation == 1
    assert first.parent_id is None
    assert second.generation == 2
    assert second.parent_id == first.id
    assert second.inherited_modules == ["economy"]


def test_state_is_persisted(tmp_path, engine):
    engine.spawn_instance("Clone V1", ["autonomy", "dream"])
    engine.spawn_instance("Clone V2", ["economy"])
    reloaded = ReproductionEngine.load(tmp_path)
    assert reloaded.children == engine.children


def test_destroy_instance(tmp_path, engine):
    first = engine.spawn_instance("a", [])
    second = engine.spawn_instance("b", [])
    engine.destroy_instance(first.id)
    assert [c.id for c in engine.children] == [second.id]
    assert [c.id for c in ReproductionEngine.load(tmp_path).children] == [second.id]


def test_active_instances_excludes_inactive(engine):
    first = engine.spawn_instance("a", [])
    second = engine.spawn_instance("b", [])
    first.is_active = False
    assert engine.get_active_instances() == [second]


def test_generation_lineage(engine):
    first = engine.spawn_instance("a", [])
    second = engine.spawn_instance("b", [])
    engine.destroy_instance(first.id)
    third = engine.spawn_instance("c", [])
    assert engine.get_generation_lineage() == {2: [second.id], 3: [third.id]}


def test_load_missing_reports_to_stderr(tmp_path, capsys):
    loaded = ReproductionEngine.load(tmp_path / "absent")
    assert loaded.children == []
    assert "Erreur lors du chargement des instances" in capsys.readouterr().err


def test_load_corrupt_file_gives_empty(tmp_path):
    (tmp_path / "instances.json").write_text("[]", encoding="utf-8")
    assert ReproductionEngine.load(tmp_path).children == []


def test_list_instances_prints_each(engine, capsys):
    engine.spawn_instance("Clone V1", ["autonomy", "dream"])
    capsys.readouterr()
    engine.list_instances()
    out = capsys.readouterr().out
    assert "Instances actives : 1" in out
    assert "But: Clone V1" in out