import logging

import pytest
from pydantic import ValidationError

from persistconf import exceptions as pce
from persistconf.models.config.consistency import CATEGORIES, ConsistencySettings, ConsistencyTree


def test_empty_tree_uses_global_defaults() -> None:
    tree = ConsistencyTree().resolve()
    for slot, settings in tree.slots().items():
        assert settings.consistency == "LOCAL_QUORUM", slot
        assert settings.serial_consistency == "LOCAL_SERIAL", slot
    assert tree.is_resolved


def test_partial_default() -> None:
    tree = ConsistencyTree.model_validate({"default": {"serialConsistency": "SERIAL"}}).resolve()
    assert tree.default.consistency == "LOCAL_QUORUM"
    assert tree.default.serial_consistency == "SERIAL"
    assert tree.shard.serial_consistency == "SERIAL"


def test_categories_inherit_from_default() -> None:
    tree = ConsistencyTree.model_validate(
        {
            "default": {"consistency": "QUORUM"},
            "history": {},
            "execution": {"consistency": "ONE"},
        }
    ).resolve()

    assert tree.history.consistency == "QUORUM"
    assert tree.history.serial_consistency == "LOCAL_SERIAL"
    assert tree.execution.consistency == "ONE"
    assert tree.execution.serial_consistency == "LOCAL_SERIAL"
    assert tree.queue.consistency == "QUORUM"


def test_explicit_category_is_kept() -> None:
    tree = ConsistencyTree.model_validate(
        {
            "default": {"consistency": "QUORUM"},
            "history": {"consistency": "ONE"},
        }
    ).resolve()
    assert tree.history.consistency == "ONE"


def test_missing_categories_are_not_shared() -> None:
    tree = ConsistencyTree().resolve()
    settings = [tree.default, *(getattr(tree, category) for category in CATEGORIES)]
    assert len({id(s) for s in settings}) == len(settings)


def test_resolve_leaves_input_alone() -> None:
    raw = {"default": {"consistency": "QUORUM"}, "clusterMetadata": {"serialConsistency": "serial"}}
    tree = ConsistencyTree.model_validate(raw)
    tree.resolve()

    assert tree.history is None
    assert tree.cluster_metadata == ConsistencySettings(serial_consistency="serial")
    assert raw == {"default": {"consistency": "QUORUM"}, "clusterMetadata": {"serialConsistency": "serial"}}
    assert not tree.is_resolved


def test_resolve_is_idempotent() -> None:
    tree = ConsistencyTree.model_validate({"default": {"consistency": "ALL"}, "task": {"consistency": "ONE"}})
    once = tree.resolve()
    twice = once.resolve()
    assert once == twice


@pytest.mark.parametrize("slot", ["default", *CATEGORIES])
def test_bad_consistency_anywhere(slot: str) -> None:
    tree = ConsistencyTree.model_validate({slot: {"consistency": "NOT_A_LEVEL"}})
    with pytest.raises(pce.InvalidConsistencySettings) as exc_info:
        tree.resolve()

    assert exc_info.value.category == ConsistencyTree.config_key(slot)
    assert isinstance(exc_info.value.__cause__, pce.BadConsistency)
    assert "bad cassandra consistency" in str(exc_info.value)


def test_bad_default_is_reported_before_categories() -> None:
    tree = ConsistencyTree.model_validate(
        {
            "default": {"serialConsistency": "QUORUM"},
            "history": {"consistency": "NOT_A_LEVEL"},
        }
    )
    with pytest.raises(pce.InvalidConsistencySettings) as exc_info:
        tree.resolve()

    assert exc_info.value.category == "default"
    assert isinstance(exc_info.value.__cause__, pce.BadSerialConsistency)


def test_category_names_in_errors() -> None:
    tree = ConsistencyTree.model_validate({"namespaceMetadata": {"serialConsistency": "nope"}})
    with pytest.raises(pce.InvalidConsistencySettings) as exc_info:
        tree.resolve()
    assert str(exc_info.value) == (
        "consistency settings 'namespaceMetadata': "
        "bad cassandra serial consistency: invalid serial consistency 'nope'"
    )


def test_mixed_case_serial_consistency() -> None:
    tree = ConsistencyTree.model_validate(
        {
            "default": {"serialConsistency": "local_serial"},
            "task": {"serialConsistency": "Local_Serial"},
        }
    ).resolve()
    assert tree.task.get_serial_consistency() == tree.default.get_serial_consistency()
    assert tree.queue.serial_consistency == "local_serial"


def test_inherited_slots_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="PersistConf"):
        ConsistencyTree.model_validate({"history": {}}).resolve()

    assert "'history'" not in caplog.text
    assert "Consistency settings for 'clusterMetadata' inherited from default" in caplog.text


@pytest.mark.parametrize(
    "raw",
    [
        {"histroy": {"consistency": "ONE"}},
        {"default": {"consistancy": "ALL"}},
        {"history_store": {}},
    ],
)
def test_misspelled_keys_are_rejected(raw: dict) -> None:
    with pytest.raises(ValidationError) as exc_info:
        ConsistencyTree.model_validate(raw)
    assert exc_info.value.errors()[0]["type"] == "extra_forbidden"


def test_misspelled_settings_are_rejected() -> None:
    with pytest.raises(ValidationError):
        ConsistencySettings(consistency="ONE", serial="SERIAL")
