from typing import Any

import pytest

from persistconf import exceptions as pce
from persistconf.models.config import PersistenceConfig


def test_store_type_of_default_store(mixed_raw: dict[str, Any]) -> None:
    cfg = PersistenceConfig.model_validate(mixed_raw)
    assert cfg.default_store_type() == "cassandra"

    mixed_raw["defaultStore"] = "visibility"
    cfg = PersistenceConfig.model_validate(mixed_raw)
    assert cfg.default_store_type() == "sql"


def test_store_type_does_not_need_resolve(sql_raw: dict[str, Any]) -> None:
    cfg = PersistenceConfig.model_validate(sql_raw)
    assert cfg.default_store_type() == cfg.resolve().default_store_type() == "sql"


def test_store_type_fails_closed() -> None:
    both = PersistenceConfig.model_validate(
        {"defaultStore": "a", "visibilityStore": "a", "dataStores": {"a": {"sql": {}, "cassandra": {}}}}
    )
    with pytest.raises(pce.MultipleStoreBackends):
        both.default_store_type()

    neither = PersistenceConfig.model_validate(
        {"defaultStore": "a", "visibilityStore": "a", "dataStores": {"a": {}}}
    )
    with pytest.raises(pce.NoStoreBackend):
        neither.default_store_type()

    missing = PersistenceConfig.model_validate({"defaultStore": "a", "visibilityStore": "a"})
    with pytest.raises(pce.MissingDataStore):
        missing.default_store_type()
