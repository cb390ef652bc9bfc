import logging
from typing import Any

import pytest

from persistconf.logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logger():
    """The CLI tests attach handlers to the persistconf logger, this puts it back the way pytest expects it."""
    yield
    pc_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(pc_logger.handlers):
        pc_logger.removeHandler(handler)
        handler.close()
    pc_logger.propagate = True
    pc_logger.setLevel(logging.NOTSET)


@pytest.fixture
def cassandra_raw() -> dict[str, Any]:
    return {
        "defaultStore": "primary",
        "visibilityStore": "primary",
        "dataStores": {"primary": {"cassandra": {}}},
    }


@pytest.fixture
def sql_raw() -> dict[str, Any]:
    return {
        "defaultStore": "default",
        "visibilityStore": "visibility",
        "dataStores": {
            "default": {"sql": {"pluginName": "mysql8", "databaseName": "service"}},
            "visibility": {"sql": {"pluginName": "mysql8", "databaseName": "visibility", "numShards": 4}},
        },
    }


@pytest.fixture
def mixed_raw() -> dict[str, Any]:
    return {
        "defaultStore": "primary",
        "visibilityStore": "visibility",
        "advancedVisibilityStore": "es-visibility",
        "dataStores": {
            "primary": {
                "cassandra": {
                    "hosts": "10.0.0.1, 10.0.0.2",
                    "keyspace": "service",
                    "consistency": {
                        "default": {"consistency": "QUORUM"},
                        "history": {"consistency": "ONE"},
                        "task": {"serialConsistency": "serial"},
                    },
                }
            },
            "visibility": {"sql": {"pluginName": "postgres12"}},
        },
    }
