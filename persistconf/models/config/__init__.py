"""This sub-package contains all the pydantic models for the service config file.

Modules:
    common: Common types used in multiple places
    consistency: Pydantic models for the cassandra consistency settings and their cascade
    datastore: Pydantic models for a single sql or cassandra datastore
    log: Pydantic model for the log section of the config file
    persistence: Pydantic model for the persistence section of the config file
    yaml: Top-level pydantic model for the config file
"""

from .consistency import ConsistencySettings, ConsistencyTree
from .datastore import CassandraConfig, DataStoreConfig, SQLConfig, TLSConfig
from .log import LogConfig
from .persistence import PersistenceConfig
from .yaml import MainConfig

__all__ = [
    "CassandraConfig",
    "ConsistencySettings",
    "ConsistencyTree",
    "DataStoreConfig",
    "LogConfig",
    "MainConfig",
    "PersistenceConfig",
    "SQLConfig",
    "TLSConfig",
]
