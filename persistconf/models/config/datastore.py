import logging
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ... import exceptions as pce
from .common import STORE_TYPE_CASSANDRA, STORE_TYPE_SQL, CoercedPath, StoreType, TimeType
from .consistency import ConsistencyTree

logger = logging.getLogger("PersistConf._datastore")


class TLSConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    enabled: bool = False
    cert_file: CoercedPath | None = Field(default=None, alias="certFile")
    key_file: CoercedPath | None = Field(default=None, alias="keyFile")
    ca_file: CoercedPath | None = Field(default=None, alias="caFile")
    server_name: str | None = Field(default=None, alias="serverName")
    enable_host_verification: bool = Field(default=False, alias="enableHostVerification")


class SQLConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    user: str = ""
    password: SecretStr | None = None
    plugin_name: str = Field(default="", alias="pluginName")
    database_name: str = Field(default="", alias="databaseName")
    connect_addr: str = Field(default="", alias="connectAddr")
    connect_protocol: str = Field(default="tcp", alias="connectProtocol")
    connect_attributes: dict[str, str] = Field(default_factory=dict, alias="connectAttributes")
    max_conns: int = Field(default=0, ge=0, alias="maxConns")
    max_idle_conns: int = Field(default=0, ge=0, alias="maxIdleConns")
    max_conn_lifetime: TimeType = Field(default_factory=timedelta, alias="maxConnLifetime")
    num_shards: int = Field(default=0, ge=0, alias="numShards")
    """Number of storage shards. 0 means unset and resolves to 1"""
    tls: TLSConfig | None = None

    def resolve(self) -> "SQLConfig":
        if self.num_shards == 0:
            return self.model_copy(update={"num_shards": 1})
        return self


class CassandraConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    hosts: str = ""
    """Comma separated list of contact points"""
    port: int = 9042
    user: str = ""
    password: SecretStr | None = None
    keyspace: str = ""
    datacenter: str = ""
    max_conns: int = Field(default=0, ge=0, alias="maxConns")
    connect_timeout: TimeType = Field(default_factory=timedelta, alias="connectTimeout")
    tls: TLSConfig | None = None
    consistency: ConsistencyTree | None = None

    @property
    def host_list(self) -> list[str]:
        return [h.strip() for h in self.hosts.split(",") if h.strip()]

    def resolve(self) -> "CassandraConfig":
        tree = self.consistency if self.consistency is not None else ConsistencyTree()
        return self.model_copy(update={"consistency": tree.resolve()})


class DataStoreConfig(BaseModel):
    """Config for one named datastore. Exactly one of ``sql`` or ``cassandra`` has to be given."""

    model_config = ConfigDict(frozen=True, extra="allow")

    sql: SQLConfig | None = None
    """``None`` means absent, an empty mapping selects sql with all defaults"""
    cassandra: CassandraConfig | None = None

    def check_backend(self, store_name: str) -> StoreType:
        """Work out which backend this store uses.

        Raises:
            NoStoreBackend: if neither backend is configured
            MultipleStoreBackends: if both are
        """
        match (self.sql, self.cassandra):
            case (None, None):
                raise pce.NoStoreBackend(store_name)
            case (SQLConfig(), CassandraConfig()):
                raise pce.MultipleStoreBackends(store_name)
            case (SQLConfig(), None):
                return STORE_TYPE_SQL
            case _:
                return STORE_TYPE_CASSANDRA

    def resolve(self, store_name: str) -> "DataStoreConfig":
        match self.check_backend(store_name):
            case "sql":
                logger.debug("Resolving sql datastore '%s'", store_name)
                return self.model_copy(update={"sql": self.sql.resolve()})
            case "cassandra":
                logger.debug("Resolving cassandra datastore '%s'", store_name)
                try:
                    cassandra = self.cassandra.resolve()
                except pce.InvalidConsistencySettings as e:
                    raise pce.InvalidDataStore(store_name) from e
                return self.model_copy(update={"cassandra": cassandra})
