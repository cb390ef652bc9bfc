import logging
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ... import exceptions as pce
from .common import StoreType
from .datastore import DataStoreConfig

logger = logging.getLogger("PersistConf._persistence")


class PersistenceConfig(BaseModel):
    """Which datastores the service uses and how each of them is configured.

    A config fresh from ``model_validate`` may still have holes in it. Call :meth:`resolve` before using it to open
    any connections.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    default_store: str = Field(alias="defaultStore")
    visibility_store: str = Field(alias="visibilityStore")
    advanced_visibility_store: str = Field(default="", alias="advancedVisibilityStore")
    """Only the presence of a name matters here, it turns on advanced visibility"""
    data_stores: dict[str, DataStoreConfig] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("dataStores", "datastores", "data_stores"),
        serialization_alias="dataStores",
    )

    @field_validator("advanced_visibility_store", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any):
        return "" if v is None else v

    @field_validator("data_stores", mode="before")
    @classmethod
    def empty_data_stores(cls, v: Any):
        if isinstance(v, dict):
            return {name: cfg if cfg is not None else {} for name, cfg in v.items()}
        return {} if v is None else v

    @property
    def required_stores(self) -> dict[str, str]:
        """Role to datastore name, for the stores that always have to be there"""
        return {"default": self.default_store, "visibility": self.visibility_store}

    @property
    def has_advanced_visibility(self) -> bool:
        return len(self.advanced_visibility_store) != 0

    @property
    def is_resolved(self) -> bool:
        try:
            return self.resolve() == self
        except pce.PersistenceConfigError:
            return False

    def get_data_store(self, role: str, store_name: str) -> DataStoreConfig:
        try:
            return self.data_stores[store_name]
        except KeyError:
            raise pce.MissingDataStore(role, store_name) from None

    def default_store_type(self) -> StoreType:
        """The backend used by the default store.

        This checks the store again instead of trusting that :meth:`resolve` has been called.
        """
        ds = self.get_data_store("default", self.default_store)
        return ds.check_backend(self.default_store)

    def resolve(self) -> "PersistenceConfig":
        """Check the required datastores and fill in every default they're missing.

        Returns:
            A new, fully resolved config. This one is left untouched. Datastores that aren't required by any role are
            copied over as they are.

        Raises:
            MissingDataStore: a required store isn't in ``data_stores``
            NoStoreBackend: a required store has neither sql nor cassandra config
            MultipleStoreBackends: a required store has both
            InvalidDataStore: a consistency level in a required cassandra store isn't valid
        """
        data_stores = dict(self.data_stores)
        for role, store_name in self.required_stores.items():
            ds = self.get_data_store(role, store_name)
            data_stores[store_name] = ds.resolve(store_name)

        logger.debug("Resolved datastores: %s", ", ".join(sorted(set(self.required_stores.values()))))
        return self.model_copy(update={"data_stores": data_stores})
