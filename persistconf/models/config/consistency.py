"""Pydantic models for the cassandra consistency settings and the cascade that resolves them.

Resolution order for every field is category -> ``default`` -> global default. Resolved trees are new objects, the
models they came from are never changed.
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ... import exceptions as pce
from ...consistency import parse_consistency, parse_serial_consistency

logger = logging.getLogger("PersistConf._consistency")

DEFAULT_CONSISTENCY = "LOCAL_QUORUM"
DEFAULT_SERIAL_CONSISTENCY = "LOCAL_SERIAL"

CATEGORIES = (
    "cluster_metadata",
    "history",
    "namespace_metadata",
    "shard",
    "task",
    "queue",
    "visibility",
    "execution",
)
"""Operation categories that can override the default settings"""


class ConsistencySettings(BaseModel):
    """Consistency and serial consistency for one operation category. Empty strings mean "inherit"."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    consistency: str = ""
    serial_consistency: str = Field(default="", alias="serialConsistency")

    @field_validator("consistency", "serial_consistency", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any):
        return "" if v is None else v

    @property
    def is_complete(self) -> bool:
        return bool(self.consistency and self.serial_consistency)

    def fill(self, fallback: "ConsistencySettings") -> "ConsistencySettings":
        """Return a copy with every empty field taken from ``fallback``. Fields that are already set are kept."""
        return self.model_copy(
            update={
                "consistency": self.consistency or fallback.consistency,
                "serial_consistency": self.serial_consistency or fallback.serial_consistency,
            }
        )

    def check(self):
        """Raises BadConsistency or BadSerialConsistency if either level isn't recognized."""
        parse_consistency(self.consistency)
        parse_serial_consistency(self.serial_consistency)

    def get_consistency(self) -> int:
        """The driver's value for the consistency level. Only meaningful once the settings are resolved."""
        return parse_consistency(self.consistency)

    def get_serial_consistency(self) -> int:
        """The driver's value for the serial consistency level. Only meaningful once the settings are resolved."""
        return parse_serial_consistency(self.serial_consistency)


def default_settings() -> ConsistencySettings:
    """The global defaults that the ``default`` slot falls back to."""
    return ConsistencySettings(
        consistency=DEFAULT_CONSISTENCY,
        serial_consistency=DEFAULT_SERIAL_CONSISTENCY,
    )


def fill_settings(settings: ConsistencySettings | None, fallback: ConsistencySettings) -> ConsistencySettings:
    """Resolve one slot against its fallback. A missing slot gets its own copy of the fallback."""
    if settings is None:
        return fallback.model_copy()
    return settings.fill(fallback)


class ConsistencyTree(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    default: ConsistencySettings | None = None
    cluster_metadata: ConsistencySettings | None = Field(default=None, alias="clusterMetadata")
    history: ConsistencySettings | None = None
    namespace_metadata: ConsistencySettings | None = Field(default=None, alias="namespaceMetadata")
    shard: ConsistencySettings | None = None
    task: ConsistencySettings | None = None
    queue: ConsistencySettings | None = None
    visibility: ConsistencySettings | None = None
    execution: ConsistencySettings | None = None

    @classmethod
    def config_key(cls, slot: str) -> str:
        """Name of a slot as it's written in the config file"""
        return cls.model_fields[slot].alias or slot

    def slots(self) -> dict[str, ConsistencySettings | None]:
        """All nine slots, ``default`` first."""
        return {slot: getattr(self, slot) for slot in ("default", *CATEGORIES)}

    @property
    def is_resolved(self) -> bool:
        return all(s is not None and s.is_complete for s in self.slots().values())

    def resolve(self) -> "ConsistencyTree":
        """Fill every slot from the cascade and check the result.

        Raises:
            InvalidConsistencySettings: for the first slot with a level that isn't recognized. The cause is the
                BadConsistency or BadSerialConsistency error.
        """
        default = self._resolve_slot("default", default_settings())
        resolved = {"default": default}
        for category in CATEGORIES:
            if getattr(self, category) is None:
                logger.debug("Consistency settings for '%s' inherited from default", self.config_key(category))
            resolved[category] = self._resolve_slot(category, default)

        return self.model_copy(update=resolved)

    def _resolve_slot(self, slot: str, fallback: ConsistencySettings) -> ConsistencySettings:
        settings = fill_settings(getattr(self, slot), fallback)
        try:
            settings.check()
        except pce.PersistenceConfigError as e:
            raise pce.InvalidConsistencySettings(self.config_key(slot)) from e
        return settings
