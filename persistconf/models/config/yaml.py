from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

from ... import utils
from .log import LogConfig
from .persistence import PersistenceConfig


class MainConfig(BaseModel):
    persistence: PersistenceConfig
    log: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def from_config_file(cls, file: str | Path):
        """Read and parse a config file. The persistence section still has to be resolved afterwards."""
        config = utils.read_config_file(file)
        return cls.model_validate(config)

    def resolve(self) -> "MainConfig":
        return self.model_copy(update={"persistence": self.persistence.resolve()})

    @model_validator(mode="before")
    @classmethod
    def validate_main_cfg(cls, data: Any) -> Any:
        # replace None values with empty dictionaries
        if isinstance(data, dict):
            data = {key: val if val is not None else {} for key, val in data.items()}
        return data
