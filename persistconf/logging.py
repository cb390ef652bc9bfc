import logging
import sys
from logging.handlers import RotatingFileHandler

from .models.config.log import LogConfig

LOGGER_NAME = "PersistConf"


class ModuleNameFormatter(logging.Formatter):

    """Logger formatter to add 'modulename' as an interpolatable field."""

    def format(self, record):
        #
        # Module loggers are named like PersistConf._persistence, so split the module out of the name
        #
        modulename = record.name
        if "." in record.name:
            name = record.name.split(".")[-1]
            if name.startswith("_"):
                modulename = name[1:]
        record.modulename = modulename
        return super().format(record)


class Logging:
    """Sets up the logger all the persistconf modules log through."""

    def __init__(self, config: LogConfig | None = None, log_level: str | None = None):
        self.config = config if config is not None else LogConfig()
        self.log_level = log_level or self.config.level

        self.formatter = ModuleNameFormatter(fmt=self.config.format_, datefmt=self.config.date_format, style="{")

        match self.config.filename:
            case "STDOUT":
                self.handler = logging.StreamHandler(stream=sys.stdout)
            case "STDERR":
                self.handler = logging.StreamHandler(stream=sys.stderr)
            case path:
                self.handler = RotatingFileHandler(
                    path, maxBytes=self.config.log_size, backupCount=self.config.log_generations,
                )
        self.handler.setFormatter(self.formatter)

        self.logger = logging.getLogger(LOGGER_NAME)
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
        self.logger.addHandler(self.handler)
        self.logger.setLevel(self.log_level)
        self.logger.propagate = False

    def get_child(self, name: str) -> logging.Logger:
        return self.logger.getChild(name)

    def dump_log_config(self):
        self.logger.debug(
            "Logging to %s at level %s",
            self.config.filename,
            self.log_level,
        )
