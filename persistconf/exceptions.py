"""
Exceptions used by persistconf

"""
import traceback
from abc import ABC
from dataclasses import dataclass
from logging import Logger
from pathlib import Path

from pydantic import ValidationError


@dataclass
class PersistConfException(Exception, ABC):
    """Abstract base class for all persistconf exceptions to inherit from"""


def user_exception_block(logger: Logger, exception: Exception, header: str | None = None):
    """Log a user-friendly block of text for an exception, walking the whole chain of causes."""
    width = 75
    spacing = 4
    inset = 5
    if header is not None:
        header = f'{"=" * inset}  {header}  {"=" * (width - spacing - inset - len(header))}'
    else:
        header = '=' * width
    logger.error(header)

    chain = get_exception_cause_chain(exception)

    for i, exc in enumerate(chain):
        indent = ' ' * i * 2

        match exc:
            case ValidationError():
                for error in exc.errors():
                    loc = '.'.join(str(part) for part in error['loc'])
                    logger.error(f"{indent}{loc}: {error['msg']}")
            case PersistConfException():
                for j, line in enumerate(str(exc).splitlines()):
                    if j == 0:
                        logger.error(f'{indent}{exc.__class__.__name__}: {line}')
                    else:
                        logger.error(f'{indent}  {line}')
            case OSError() | UnicodeDecodeError():
                logger.error(f'{indent}{exc.__class__.__name__}: {exc}')
            case _:
                logger.error(f'{indent}{exc.__class__.__name__}: {exc}')
                if tb := traceback.extract_tb(exc.__traceback__):
                    lines = (line for fl in tb.format() for line in fl.splitlines())
                    for line in lines:
                        logger.error(f'{indent}{line}')

    logger.error('=' * width)


def get_exception_cause_chain(exception: Exception, current_chain: list[Exception] | None = None) -> list[Exception]:
    current_chain = current_chain or list()
    current_chain.append(exception)
    if cause := exception.__cause__:
        return get_exception_cause_chain(cause, current_chain)
    else:
        return current_chain


@dataclass
class ConfigReadFailure(PersistConfException):
    file: Path

    def __str__(self):
        return f"Failed to read configuration file '{self.file}'"


class PersistenceConfigError(PersistConfException):
    """Base class for errors found while resolving the persistence config."""


@dataclass
class MissingDataStore(PersistenceConfigError):
    role: str
    store_name: str

    def __str__(self):
        return f"persistence config: missing config for {self.role} datastore '{self.store_name}'"


@dataclass
class NoStoreBackend(PersistenceConfigError):
    store_name: str

    def __str__(self):
        return f"persistence config: datastore '{self.store_name}': must provide config for one of cassandra or sql stores"


@dataclass
class MultipleStoreBackends(PersistenceConfigError):
    store_name: str

    def __str__(self):
        return f"persistence config: datastore '{self.store_name}': only one of sql or cassandra can be specified"


@dataclass
class BadConsistency(PersistenceConfigError):
    value: str

    def __str__(self):
        return f"bad cassandra consistency: invalid consistency '{self.value}'"


@dataclass
class BadSerialConsistency(PersistenceConfigError):
    value: str

    def __str__(self):
        return f"bad cassandra serial consistency: invalid serial consistency '{self.value}'"


@dataclass
class InvalidConsistencySettings(PersistenceConfigError):
    category: str

    def __str__(self):
        res = f"consistency settings '{self.category}'"
        if self.__cause__ is not None:
            res += f': {self.__cause__}'
        return res


@dataclass
class InvalidDataStore(PersistenceConfigError):
    store_name: str

    def __str__(self):
        res = f"persistence config: datastore '{self.store_name}'"
        if self.__cause__ is not None:
            res += f': {self.__cause__}'
        return res
