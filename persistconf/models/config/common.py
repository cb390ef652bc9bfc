from datetime import timedelta
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, PlainSerializer

from ... import utils

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

StoreType = Literal["sql", "cassandra"]

STORE_TYPE_SQL: StoreType = "sql"
STORE_TYPE_CASSANDRA: StoreType = "cassandra"


def coerce_path(v: Any) -> Path | Literal["STDOUT", "STDERR"]:
    """Coerce a string or Path to a resolved Path."""
    match v:
        case Path():
            pass
        case "STDOUT" | "STDERR":
            return v
        case str():
            v = Path(v)
        case _:
            raise ValueError(f"Invalid type for path: {v}")
    return v.resolve() if not v.is_absolute() else v


CoercedPath = Annotated[Path | Literal["STDOUT", "STDERR"], BeforeValidator(coerce_path)]


TimeType = Annotated[
    timedelta,
    BeforeValidator(utils.parse_timedelta),
    PlainSerializer(lambda td: td.total_seconds()),
]
"""Durations given as seconds or as ``HH:MM:SS`` style strings"""
