from pydantic import BaseModel, Field

from .common import CoercedPath, LogLevel


class LogConfig(BaseModel):
    filename: CoercedPath = "STDOUT"
    level: LogLevel = "INFO"
    log_generations: int = 3
    log_size: int = 1000000
    format_: str = Field(default="{asctime} {levelname} {modulename}: {message}", alias="format")
    date_format: str = "%Y-%m-%d %H:%M:%S"
