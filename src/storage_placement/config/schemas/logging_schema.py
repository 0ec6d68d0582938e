"""Logging configuration schema."""

from typing import Literal

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level")
    destination: Literal["stdout", "file", "both"] = Field(
        "stdout", description="Where to send logs"
    )
    log_dir: str = Field("./logs", description="Directory for log files")
    filename: str = Field("storage_placement.log", description="Log file name")
