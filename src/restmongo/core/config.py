"""Configuration models for restmongo."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import log


class ParamNames(BaseModel):
    """Names of the raw request parameters each component reads."""

    fields: str = "fields"
    filtering: str = "filtering"
    sort: str = "sort"
    direction: str = "direction"
    search: str = "search"
    limit: str = "limit"
    offset: str = "offset"


class RestMongoConfig(BaseSettings):
    """
    Project-level configuration.

    Values not passed explicitly are read from the environment, e.g.
    RESTMONGO_PROJECT_NAME, RESTMONGO_DEFAULT_LIMIT, RESTMONGO_LOG_LEVEL and
    RESTMONGO_PARAMS__LIMIT to rename the `limit` request parameter.
    """

    model_config = SettingsConfigDict(
        env_prefix="RESTMONGO_", env_nested_delimiter="__", extra="ignore"
    )

    project_name: str = "restmongo"
    version: str = "0.1.0"
    params: ParamNames = Field(default_factory=ParamNames)
    default_limit: Optional[int] = None
    log_level: str = "INFO"

    @field_validator("default_limit")
    @classmethod
    def _check_default_limit(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("default_limit must be non-negative")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"Unknown log level '{value}'")
        return value

    def configure_logging(self) -> None:
        log.set_level(self.log_level)
